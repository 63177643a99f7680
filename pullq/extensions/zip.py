from __future__ import annotations
import typing
from ..errors import require
from ..iteration import initialise, open_triple
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def zip_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    second, result_selector = context.args
    if context.phase == INITIAL:
        initialise(context)
        context.child = open_triple(second)
        context.phase = RUNNING
    elif context.phase != RUNNING:
        return END

    cursor, first_value = context.step(context.upstream, cursor)
    if cursor is not None:
        second_cursor, second_value = context.child.move()
        if second_cursor is not None:
            if result_selector is None:
                return cursor, (first_value, second_value)
            return cursor, result_selector(first_value, second_value)

    context.phase = EXHAUSTED
    return END


class _ZipOperations(Generic[T]):
    def zip(self: 'Enumerable[T]', second: Iterable[U],
            result_selector: Optional[Callable[[T, U], V]] = None) -> 'Enumerable[V]':
        """pairs elements of both sequences in lockstep, stopping at the shorter one"""
        require(second, 'second')
        return self._chain(zip_step, second, result_selector)
