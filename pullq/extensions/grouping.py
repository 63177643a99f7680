from __future__ import annotations
import logging
import typing
from ..errors import require
from ..iteration import binary, open_triple
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def group_by_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    """builds the whole lookup on the first pull, then streams its (key, group) pairs"""
    key_selector, element_selector, result_selector = context.args
    if context.phase == INITIAL:
        from ..functions import to_lookup
        lookup = to_lookup(RawIterator(context.step, context.upstream, cursor), key_selector, element_selector)
        logger.debug(f"grouped source into {lookup!r}")
        context.child = open_triple(lookup)
        context.phase = RUNNING
    elif context.phase != RUNNING:
        return END

    key, group = context.child.move()
    if key is None:
        context.phase = EXHAUSTED
        return END
    if result_selector is None:
        return key, group
    return key, result_selector(key, group)


class _GroupingOperations(Generic[T]):
    def group_by(self: 'Enumerable[T]', key_selector: KeySelector[T, K],
                 element_selector: Optional[Callable[[T, Cursor], U]] = None) -> 'Enumerable[Grouping[K, U]]':
        """
        groups elements by key. the source is fully drained on the first pull.
        yields one Grouping per key (the cursor is the key), keys in first-appearance order.
        """
        require(key_selector, 'key_selector')
        return self._chain(group_by_step, binary(key_selector), binary(element_selector), None)

    def group_by_result(self: 'Enumerable[T]', key_selector: KeySelector[T, K],
                        element_selector: Optional[Callable[[T, Cursor], U]],
                        result_selector: Callable[[K, Grouping[K, U]], V]) -> 'Enumerable[V]':
        """group_by, with each (key, group) pair projected by result_selector"""
        require(key_selector, 'key_selector')
        require(result_selector, 'result_selector')
        return self._chain(group_by_step, binary(key_selector), binary(element_selector), result_selector)
