import typing
from itertools import count as _count
from .types import *
from .errors import require, ArgumentError
from .iteration import resolve

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable


def create(source: Any) -> 'Enumerable[Any]':
    """
    create an enumerable from any supported source: a list or other sequence, a mapping,
    another enumerable, a RawIterator, or any python iterable. nothing is iterated.
    """
    from .enumerable import Enumerable
    step, context_factory, cursor = resolve(source)
    return Enumerable(step, cursor, context_factory)


def create_with(obj: Any, iterator: Callable[[Any], Tuple[StepFunction, Any, Cursor]]) -> 'Enumerable[Any]':
    """create an enumerable from obj using a custom iterator(obj) -> (step, context, cursor)"""
    from .enumerable import Enumerable
    require(iterator, 'iterator')
    step, context, cursor = iterator(obj)
    return Enumerable(step, cursor, lambda: context)


def from_triple(step: StepFunction, context_factory: Any = None, cursor: Cursor = None) -> 'Enumerable[Any]':
    """
    create an enumerable from a bare step function. a callable context is treated as
    a factory and called once per traversal, anything else is shared by every traversal.
    """
    require(step, 'step')
    factory = context_factory if callable(context_factory) else (lambda: context_factory)
    return create(RawIterator(step, factory, cursor))


def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    return create(range(start, start + count))


def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    if count < 0:
        raise ArgumentError("count cannot be negative")
    return create(RawIterator(_repeat_step, lambda: (item, count), -1))


def _repeat_step(context: Tuple[Any, int], cursor: int) -> Tuple[Optional[int], Any]:
    item, count = context
    index = cursor + 1
    return (index, item) if index < count else END


def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    return create(())


def natural_numbers(start: int = 0) -> 'Enumerable[int]':
    """an unbounded sequence start, start + 1, ... - pair it with take() or zip()"""
    return create(RawIterator(_count_step, lambda: _count(start), -1))


def _count_step(context: typing.Iterator[int], cursor: int) -> Tuple[int, int]:
    return cursor + 1, next(context)


# --- aliases ---
from_iterable = create
P = create
