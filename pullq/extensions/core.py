from __future__ import annotations
import logging
import typing
from ..config import config
from ..errors import require, ArgumentError, InvariantViolation, InvalidChainError, SelectorTypeError
from ..iteration import array_step, begin, binary, initialise, is_container, open_triple, values
from ..sorting import sort_buffer
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable

logger = logging.getLogger(__name__)


# --- step functions ---

def where_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    if not begin(context):
        return END
    step, upstream = context.step, context.upstream
    predicate, = context.args
    while True:
        cursor, value = step(upstream, cursor)
        if cursor is None:
            context.phase = EXHAUSTED
            return END
        if predicate(value, cursor):
            return cursor, value


def map_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    if not begin(context):
        return END
    cursor, value = context.step(context.upstream, cursor)
    if cursor is None:
        context.phase = EXHAUSTED
        return END
    selector, = context.args
    position = context.position + 1
    value = selector(value, position)
    if value is None and config.reject_null_selection:
        raise InvariantViolation("selected value must be non-none")
    context.position = position
    return cursor, value


def flat_map_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    """alternates between acquiring the next nested source and draining it"""
    phase = context.phase
    if phase == EXHAUSTED:
        return END
    if phase == INITIAL:
        initialise(context)
        context.position = 1
        context.parent = cursor
        phase = context.phase = ACQUIRE

    while True:
        if phase == DRAIN:
            cursor, value = context.child.move()
            if cursor is not None:
                return cursor, value
            phase = context.phase = ACQUIRE

        parent, value = context.step(context.upstream, context.parent)
        if parent is None:
            context.phase = EXHAUSTED
            return END
        selector, = context.args
        nested = selector(value, context.position)
        if not is_container(nested):
            raise SelectorTypeError(f"selected object must be a container, got '{type(nested).__name__}'")
        context.position += 1
        context.parent = parent
        context.child = open_triple(nested)
        phase = context.phase = DRAIN


def concat_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    phase = context.phase
    if phase == EXHAUSTED:
        return END
    if phase == INITIAL:
        context.child = open_triple(context.step, context.upstream, cursor)
        phase = context.phase = RUNNING

    while True:
        cursor, value = context.child.move()
        if cursor is not None:
            return cursor, value
        # only two sources are chained, a third phase ends the sequence
        phase = context.phase = phase + 1
        if phase > SECOND:
            context.phase = EXHAUSTED
            return END
        second, = context.args
        context.child = open_triple(second)


def append_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    """shared by append and prepend, the third argument says which end"""
    item, item_cursor, at_end = context.args
    if context.phase == INITIAL:
        context.child = open_triple(context.step, context.upstream, cursor)
        context.phase = RUNNING
        if not at_end:
            return item_cursor, item

    if context.phase == RUNNING:
        cursor, value = context.child.move()
        if cursor is not None:
            return cursor, value
        context.phase = EXHAUSTED
        if at_end:
            return item_cursor, item
    return END


def take_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    if not begin(context):
        return END
    count, = context.args
    # never pull past the limit, so unbounded sources stay safe
    if context.position >= count:
        context.phase = EXHAUSTED
        return END
    cursor, value = context.step(context.upstream, cursor)
    if cursor is None:
        context.phase = EXHAUSTED
        return END
    context.position += 1
    return cursor, value


def skip_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    if not begin(context):
        return END
    count, = context.args
    step, upstream = context.step, context.upstream
    while True:
        cursor, value = step(upstream, cursor)
        if cursor is None:
            context.phase = EXHAUSTED
            return END
        if context.position >= count:
            return cursor, value
        context.position += 1


def take_while_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    if not begin(context):
        return END
    cursor, value = context.step(context.upstream, cursor)
    predicate, = context.args
    if cursor is None or not predicate(value, cursor):
        context.phase = EXHAUSTED
        return END
    return cursor, value


def skip_while_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    phase = context.phase
    if phase == INITIAL:
        initialise(context)
        phase = context.phase = RUNNING
    elif phase == EXHAUSTED:
        return END

    step, upstream = context.step, context.upstream
    predicate, = context.args
    while True:
        cursor, value = step(upstream, cursor)
        if cursor is None:
            context.phase = EXHAUSTED
            return END
        if phase == SECOND:
            return cursor, value
        if not predicate(value, cursor):
            context.phase = SECOND
            return cursor, value


def sort_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    """drains the parent into a buffer on the first pull, then streams the sorted buffer"""
    if context.phase == INITIAL:
        sort_keys, = context.args
        buffer = list(values(RawIterator(context.step, context.upstream, cursor)))
        logger.debug(f"sorting {len(buffer)} buffered items by {sort_keys!r}")
        context.child = Triple(array_step, sort_buffer(buffer, sort_keys), -1)
        context.phase = RUNNING
    elif context.phase != RUNNING:
        return END

    cursor, value = context.child.move()
    if cursor is None:
        context.phase = EXHAUSTED
        return END
    return cursor, value


class _CoreOperations(Generic[T]):
    def _chain(self: 'Enumerable[T]', step: StepFunction, *args: Any) -> 'Enumerable[Any]':
        """new node over this one. o(1), nothing is pulled."""
        from ..enumerable import Enumerable
        return Enumerable(step, self.cursor, wrap_context(self, *args))

    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate(value[, cursor])"""
        require(predicate, 'predicate')
        return self._chain(where_step, binary(predicate))

    def map(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form with selector(value[, position]), position is 1-based"""
        require(selector, 'selector')
        return self._chain(map_step, binary(selector))

    def flat_map(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project each element to a container and flatten the containers"""
        require(selector, 'selector')
        return self._chain(flat_map_step, binary(selector))

    def concat(self: 'Enumerable[T]', second: Iterable[T]) -> 'Enumerable[T]':
        """all elements of this sequence followed by all elements of `second`"""
        require(second, 'second')
        return self._chain(concat_step, second)

    def append(self: 'Enumerable[T]', item: T, cursor: Cursor = None) -> 'Enumerable[T]':
        """adds a value to the end of the sequence"""
        return self._chain(append_step, item, PLACEHOLDER if cursor is None else cursor, True)

    def prepend(self: 'Enumerable[T]', item: T, cursor: Cursor = None) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        return self._chain(append_step, item, PLACEHOLDER if cursor is None else cursor, False)

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        _require_count(count)
        return self._chain(take_step, count)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        _require_count(count)
        return self._chain(skip_step, count)

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        require(predicate, 'predicate')
        return self._chain(take_while_step, binary(predicate))

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        require(predicate, 'predicate')
        return self._chain(skip_while_step, binary(predicate))

    # --- sorting ---

    def _sorter(self: 'Enumerable[T]', ascending: bool, selector: Optional[SortSelector] = None) -> 'OrderedEnumerable[T]':
        from ..enumerable import OrderedEnumerable
        sort_keys = SortKeyList([SortKey(ascending, selector)])
        return OrderedEnumerable(sort_step, self.cursor, wrap_context(self, sort_keys), sort_keys)

    def sort(self: 'Enumerable[T]') -> 'OrderedEnumerable[T]':
        """sort elements by their natural order"""
        return self._sorter(True)

    def sort_descending(self: 'Enumerable[T]') -> 'OrderedEnumerable[T]':
        return self._sorter(False)

    def sort_by(self: 'Enumerable[T]', selector: SortSelector[T, K]) -> 'OrderedEnumerable[T]':
        """sort elements by a key"""
        require(selector, 'selector')
        return self._sorter(True, selector)

    def sort_by_descending(self: 'Enumerable[T]', selector: SortSelector[T, K]) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        require(selector, 'selector')
        return self._sorter(False, selector)

    def then_by(self: 'Enumerable[T]', selector: Optional[SortSelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        raise InvalidChainError("then_by must follow a 'sort' or 'order' variant")

    def then_by_descending(self: 'Enumerable[T]', selector: Optional[SortSelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        raise InvalidChainError("then_by_descending must follow a 'sort' or 'order' variant")

    # --- aliases ---
    select = map
    select_many = flat_map
    order = sort
    order_descending = sort_descending
    order_by = sort_by
    order_by_descending = sort_by_descending


def _require_count(count: int) -> None:
    # bool is an int subclass but never a meaningful count
    if not isinstance(count, int) or isinstance(count, bool):
        raise ArgumentError(f"count must be an int, got '{type(count).__name__}'")
