from __future__ import annotations
import logging
import typing
from ..errors import require
from ..iteration import binary, initialise, open_triple
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _key(key_selector: Optional[KeySelector], value: Any, cursor: Cursor) -> Any:
    return value if key_selector is None else key_selector(value, cursor)


def _materialize(second: Any, key_selector: Optional[KeySelector]) -> HashSet:
    """the second source is drained up front, it is not lazy"""
    from ..functions import to_set
    keys = HashSet(to_set(second, key_selector))
    logger.debug(f"materialized {len(keys)} keys from the second source")
    return keys


def unique_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    if context.phase == INITIAL:
        initialise(context)
        context.seen = HashSet()
        context.phase = RUNNING
    elif context.phase != RUNNING:
        return END

    step, upstream, seen = context.step, context.upstream, context.seen
    key_selector, = context.args
    while True:
        cursor, value = step(upstream, cursor)
        if cursor is None:
            context.phase = EXHAUSTED
            return END
        if seen.add(_key(key_selector, value, cursor)):
            return cursor, value


def difference_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    second, key_selector = context.args
    if context.phase == INITIAL:
        initialise(context)
        context.seen = _materialize(second, key_selector)
        context.phase = RUNNING
    elif context.phase != RUNNING:
        return END

    step, upstream, seen = context.step, context.upstream, context.seen
    while True:
        cursor, value = step(upstream, cursor)
        if cursor is None:
            context.phase = EXHAUSTED
            return END
        # emitted keys join the set, so duplicates in the first source are dropped too
        if seen.add(_key(key_selector, value, cursor)):
            return cursor, value


def union_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    second, key_selector = context.args
    if context.phase == INITIAL:
        context.child = open_triple(context.step, context.upstream, cursor)
        context.seen = HashSet()
        context.phase = RUNNING
    elif context.phase == EXHAUSTED:
        return END

    seen = context.seen
    while True:
        cursor, value = context.child.move()
        if cursor is not None:
            if seen.add(_key(key_selector, value, cursor)):
                return cursor, value
            continue

        # both sources have been drained
        if context.phase == SECOND:
            context.phase = EXHAUSTED
            return END
        context.child = open_triple(second)
        context.phase = SECOND


def intersect_step(context: Context, cursor: Cursor) -> Tuple[Cursor, Any]:
    second, key_selector = context.args
    if context.phase == INITIAL:
        initialise(context)
        context.seen = _materialize(second, key_selector)
        context.phase = RUNNING
    elif context.phase != RUNNING:
        return END

    step, upstream, seen = context.step, context.upstream, context.seen
    while True:
        cursor, value = step(upstream, cursor)
        if cursor is None:
            context.phase = EXHAUSTED
            return END
        # a matched key leaves the set, so it is emitted only once
        if seen.remove(_key(key_selector, value, cursor)):
            return cursor, value


class _SetOperations(Generic[T]):
    """
    deduplicating and set-theoretic operators.
    keys come from key_selector(value[, cursor]) or are the elements themselves,
    and must be hashable.
    """

    def unique(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """distinct elements, in order of first appearance"""
        return self._chain(unique_step, binary(key_selector))

    def difference(self: 'Enumerable[T]', second: Iterable[T],
                   key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence whose key is not in `second`, each key at most once"""
        require(second, 'second')
        return self._chain(difference_step, second, binary(key_selector))

    def union(self: 'Enumerable[T]', second: Iterable[T],
              key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of both sequences, each key once. lazy in both sources."""
        require(second, 'second')
        return self._chain(union_step, second, binary(key_selector))

    def intersect(self: 'Enumerable[T]', second: Iterable[T],
                  key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence whose key is also in `second`, each key once"""
        require(second, 'second')
        return self._chain(intersect_step, second, binary(key_selector))

    distinct = unique
    except_ = difference
