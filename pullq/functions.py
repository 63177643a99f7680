"""
realization functions. each takes any supported source first (a node, a list,
a mapping, a raw triple, ...), starts its own traversal and pulls until it has an answer.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, MutableSequence, Sequence
from copy import copy as shallow_copy

import numpy as np
import pandas as pd

from .config import config
from .errors import require, EmptySequenceError, InvariantViolation
from .iteration import array_step, binary, get_iterator, walk, values
from .types import *

logger = logging.getLogger(__name__)

_MISSING = object()


def _is_dense(step: StepFunction, cursor: Cursor) -> bool:
    # only a traversal that starts before the first index covers the whole container
    return config.array_shortcuts and step is array_step and cursor == -1


# --- iteration ---

def to_iteration_triple(source: Any) -> Tuple[StepFunction, Any, Cursor]:
    """a fresh (step, context, cursor) triple, for driving a traversal by hand"""
    return get_iterator(source)


def foreach(source: Any, func: Callable[[T], Any]) -> None:
    """calls func(value) for every element"""
    require(func, 'func')
    for value in values(source):
        func(value)


# --- equality ---

def _shape(obj: Any) -> Optional[str]:
    from .enumerable import Enumerable
    if isinstance(obj, (Enumerable, RawIterator, np.ndarray)):
        return 'sequence'
    if isinstance(obj, (str, bytes, bytearray)):
        return None
    if isinstance(obj, Sequence):
        return 'sequence'
    if isinstance(obj, (Mapping, pd.Series)):
        return 'mapping'
    return None


def _mapping_equals(a: Any, b: Any) -> bool:
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b or not equals(value, b[key]):
            return False
    return True


def equals(a: Any, b: Any) -> bool:
    """
    plain equality for scalars. two composites of the same shape are compared
    structurally: sequences element by element, mappings key by key.
    """
    if a is b:
        return True
    shape, other_shape = _shape(a), _shape(b)
    if shape is None or other_shape is None:
        result = a == b
        # a scalar against an array compares element-wise, only a plain bool counts
        return isinstance(result, (bool, np.bool_)) and bool(result)
    # arrays and series of different lengths raise on `==`, so composites skip it
    if shape != other_shape:
        return False
    if shape == 'mapping':
        return _mapping_equals(a, b)
    return sequence_equals(a, b)


def sequence_equals(first: Any, second: Any, comparer: Optional[Comparer] = None) -> bool:
    """true if both sequences have equal elements in the same order and end together"""
    cmp = comparer or equals
    step, context, cursor = get_iterator(second)
    for value in values(first):
        cursor, other = step(context, cursor)
        if cursor is None or not cmp(value, other):
            return False
    cursor, _ = step(context, cursor)
    return cursor is None


# --- search ---

def index_of(source: Any, item: Any, comparer: Optional[Comparer] = None) -> int:
    """1-based position of the first element equal to item, or -1"""
    cmp = comparer or equals
    for position, value in enumerate(values(source), 1):
        if cmp(value, item):
            return position
    return -1


def contains(source: Any, item: Any, comparer: Optional[Comparer] = None) -> bool:
    """determines whether the sequence contains the item according to the comparer"""
    return index_of(source, item, comparer) != -1


def first_or_default(source: Any, predicate: Optional[Predicate] = None, default: Any = None) -> Any:
    """the first (matching) element, or default"""
    if predicate is None:
        step, context, cursor = get_iterator(source)
        if _is_dense(step, cursor):
            return context[0] if len(context) else default
        cursor, value = step(context, cursor)
        return default if cursor is None else value

    predicate = binary(predicate)
    for cursor, value in walk(source):
        if predicate(value, cursor):
            return value
    return default


def first(source: Any, predicate: Optional[Predicate] = None) -> Any:
    result = first_or_default(source, predicate, _MISSING)
    if result is _MISSING:
        raise EmptySequenceError("sequence contains no (matching) elements")
    return result


def last_or_default(source: Any, predicate: Optional[Predicate] = None, default: Any = None) -> Any:
    """the last (matching) element, or default"""
    last_match = default
    if predicate is None:
        step, context, cursor = get_iterator(source)
        if _is_dense(step, cursor):
            return context[len(context) - 1] if len(context) else default
        while True:
            cursor, value = step(context, cursor)
            if cursor is None:
                return last_match
            last_match = value

    predicate = binary(predicate)
    for cursor, value in walk(source):
        if predicate(value, cursor):
            last_match = value
    return last_match


def last(source: Any, predicate: Optional[Predicate] = None) -> Any:
    result = last_or_default(source, predicate, _MISSING)
    if result is _MISSING:
        raise EmptySequenceError("sequence contains no (matching) elements")
    return result


# --- counting and quantifiers ---

def count(source: Any, predicate: Optional[Predicate] = None) -> int:
    """number of elements. o(1) for dense sources."""
    if predicate is not None:
        return count_by(source, predicate)
    step, context, cursor = get_iterator(source)
    if _is_dense(step, cursor):
        return len(context)
    total = 0
    while True:
        cursor, _ = step(context, cursor)
        if cursor is None:
            return total
        total += 1


def count_by(source: Any, predicate: Predicate) -> int:
    """number of elements matching predicate(value[, cursor])"""
    require(predicate, 'predicate')
    predicate = binary(predicate)
    total = 0
    for cursor, value in walk(source):
        if predicate(value, cursor):
            total += 1
    return total


def any(source: Any, predicate: Optional[Predicate] = None) -> bool:
    """true if the sequence has an element (matching the predicate). stops at the first match."""
    if predicate is None:
        step, context, cursor = get_iterator(source)
        if _is_dense(step, cursor):
            return len(context) > 0
        cursor, _ = step(context, cursor)
        return cursor is not None

    predicate = binary(predicate)
    for cursor, value in walk(source):
        if predicate(value, cursor):
            return True
    return False


def all(source: Any, predicate: Predicate) -> bool:
    """true if every element satisfies the predicate. stops at the first counterexample."""
    require(predicate, 'predicate')
    predicate = binary(predicate)
    for cursor, value in walk(source):
        if not predicate(value, cursor):
            return False
    return True


# --- reduction ---

def aggregate(source: Any, func: Accumulator, seed: Any = None,
              result_selector: Optional[Callable[[Any], Any]] = None) -> Any:
    """
    folds func(accumulated, value) over the sequence.
    without a seed the first element is the seed, and the sequence must not be empty.
    """
    require(func, 'func')
    step, context, cursor = get_iterator(source)
    result = seed
    if result is None:
        cursor, result = step(context, cursor)
        if cursor is None:
            raise EmptySequenceError("cannot aggregate an empty sequence without a seed")

    while True:
        cursor, value = step(context, cursor)
        if cursor is None:
            break
        result = func(result, value)

    if result_selector is not None:
        result = result_selector(result)
    return result


def sum(source: Any, selector: Optional[Callable[[T, Cursor], Any]] = None) -> Any:
    """the sum of the elements, or of selector(value[, cursor])"""
    selector = binary(selector)
    total = 0
    for cursor, value in walk(source):
        total = total + (value if selector is None else selector(value, cursor))
    return total


def _extreme(source: Any, selector: Optional[Callable], replaces: Callable[[Any, Any], bool]) -> Any:
    """the first element whose (selected) value no later element replaces"""
    step, context, cursor = get_iterator(source)
    cursor, best_item = step(context, cursor)
    if cursor is None:
        raise EmptySequenceError("sequence contains no elements")
    best = best_item if selector is None else selector(best_item, cursor)

    while True:
        cursor, item = step(context, cursor)
        if cursor is None:
            return best_item
        current = item if selector is None else selector(item, cursor)
        if replaces(best, current):
            best, best_item = current, item


def _greater(best: Any, current: Any) -> bool: return current > best


def _smaller(best: Any, current: Any) -> bool: return current < best


def max(source: Any) -> Any:
    """the largest element. ties keep the first one."""
    return _extreme(source, None, _greater)


def min(source: Any) -> Any:
    """the smallest element. ties keep the first one."""
    return _extreme(source, None, _smaller)


def max_by(source: Any, selector: Callable[[T, Cursor], Any]) -> Any:
    """the element with the largest selector(value[, cursor])"""
    require(selector, 'selector')
    return _extreme(source, binary(selector), _greater)


def min_by(source: Any, selector: Callable[[T, Cursor], Any]) -> Any:
    """the element with the smallest selector(value[, cursor])"""
    require(selector, 'selector')
    return _extreme(source, binary(selector), _smaller)


# --- realization ---

def to_list(source: Any) -> List[Any]:
    return list(values(source))


def to_set(source: Any, key_selector: Optional[KeySelector] = None) -> Set[Any]:
    """the set of elements, or of key_selector(value[, cursor])"""
    if key_selector is None:
        return set(values(source))
    key_selector = binary(key_selector)
    return {key_selector(value, cursor) for cursor, value in walk(source)}


def to_lookup(source: Any, key_selector: KeySelector,
              element_selector: Optional[Callable[[T, Cursor], Any]] = None) -> Lookup:
    """
    groups the elements by key into a Lookup.
    keys keep first-appearance order, each group keeps encounter order.
    """
    require(key_selector, 'key_selector')
    key_selector, element_selector = binary(key_selector), binary(element_selector)
    lookup = Lookup()
    for cursor, value in walk(source):
        key = key_selector(value, cursor)
        if key is None:
            raise InvariantViolation("key cannot be none")
        lookup.add(key, value if element_selector is None else element_selector(value, cursor))
    return lookup


def to_dictionary(source: Any, key_selector: Optional[KeySelector] = None,
                  element_selector: Optional[Callable[[T, K], Any]] = None) -> Dict[Any, Any]:
    """
    a dict keyed by key_selector(value[, cursor]), or by the cursor itself.
    element_selector receives (value, key). duplicate keys: the last one wins.
    """
    key_selector, element_selector = binary(key_selector), binary(element_selector)
    dictionary = {}
    for key, value in walk(source):
        if key_selector is not None:
            key = key_selector(value, key)
        if element_selector is not None:
            value = element_selector(value, key)
        dictionary[key] = value
    return dictionary


def deep_copy(obj: Any) -> Any:
    """recursively copies composites, keys and values alike. scalars are returned as-is."""
    from .enumerable import Enumerable

    if isinstance(obj, Enumerable):
        return [deep_copy(value) for value in values(obj)]
    if isinstance(obj, Grouping):
        return Grouping(deep_copy(obj.key), (deep_copy(value) for value in obj))
    if isinstance(obj, pd.Series):
        return obj.map(deep_copy)
    if isinstance(obj, Mapping):
        clone = Lookup() if isinstance(obj, Lookup) else {}
        for key, value in obj.items():
            clone[deep_copy(key)] = deep_copy(value)
        return clone
    if isinstance(obj, np.ndarray):
        return obj.copy()
    if isinstance(obj, tuple) and hasattr(obj, '_make'):
        return obj._make(deep_copy(value) for value in obj)
    if isinstance(obj, (list, tuple, set, frozenset)):
        return type(obj)(deep_copy(value) for value in obj)
    if isinstance(obj, MutableSequence):
        # deque or UserList: keep the type, replace elements in place
        clone = shallow_copy(obj)
        for index in range(len(clone)):
            clone[index] = deep_copy(clone[index])
        return clone
    return obj


# --- numpy / pandas ---

def to_array(source: Any) -> np.ndarray:
    """convert to numpy array"""
    return np.array(to_list(source))


def to_series(source: Any) -> pd.Series:
    """convert to pandas series"""
    return pd.Series(to_list(source))


def to_frame(source: Any) -> pd.DataFrame:
    """convert to pandas dataframe"""
    return pd.DataFrame(to_list(source))


# --- aliases ---
has = contains
length = count
length_by = count_by
fold = aggregate
reduce = aggregate
each = foreach
iteration_triple = to_iteration_triple
