from collections import deque

import numpy as np
import pandas as pd

import suite
from datagen import from_schema, person_schema
from pullq import P, create_with, functions, Lookup, Grouping, EmptySequenceError, ArgumentError
from pullq.iteration import array_step

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises

numbers = P(range(1, 11))
odds = numbers.where(lambda x: x % 2 == 1)  # not a dense node
people = [
    {'name': 'John', 'age': 42, 'city': 'NY'},
    {'name': 'Sophie', 'age': 19, 'city': 'SF'},
    {'name': 'Emily', 'age': 33, 'city': 'NY'},
]


# --- aggregation ---

@test("aggregate without a seed starts from the first element")
def test_aggregate_no_seed():
    assert_equal(P([1, 2, 3, 4]).to.aggregate(lambda a, b: a + b), 10)
    assert_equal(P(['x']).to.aggregate(lambda a, b: a + b), 'x')


@test("aggregate without a seed fails on an empty sequence")
def test_aggregate_empty():
    assert_raises(EmptySequenceError, lambda: P([]).to.aggregate(lambda a, b: a + b))
    assert_raises(ValueError, lambda: functions.fold([], lambda a, b: a + b), "the error is also a ValueError")


@test("aggregate with a seed and a result selector")
def test_aggregate_seed():
    assert_equal(P([]).to.aggregate(lambda a, b: a + b, 0), 0)
    assert_equal(P([1, 2, 3]).to.aggregate(lambda acc, x: acc + [x * 2], []), [2, 4, 6])
    assert_equal(functions.reduce([1, 2, 3, 4], lambda a, b: a * b, 1, str), '24')


@test("sum adds elements or selected values")
def test_sum():
    assert_equal(numbers.to.sum(), 55)
    assert_equal(P(people).to.sum(lambda p: p['age']), 94)
    assert_equal(P([]).to.sum(), 0)


@test("min and max find extremes")
def test_min_max():
    assert_equal(P([3, 1, 2]).to.min(), 1)
    assert_equal(P([3, 1, 2]).to.max(), 3)
    assert_equal(P(people).to.min_by(lambda p: p['age'])['name'], 'Sophie')
    assert_equal(P(people).to.max_by(lambda p: p['age'])['name'], 'John')


@test("max_by and min_by keep the first of equal elements")
def test_extremes_ties():
    pairs = [('a', 2), ('b', 2), ('c', 1), ('d', 1)]
    assert_equal(P(pairs).to.max_by(lambda p: p[1]), ('a', 2))
    assert_equal(P(pairs).to.min_by(lambda p: p[1]), ('c', 1))


@test("every element-returning realization fails the same way on empty input")
def test_empty_sequence_errors():
    empty = P([]).where(lambda x: True)
    for realize in (empty.to.first, empty.to.last, empty.to.min, empty.to.max,
                    lambda: empty.to.min_by(lambda x: x), lambda: empty.to.max_by(lambda x: x),
                    lambda: empty.to.aggregate(lambda a, b: a)):
        assert_raises(EmptySequenceError, realize)


# --- element access ---

@test("first and last with and without predicates")
def test_first_last():
    assert_equal(numbers.to.first(), 1)
    assert_equal(numbers.to.last(), 10)
    assert_equal(odds.to.first(), 1)
    assert_equal(odds.to.last(), 9)
    assert_equal(numbers.to.first(lambda x: x > 4), 5)
    assert_equal(numbers.to.last(lambda x: x < 4), 3)
    assert_raises(EmptySequenceError, lambda: numbers.to.first(lambda x: x > 100))


@test("first_or_default and last_or_default return the default when nothing matches")
def test_or_default():
    assert_equal(P([]).to.first_or_default(), None)
    assert_equal(P([]).to.last_or_default(default='none'), 'none')
    assert_equal(odds.to.first_or_default(lambda x: x > 100, -1), -1)
    assert_equal(odds.to.last_or_default(lambda x: x > 100, -1), -1)


@test("a none element is a value, not an absence")
def test_none_element():
    assert_equal(functions.first([None, 1]), None)
    assert_equal(functions.last(P([1, None]).where(lambda x: True)), None)


@test("predicates may take the cursor")
def test_first_with_cursor():
    assert_equal(functions.first({'a': 1, 'b': 2}, lambda value, key: key == 'b'), 2)


# --- counting and quantifiers ---

@test("count on dense and lazy nodes")
def test_count():
    assert_equal(numbers.to.count(), 10)
    assert_equal(odds.to.count(), 5)
    assert_equal(numbers.to.count(lambda x: x > 7), 3)
    assert_equal(functions.length_by([1, 2, 3], lambda value, index: index > 0), 2)
    assert_equal(functions.count({'a': 1, 'b': 2}), 2)


@test("dense shortcuts respect a custom start cursor")
def test_dense_start_cursor():
    tail = create_with([1, 2, 3, 4], lambda obj: (array_step, obj, 1))
    assert_equal(tail.to.count(), 2)
    assert_equal(tail.to.first(), 3)
    assert_equal(tail.to.last(), 4)
    assert_that(tail.to.any(), "two elements are left")
    finished = create_with([1, 2, 3, 4], lambda obj: (array_step, obj, 3))
    assert_equal(finished.to.count(), 0)
    assert_that(not finished.to.any(), "nothing is left after the last index")
    assert_equal(finished.to.first_or_default(), None)
    assert_equal(finished.to.last_or_default(default='none'), 'none')


@test("any and all")
def test_any_all():
    assert_that(numbers.to.any(), "numbers should not be empty")
    assert_that(not P([]).to.any(), "empty should have no elements")
    assert_that(odds.to.any(lambda x: x == 9), "9 is odd")
    assert_that(odds.to.all(lambda x: x % 2 == 1), "all should be odd")
    assert_that(not numbers.to.all(lambda x: x < 10), "10 breaks the predicate")
    assert_that(P([]).to.all(lambda x: False), "all is vacuously true on empty input")
    assert_raises(ArgumentError, lambda: numbers.to.all(None))


@test("any stops at the first match")
def test_any_short_circuit():
    seen = []
    P([1, 2, 3, 4]).where(lambda x: seen.append(x) or True).to.any(lambda x: x == 2)
    assert_equal(seen, [1, 2])


# --- search ---

@test("index_of is 1-based and -1 when absent")
def test_index_of():
    assert_equal(P(['a', 'b', 'c']).to.index_of('b'), 2)
    assert_equal(P(['a', 'b', 'c']).to.index_of('z'), -1)
    assert_equal(functions.index_of([[1], [2]], (2,)), 2, "composites compare structurally")


@test("contains with and without a comparer")
def test_contains():
    assert_that(numbers.to.contains(7), "7 should be found")
    assert_that(not numbers.to.contains(11), "11 should not be found")
    assert_that(P(['Ab']).to.contains('ab', lambda a, b: a.lower() == b.lower()), "comparer should be used")
    assert_that(functions.has(people, {'name': 'Emily', 'age': 33, 'city': 'NY'}), "dicts compare by value")


@test("sequence_equals requires equal elements and equal length")
def test_sequence_equals():
    assert_that(numbers.to.sequence_equals(list(range(1, 11))), "same elements should be equal")
    assert_that(not P([1, 2]).to.sequence_equals([1, 2, 3]), "shorter first source")
    assert_that(not P([1, 2, 3]).to.sequence_equals([1, 2]), "shorter second source")
    assert_that(P(['a']).to.sequence_equals(['A'], lambda a, b: a.upper() == b.upper()), "custom comparer")


@test("equals compares composites structurally")
def test_equals():
    assert_that(functions.equals([1, [2, 3]], P([1, [2, 3]])), "list and node with equal elements")
    assert_that(functions.equals({'a': [1]}, {'a': (1,)}), "nested tuple and list")
    assert_that(functions.equals(np.array([1, 2]), [1, 2]), "array and list")
    assert_that(not functions.equals({'a': 1}, {'b': 1}), "different keys")
    assert_that(not functions.equals('ab', ['a', 'b']), "a string is not a sequence of characters")
    assert_that(not functions.equals([1, 2], {0: 1, 1: 2}), "different shapes")


@test("arrays and series of different lengths are unequal")
def test_equals_length_mismatch():
    assert_that(not functions.equals(np.array([1, 2]), np.array([1, 2, 3])), "arrays of different lengths")
    assert_that(not functions.equals(pd.Series([1, 2]), pd.Series([1, 2, 3])), "series of different lengths")
    assert_that(functions.equals(pd.Series([1, 2]), pd.Series([1, 2])), "equal series")
    assert_that(not functions.sequence_equals([np.array([1, 2])], [np.array([1, 2, 3])]), "nested arrays")
    assert_that(functions.equals([np.array([1, 2])], [np.array([1, 2])]), "equal nested arrays")
    assert_that(functions.equals(np.array([[1, 2], [3, 4]]), [[1, 2], [3, 4]]), "a 2d array and nested lists")
    assert_that(not functions.contains([np.array([1, 2, 3])], np.array([9, 9])), "contains with a shorter array")
    assert_equal(functions.index_of([np.array([1]), np.array([1, 2])], np.array([1, 2])), 2)


# --- conversion ---

@test("to.set and to.dict")
def test_set_and_dict():
    assert_equal(P([1, 2, 2, 3]).to.set(), {1, 2, 3})
    assert_equal(P(people).to.set(lambda p: p['city']), {'NY', 'SF'})
    ages = P(people).to.dict(lambda p: p['name'], lambda p, name: p['age'])
    assert_equal(ages, {'John': 42, 'Sophie': 19, 'Emily': 33})
    assert_equal(P(['x', 'y']).to.dict(), {0: 'x', 1: 'y'})
    assert_equal(P(['a', 'b']).to.dict(lambda v: 'k', lambda v, k: v), {'k': 'b'}, "the last duplicate key wins")


@test("to.lookup groups by key")
def test_lookup():
    lookup = P(people).to.lookup(lambda p: p['city'], lambda p: p['name'])
    assert_that(isinstance(lookup, Lookup), "should be a Lookup")
    assert_equal(dict(lookup), {'NY': ['John', 'Emily'], 'SF': ['Sophie']})


@test("deep_copy copies nested composites")
def test_deep_copy():
    source = [{'a': [1, 2]}, {'b': {'c': 3}}]
    copy = P(source).to.deep_copy()
    assert_equal(copy, source)
    assert_that(copy[0] is not source[0], "dicts should be copied")
    assert_that(copy[0]['a'] is not source[0]['a'], "nested lists should be copied")
    lookup = functions.to_lookup([1, 2, 3], lambda x: x % 2)
    lookup_copy = functions.deep_copy(lookup)
    assert_that(isinstance(lookup_copy, Lookup), "lookups stay lookups")
    assert_that(isinstance(lookup_copy[1], Grouping), "groups stay groupings")
    assert_equal(lookup_copy[1].key, 1)


@test("deep_copy copies series and other mutable sequences")
def test_deep_copy_series_and_deque():
    series = pd.Series({'a': [1, 2], 'b': [3]})
    series_copy = functions.deep_copy(series)
    assert_that(isinstance(series_copy, pd.Series) and series_copy is not series, "series should be copied")
    assert_equal(series_copy.to_dict(), {'a': [1, 2], 'b': [3]})
    assert_that(series_copy['a'] is not series['a'], "series values should be copied")
    queue = deque([[1], [2]])
    queue_copy = functions.deep_copy(queue)
    assert_that(isinstance(queue_copy, deque) and queue_copy is not queue, "deques should be copied")
    assert_equal(list(queue_copy), [[1], [2]])
    assert_that(queue_copy[0] is not queue[0], "deque elements should be copied")


@test("numpy and pandas conversion")
def test_numpy_pandas():
    array = numbers.map(lambda x: x * 2).to.array()
    assert_that(isinstance(array, np.ndarray), "should be an ndarray")
    assert_equal(int(array.sum()), 110)
    series = P([1, 2, 3]).to.pandas()
    assert_that(isinstance(series, pd.Series), "should be a series")
    assert_equal(series.tolist(), [1, 2, 3])
    frame = from_schema(person_schema, seed=1).take(4).to.df()
    assert_equal(frame.shape, (4, 6))
    assert_equal(list(frame.columns), ['id', 'name', 'age', 'city', 'department', 'salary'])


@test("foreach visits every element")
def test_foreach():
    seen = []
    functions.foreach(numbers.take(3), seen.append)
    functions.each(['x'], seen.append)
    assert_equal(seen, [1, 2, 3, 'x'])


@test("an iteration triple can be driven by hand")
def test_iteration_triple():
    step, context, cursor = P(['p', 'q']).map(lambda s: s.upper()).to.triple()
    pulled = []
    while True:
        cursor, value = step(context, cursor)
        if cursor is None:
            break
        pulled.append((cursor, value))
    assert_equal(pulled, [(0, 'P'), (1, 'Q')])
    step, context, cursor = functions.iteration_triple([7])
    assert_that(step is array_step, "lists use the dense step")
    assert_equal(step(context, cursor), (0, 7))


if __name__ == "__main__":
    suite.main("pullq realization test suite")
