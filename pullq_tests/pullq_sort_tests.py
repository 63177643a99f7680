import suite
from datagen import from_schema, person_schema
from pullq import P, OrderedEnumerable, InvalidChainError, ArgumentError

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises

employees = [
    {'name': 'ann', 'dept': 'eng', 'salary': 120},
    {'name': 'bob', 'dept': 'sales', 'salary': 90},
    {'name': 'cyd', 'dept': 'eng', 'salary': 150},
    {'name': 'dee', 'dept': 'hr', 'salary': 90},
    {'name': 'eve', 'dept': 'sales', 'salary': 110},
]


def _names(chain):
    return chain.map(lambda e: e['name']).to.list()


@test("sort uses natural order")
def test_sort_natural():
    assert_equal(P([3, 1, 2]).sort().to.list(), [1, 2, 3])
    assert_equal(P([3, 1, 2]).order_descending().to.list(), [3, 2, 1])
    assert_equal(P([]).sort().to.list(), [])


@test("sort over a mapping sorts its values")
def test_sort_mapping():
    assert_equal(P({'a': 3, 'b': 1, 'c': 2}).sort().to.list(), [1, 2, 3])


@test("sort_by is stable for equal keys")
def test_sort_by_stable():
    pairs = [('a', 2), ('b', 1), ('c', 2), ('d', 1)]
    assert_equal(P(pairs).sort_by(lambda p: p[1]).to.list(), [('b', 1), ('d', 1), ('a', 2), ('c', 2)])
    assert_equal(P(pairs).order_by_descending(lambda p: p[1]).to.list(),
                 [('a', 2), ('c', 2), ('b', 1), ('d', 1)])


@test("then_by breaks ties of the primary key")
def test_then_by():
    chain = P(employees).sort_by(lambda e: e['dept']).then_by_descending(lambda e: e['salary'])
    assert_equal(_names(chain), ['cyd', 'ann', 'dee', 'eve', 'bob'])
    chain = P(employees).order_by_descending(lambda e: e['salary']).then_by(lambda e: e['name'])
    assert_equal(_names(chain), ['cyd', 'ann', 'eve', 'bob', 'dee'])


@test("multi-key sorting is stable when every key ties")
def test_multi_key_stable():
    rows = [(1, 'x', 'first'), (0, 'y', 'a'), (1, 'x', 'second'), (1, 'x', 'third')]
    result = P(rows).sort_by(lambda r: r[0]).then_by(lambda r: r[1]).map(lambda r: r[2]).to.list()
    assert_equal(result, ['a', 'first', 'second', 'third'])


@test("then_by extends the same node in place")
def test_then_by_returns_self():
    ordered = P(employees).sort_by(lambda e: e['dept'])
    assert_that(isinstance(ordered, OrderedEnumerable), "sort_by should build an ordered node")
    assert_that(ordered.then_by(lambda e: e['name']) is ordered, "then_by should return the same node")
    assert_equal(len(ordered.sort_keys), 2)


@test("nodes built on a sort see keys added later")
def test_then_by_visible_downstream():
    ordered = P(employees).sort_by(lambda e: e['salary'])
    names = ordered.map(lambda e: e['name'])
    ordered.then_by_descending(lambda e: e['name'])
    assert_equal(names.to.list(), ['dee', 'bob', 'eve', 'ann', 'cyd'])


@test("then_by must follow a sort")
def test_then_by_invalid_chain():
    assert_raises(InvalidChainError, lambda: P([1, 2]).then_by(lambda x: x))
    assert_raises(InvalidChainError, lambda: P([1, 2]).sort().where(lambda x: x).then_by_descending())
    assert_raises(TypeError, lambda: P([1]).then_by(), "the error is also a TypeError")


@test("sort_by requires a selector")
def test_sort_by_requires_selector():
    assert_raises(ArgumentError, lambda: P([1]).sort_by(None))
    assert_raises(ArgumentError, lambda: P([1]).sort_by_descending(None))


@test("sort reads the source again on each traversal")
def test_sort_retraversal():
    data = [3, 1]
    chain = P(data).sort()
    assert_equal(chain.to.list(), [1, 3])
    data.append(0)
    assert_equal(chain.to.list(), [0, 1, 3])


@test("sort_by agrees with sorted() on generated records")
def test_sort_by_reference():
    records = from_schema(person_schema, seed=9).records(60)
    key = lambda p: p['age']
    assert_equal(P(records).sort_by(key).to.list(), sorted(records, key=key))
    assert_equal(P(records).sort_by_descending(key).to.list(), sorted(records, key=key, reverse=True))
    two_keys = P(records).sort_by(lambda p: p['city']).then_by_descending(lambda p: p['salary']).to.list()
    assert_equal(two_keys, sorted(sorted(records, key=lambda p: p['salary'], reverse=True), key=lambda p: p['city']))


if __name__ == "__main__":
    suite.main("pullq sorting test suite")
