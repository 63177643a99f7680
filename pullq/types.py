from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, NamedTuple
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

# cursors are opaque; none means the step function is exhausted
Cursor = Any
StepFunction = Callable[[Any, Cursor], Tuple[Cursor, Any]]
ContextFactory = Callable[[], Any]

Predicate = Callable[[T, Cursor], bool]
Selector = Callable[[T, int], U]
KeySelector = Callable[[T, Cursor], K]
SortSelector = Callable[[T], K]
Comparer = Callable[[T, T], bool]
Accumulator = Callable[[U, T], U]

# --- context phases ---
INITIAL = 0
RUNNING = 1
SECOND = 2  # second source / second loop
ACQUIRE = 3  # fetch the next outer element
DRAIN = 4  # return elements of the current inner source
EXHAUSTED = -4

END = (None, None)


class _Placeholder:
    """a non-none cursor for elements the caller supplied without one"""
    __slots__ = ()

    def __repr__(self) -> str:
        return 'PLACEHOLDER'


PLACEHOLDER = _Placeholder()


class RawIterator(NamedTuple):
    """an externally supplied step triple. the context factory is called once per traversal."""
    step: StepFunction
    context_factory: ContextFactory
    cursor: Cursor


class Triple:
    """a live (step, context, cursor) traversal that remembers its own cursor"""
    __slots__ = ('step', 'context', 'cursor')

    def __init__(self, step: StepFunction, context: Any, cursor: Cursor):
        self.step = step
        self.context = context
        self.cursor = cursor

    def move(self) -> Tuple[Cursor, Any]:
        """pull the next (cursor, value) pair and store the new cursor"""
        cursor, value = self.step(self.context, self.cursor)
        self.cursor = cursor
        return cursor, value

    def __iter__(self):
        # allows `step, context, cursor = triple`
        return iter((self.step, self.context, self.cursor))

    def __repr__(self) -> str:
        return f"Triple(step={getattr(self.step, '__name__', self.step)}, cursor={self.cursor!r})"


class Context:
    """
    private mutable state of one operator instance for one traversal.
    `upstream` holds the parent's context factory until the first pull replaces it
    with the parent's fresh context (or with a Triple, for operators that track their own cursor).
    `args` are the operator's build-time parameters and are shared, never mutated.
    """
    __slots__ = ('phase', 'step', 'upstream', 'args', 'position', 'parent', 'child', 'seen', 'buffer')

    def __init__(self, step: StepFunction, upstream: Optional[ContextFactory], args: Tuple):
        self.phase = INITIAL
        self.step = step
        self.upstream = upstream
        self.args = args
        self.position = 0
        self.parent = None
        self.child = None
        self.seen = None
        self.buffer = None

    def __repr__(self) -> str:
        return f"Context(phase={self.phase}, step={getattr(self.step, '__name__', self.step)})"


def wrap_context(node: Any, *args: Any) -> ContextFactory:
    """
    builds the context factory of a new node chained onto `node`.
    the factory captures only the parent's step and factory, so calling it is o(1)
    and every call hands out an isolated Context.
    """
    step, factory = node.step, node.context_factory
    return lambda: Context(step, factory, args)


class HashSet(Generic[K]):
    """presence-only key set used by the dedup and set operators"""
    __slots__ = ('_keys',)

    def __init__(self, keys: Optional[Iterable[K]] = None):
        self._keys: Set[K] = set(keys) if keys is not None else set()

    def add(self, key: K) -> bool:
        """insert the key. returns true if it was not present before."""
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def remove(self, key: K) -> bool:
        """remove the key. returns true if it was present."""
        if key not in self._keys:
            return False
        self._keys.discard(key)
        return True

    def __contains__(self, key: K) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f"HashSet(size={len(self._keys)})"


class Grouping(list, Generic[K, T]):
    """the elements sharing one key, in encounter order"""

    def __init__(self, key: K, elements: Iterable[T] = ()):
        super().__init__(elements)
        self.key = key

    def __repr__(self) -> str:
        return f"Grouping(key={self.key!r}, items={list.__repr__(self)})"


class Lookup(dict, Generic[K, T]):
    """ordered key -> group mapping. keys keep first-appearance order."""

    def add(self, key: K, element: T) -> None:
        grouping = self.get(key)
        if grouping is None:
            grouping = Grouping(key)
            self[key] = grouping
        grouping.append(element)

    def __repr__(self) -> str:
        return f"Lookup(keys={len(self)}, items={sum(len(g) for g in self.values())})"


class SortKey(NamedTuple):
    ascending: bool
    selector: Optional[SortSelector]


class SortKeyList(list):
    """
    the growable key list owned by one sort node.
    the first sort call creates it, then_by calls append to it in place.
    """

    @property
    def is_single(self) -> bool: return len(self) == 1

    def __repr__(self) -> str:
        return f"SortKeyList({', '.join('asc' if k.ascending else 'desc' for k in self)})"
