from __future__ import annotations

from .types import *
from .iteration import values

# --- operators ---
from .extensions.core import _CoreOperations
from .extensions.set import _SetOperations
from .extensions.zip import _ZipOperations
from .extensions.grouping import _GroupingOperations

# --- accessors ---
from .extensions.terminal import TerminalAccessor


# --- base enumerable implementation ---

class _BaseEnumerable(Generic[T]):
    def __init__(self, step: StepFunction, cursor: Cursor, context_factory: ContextFactory):
        """a node is a step function, its starting cursor and a factory for fresh contexts"""
        self._step = step
        self._cursor = cursor
        self._context_factory = context_factory

    @property
    def step(self) -> StepFunction: return self._step

    @property
    def cursor(self) -> Cursor: return self._cursor

    @property
    def context_factory(self) -> ContextFactory: return self._context_factory

    def __iter__(self) -> Iterator[T]:
        # every iter() is an independent traversal with its own context
        return values(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(step={getattr(self._step, '__name__', self._step)})"


# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T],
    _SetOperations[T],
    _ZipOperations[T],
    _GroupingOperations[T]
):
    """
    a lazy, linq-inspired sequence. chaining builds new nodes and pulls nothing,
    the work happens when a realization (node.to.list(), pullq.functions.*, iteration) pulls.
    """
    def __init__(self, step: StepFunction, cursor: Cursor, context_factory: ContextFactory):
        super().__init__(step, cursor, context_factory)
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)


# --- ordered enumerable class ---

class OrderedEnumerable(Enumerable[T]):
    """
    a sort node. it owns the key list that its sort step reads, and then_by calls
    extend that list in place and return this same node.
    """

    def __init__(self, step: StepFunction, cursor: Cursor, context_factory: ContextFactory,
                 sort_keys: SortKeyList):
        super().__init__(step, cursor, context_factory)
        self._sort_keys = sort_keys

    @property
    def sort_keys(self) -> SortKeyList: return self._sort_keys

    def then_by(self, selector: Optional[SortSelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        self._sort_keys.append(SortKey(True, selector))
        return self

    def then_by_descending(self, selector: Optional[SortSelector[T, K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        self._sort_keys.append(SortKey(False, selector))
        return self
