from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from .. import functions as fn
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class TerminalAccessor(Generic[T]):
    """`node.to`: the realization functions bound to one node"""

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> List[T]:
        """convert to list"""
        return fn.to_list(self._enumerable)

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return fn.to_array(self._enumerable)

    def set(self, key_selector: Optional[KeySelector[T, K]] = None) -> Set[Any]:
        """convert to set"""
        return fn.to_set(self._enumerable, key_selector)

    def dict(self, key_selector: Optional[KeySelector[T, K]] = None,
             element_selector: Optional[Callable[[T, K], V]] = None) -> Dict[K, V]:
        """convert to dictionary"""
        return fn.to_dictionary(self._enumerable, key_selector, element_selector)

    def lookup(self, key_selector: KeySelector[T, K],
               element_selector: Optional[Callable[[T, Cursor], U]] = None) -> Lookup:
        """group into a lookup"""
        return fn.to_lookup(self._enumerable, key_selector, element_selector)

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return fn.to_series(self._enumerable)

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return fn.to_frame(self._enumerable)

    def triple(self) -> Tuple[StepFunction, Any, Cursor]:
        return fn.to_iteration_triple(self._enumerable)

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        return fn.count(self._enumerable, predicate)

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        return fn.any(self._enumerable, predicate)

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        return fn.all(self._enumerable, predicate)

    def contains(self, item: T, comparer: Optional[Comparer[T]] = None) -> bool:
        return fn.contains(self._enumerable, item, comparer)

    def index_of(self, item: T, comparer: Optional[Comparer[T]] = None) -> int:
        return fn.index_of(self._enumerable, item, comparer)

    def sequence_equals(self, other: Any, comparer: Optional[Comparer[T]] = None) -> bool:
        return fn.sequence_equals(self._enumerable, other, comparer)

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        return fn.first(self._enumerable, predicate)

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        return fn.first_or_default(self._enumerable, predicate, default)

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        return fn.last(self._enumerable, predicate)

    def last_or_default(self, predicate: Optional[Predicate[T]] = None,
                        default: Optional[T] = None) -> Optional[T]:
        return fn.last_or_default(self._enumerable, predicate, default)

    def aggregate(self, accumulator: Accumulator[T, T], seed: Optional[T] = None,
                  result_selector: Optional[Callable[[T], V]] = None) -> Any:
        """applies accumulator function over sequence"""
        return fn.aggregate(self._enumerable, accumulator, seed, result_selector)

    def sum(self, selector: Optional[Callable[[T, Cursor], Any]] = None) -> Any:
        return fn.sum(self._enumerable, selector)

    def min(self) -> T:
        return fn.min(self._enumerable)

    def max(self) -> T:
        return fn.max(self._enumerable)

    def min_by(self, selector: Callable[[T, Cursor], Any]) -> T:
        return fn.min_by(self._enumerable, selector)

    def max_by(self, selector: Callable[[T, Cursor], Any]) -> T:
        return fn.max_by(self._enumerable, selector)

    def deep_copy(self) -> List[T]:
        return fn.deep_copy(self._enumerable)
