"""
the iteration protocol adapter.

every supported source is reduced to a (step, context, cursor) triple where
`step(context, cursor) -> (cursor', value)` and a none cursor signals the end.
"""
from __future__ import annotations

import inspect
import typing
from collections.abc import Iterable as _Iterable, Mapping, Sequence
from enum import Enum

import numpy as np
import pandas as pd

from .config import config
from .errors import NotIterableError
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable


class SourceKind(Enum):
    ARRAY = 'array'
    ASSOCIATIVE = 'associative'
    CHAIN_NODE = 'chain_node'
    RAW_TRIPLE = 'raw_triple'
    STEP = 'step'
    HOST_ITERABLE = 'host_iterable'


# --- leaf step functions ---

def array_step(context: Sequence, cursor: int) -> Tuple[Optional[int], Any]:
    """dense containers: the context is the container, the cursor the last index"""
    index = cursor + 1
    if index < len(context):
        return index, context[index]
    return END


def items_step(context: Iterator[Tuple[Any, Any]], cursor: Any) -> Tuple[Any, Any]:
    """associative containers: the context is a per-traversal items() iterator"""
    for key, value in context:
        return key, value
    return END


def iterator_step(context: Iterator[Any], cursor: int) -> Tuple[Optional[int], Any]:
    """plain python iterables: the context is a per-traversal iterator, the cursor a position"""
    for value in context:
        return cursor + 1, value
    return END


# --- classification ---

def source_kind(obj: Any) -> SourceKind:
    """maps a source onto the closed set of supported kinds"""
    from .enumerable import Enumerable

    if isinstance(obj, Enumerable):
        return SourceKind.CHAIN_NODE
    # a raw triple is a tuple, check it before generic sequences
    if isinstance(obj, RawIterator):
        return SourceKind.RAW_TRIPLE
    if obj is None or isinstance(obj, (str, bytes, bytearray)):
        raise NotIterableError(f"object {obj!r} of type '{type(obj).__name__}' is not iterable")
    if isinstance(obj, Triple):
        # a live traversal unpacks into its parts, it is not a source of elements
        raise NotIterableError("a Triple is a traversal in progress, wrap a step in RawIterator instead")
    if isinstance(obj, np.ndarray):
        if obj.ndim == 0:
            raise NotIterableError("a zero-dimensional array is not iterable")
        return SourceKind.ARRAY
    if isinstance(obj, Sequence):
        return SourceKind.ARRAY
    if isinstance(obj, (Mapping, pd.Series)):
        return SourceKind.ASSOCIATIVE
    if callable(obj):
        return SourceKind.STEP
    if config.allow_host_iterables and isinstance(obj, _Iterable):
        return SourceKind.HOST_ITERABLE
    raise NotIterableError(f"object {obj!r} of type '{type(obj).__name__}' is not iterable")


def resolve(source: Any) -> Tuple[StepFunction, ContextFactory, Cursor]:
    """
    returns (step, context_factory, cursor) for a source without starting a traversal.
    this is what lets a node be built from a source in o(1).
    """
    kind = source_kind(source)
    if kind is SourceKind.CHAIN_NODE or kind is SourceKind.RAW_TRIPLE:
        return source.step, source.context_factory, source.cursor
    if kind is SourceKind.ARRAY:
        return array_step, lambda: source, -1
    if kind is SourceKind.ASSOCIATIVE:
        return items_step, lambda: iter(source.items()), -1
    if kind is SourceKind.HOST_ITERABLE:
        return iterator_step, lambda: iter(source), -1
    # a bare step function with no context
    return source, lambda: None, None


def get_iterator(source: Any, context: Any = None, cursor: Cursor = None) -> Tuple[StepFunction, Any, Cursor]:
    """
    returns a fresh (step, context, cursor) triple for one traversal of `source`.
    for a chain node this is where its context factory is called.
    a bare step function is passed through with its context, which is called first if it is a factory.
    """
    if source_kind(source) is SourceKind.STEP:
        if callable(context):
            context = context()
        return source, context, cursor
    step, factory, start = resolve(source)
    return step, factory(), start


def open_triple(source: Any, context: Any = None, cursor: Cursor = None) -> Triple:
    """get_iterator() wrapped in a Triple that tracks its own cursor"""
    return Triple(*get_iterator(source, context, cursor))


def walk(source: Any) -> Iterator[Tuple[Cursor, Any]]:
    """drives one traversal of `source`, yielding (cursor, value) pairs"""
    step, context, cursor = get_iterator(source)
    while True:
        cursor, value = step(context, cursor)
        if cursor is None:
            return
        yield cursor, value


def values(source: Any) -> Iterator[Any]:
    """drives one traversal of `source`, yielding only the values"""
    for _, value in walk(source):
        yield value


def is_container(obj: Any) -> bool:
    """true for anything a nested traversal can be opened on, bare step functions excluded"""
    try:
        kind = source_kind(obj)
    except NotIterableError:
        return False
    return kind is not SourceKind.STEP


# --- operator plumbing ---

def initialise(context: Context) -> Any:
    """swaps the parent's context factory in `context` for the context it produces"""
    factory = context.upstream
    if factory is None:
        return None
    upstream = factory()
    context.upstream = upstream
    return upstream


def begin(context: Context) -> bool:
    """
    moves a fresh context to RUNNING, resolving its upstream on the way.
    returns false once the operator has left the running phase.
    """
    if context.phase == RUNNING:
        return True
    if context.phase != INITIAL:
        return False
    initialise(context)
    context.phase = RUNNING
    return True


# --- caller-supplied callables ---

def takes_cursor(func: Callable) -> bool:
    """true if `func` can be called with (value, cursor)"""
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        # builtins without a signature are treated as unary
        return False
    required = 0
    for p in parameters:
        if p.kind is p.VAR_POSITIONAL:
            return True
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty:
            required += 1
    return required >= 2


def binary(func: Optional[Callable]) -> Optional[Callable[[Any, Any], Any]]:
    """normalizes a one- or two-argument callable to the (value, cursor) calling convention"""
    if func is None or takes_cursor(func):
        return func
    return lambda value, cursor: func(value)
