r"""
'     ____  _   _ _     _     ___
'    |  _ \| | | | |   | |   / _ \
'    | |_) | | | | |   | |  | | | |
'    |  __/| |_| | |___| |__| |_| |
'    |_|    \___/|_____|_____\__\_\
"""

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable

# expose the factory functions
from .factories import (
    create,
    create_with,
    from_triple,
    from_iterable,
    from_range,
    repeat,
    empty,
    natural_numbers,
    P
)

# realizations stay namespaced: several of them shadow builtins (sum, min, max, any, all)
from . import functions

# expose supporting types
from .types import (
    RawIterator,
    Triple,
    Context,
    HashSet,
    Lookup,
    Grouping,
    SortKey,
    SortKeyList
)

from .iteration import SourceKind, get_iterator, source_kind
from .config import EngineConfig, config, configure, reset_config

from .errors import (
    PullqError,
    ArgumentError,
    NotIterableError,
    SelectorTypeError,
    InvariantViolation,
    InvalidChainError,
    EmptySequenceError
)

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "create",
    "create_with",
    "from_triple",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "natural_numbers",
    "P",
    "functions",
    "RawIterator",
    "Triple",
    "Context",
    "HashSet",
    "Lookup",
    "Grouping",
    "SortKey",
    "SortKeyList",
    "SourceKind",
    "get_iterator",
    "source_kind",
    "EngineConfig",
    "config",
    "configure",
    "reset_config",
    "PullqError",
    "ArgumentError",
    "NotIterableError",
    "SelectorTypeError",
    "InvariantViolation",
    "InvalidChainError",
    "EmptySequenceError"
]
