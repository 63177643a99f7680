class PullqError(Exception):
    """base class for every error raised by the engine"""
    pass


class ArgumentError(PullqError, ValueError):
    """a required operator argument is missing or invalid. raised while the chain is built."""
    pass


class NotIterableError(PullqError, TypeError):
    """the object is not a supported sequence source"""
    pass


class SelectorTypeError(PullqError, TypeError):
    """a flattening selector returned something that is not a container"""
    pass


class InvariantViolation(PullqError, ValueError):
    """a caller-supplied function broke a guarantee the engine relies on"""
    pass


class InvalidChainError(PullqError, TypeError):
    """the operator cannot follow the node it was called on"""
    pass


class EmptySequenceError(PullqError, ValueError):
    """the sequence contains no (matching) elements and no default was given"""
    pass


def require(value, name: str) -> None:
    """build-time check for required operator arguments"""
    if value is None:
        raise ArgumentError(f"{name} cannot be none")
