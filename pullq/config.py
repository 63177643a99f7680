from dataclasses import dataclass, asdict, fields
import logging

from .errors import ArgumentError

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """process-wide switches for the engine"""
    array_shortcuts: bool = True  # o(1) first/last/count/any on dense sources
    reject_null_selection: bool = True  # map() raises when the selector returns none
    allow_host_iterables: bool = True  # accept sets, generators and other plain iterables


config = EngineConfig()


def configure(**changes) -> EngineConfig:
    """update the active configuration in place and return it"""
    known = {f.name for f in fields(EngineConfig)}
    unknown = set(changes) - known
    if unknown:
        raise ArgumentError(f"unknown config option(s): {', '.join(sorted(unknown))}")
    for name, value in changes.items():
        setattr(config, name, value)
    logger.debug(f"config: {asdict(config)}")
    return config


def reset_config() -> EngineConfig:
    """restore the defaults"""
    return configure(**asdict(EngineConfig()))
