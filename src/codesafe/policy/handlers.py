"""Ready-made exception handlers.

Handlers are plain callables ``failure -> failure-or-None``; these
factories cover the common cases so scopes can be configured in one line:

    registry.append_handlers(
        PaymentService,
        translate(KeyError, lambda e: LookupError(f"unknown account {e}")),
        log_and_propagate(logger),
    )
"""

import logging
from typing import Callable, Optional, Union, get_args

from codesafe.config import get_config
from codesafe.contracts import require
from codesafe.policy.exception_policy import Handler
from codesafe.schemas.param import LogLevel

__all__ = [
    'absorb',
    'absorb_all',
    'propagate',
    'log_and_absorb',
    'log_and_propagate',
    'translate',
]

ExcTypes = Union[type[BaseException], tuple[type[BaseException], ...]]

_LEVEL_NAMES = frozenset(get_args(LogLevel))


def _level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        return get_config().logging.level("handler_level")
    if isinstance(level, str):
        name = level.strip().upper()
        if name == "WARN":
            name = "WARNING"
        require(name in _LEVEL_NAMES, f"Unknown log level: {level!r}")
        return logging.getLevelName(name)
    require(isinstance(level, int) and not isinstance(level, bool),
            f"Log level must be a level name or an int, got {level!r}")
    return level


def absorb_all(failure: Exception) -> None:
    """Absorb every failure silently."""
    return None


def propagate(failure: Exception) -> Exception:
    """Pass the failure along unchanged."""
    return failure


def absorb(*types: type[BaseException]) -> Handler:
    """Absorb failures of the given types, pass everything else along."""
    require(bool(types), "absorb() needs at least one exception type")

    def handler(failure: Exception) -> Optional[Exception]:
        return None if isinstance(failure, types) else failure

    return handler


def translate(types: ExcTypes, factory: Callable[[Exception], Exception]) -> Handler:
    """Substitute failures of ``types`` with ``factory(failure)``.

    The substitute keeps the original as ``__cause__``.
    """
    def handler(failure: Exception) -> Exception:
        if not isinstance(failure, types):
            return failure
        replacement = factory(failure)
        if replacement.__cause__ is None and replacement is not failure:
            replacement.__cause__ = failure
        return replacement

    return handler


def log_and_absorb(logger: logging.Logger, level: Optional[Union[int, str]] = None,
                   message: str = "Absorbed failure") -> Handler:
    """Log the failure with its traceback, then absorb it."""
    lvl = _level(level)

    def handler(failure: Exception) -> None:
        logger.log(lvl, f"{message}: {failure!r}", exc_info=failure)
        return None

    return handler


def log_and_propagate(logger: logging.Logger, level: Optional[Union[int, str]] = None,
                      message: str = "Failure") -> Handler:
    """Log the failure with its traceback, then pass it along."""
    lvl = _level(level)

    def handler(failure: Exception) -> Exception:
        logger.log(lvl, f"{message}: {failure!r}", exc_info=failure)
        return failure

    return handler
