"""
Verbosity-gated logging on top of Loguru.

LOG() checks the verbosity of the ProgramState connected to the current
context, so the scanning engine can trace itself without a state argument.
Used as a library (no connected state) the engine logs nothing.

Levels:
    1 = CLI progress (default)
    2 = per-stage detail (-v)
    3 = compiler, scanner and binder traces (-vv)

Usage:
    from formscan.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Scanned 12 records", level=1)
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

_connected_state: ContextVar[Optional[Any]] = ContextVar("formscan_state", default=None)

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>.<cyan>{function: <18}</cyan> ║ "
    "<level>{message}</level>"
)


def logger_configure(sink: Any = sys.stderr) -> int:
    """
    Route LOG() output to a single sink.

    Replaces every previously installed loguru handler.

    Args:
        sink: Anything loguru accepts as a sink (stream, path, callable)

    Returns:
        The loguru handler id
    """
    logger.remove()
    return logger.add(sink, format=LOG_FORMAT, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make a state's verbosity govern LOG() calls in the current context.

    Call at the start of each pipeline stage; None disconnects.

    Args:
        state: Object with a `verbosity` attribute (normally ProgramState)
    """
    _connected_state.set(state)


def verbosity_current() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    return getattr(_connected_state.get(), "verbosity", 0)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required
        **kwargs: Additional loguru arguments
    """
    if verbosity_current() >= level:
        logger.opt(depth=1).debug(message, **kwargs)


logger_configure()
