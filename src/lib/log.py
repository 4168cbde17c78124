"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing. Library callers that
never connect a state get no output at all.

Usage:
    from msgmarkup.lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Formatting message...", level=1)
    LOG("Parsed 12 top-level nodes", level=2)
    LOG("BOLD at 17 closes at 25", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def sink_configure() -> int:
    """
    Replace loguru's handlers with the msgmarkup stderr sink.

    Called by the CLI only; library users keep their own handlers.

    Returns:
        Handler id of the added sink
    """
    logger.remove()
    return logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Call this at the start of a pipeline to make the state's verbosity
    setting available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def state_disconnectFromLogger() -> None:
    """Detach any ProgramState from the logging context"""
    _program_state.set(None)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    state = _program_state.get()
    if state is None:
        return 0
    return getattr(state, 'verbosity', 0)


def LOG(message: str, level: int = 1, force: bool = False, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        force: Emit regardless of verbosity (debug mode)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v)
        3 = Parser trace (-vv or higher)
    """
    if force or verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
