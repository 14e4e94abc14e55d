"""
Error types shared by the bot core and plugins.

Only misconfiguration is fatal. Everything that can go wrong while a message
is being matched or answered is logged and degraded through attempt().
"""

import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigurationError(Exception):
    """Invalid configuration detected at startup."""
    pass


class TransientLookupError(Exception):
    """A runtime lookup failed; callers degrade instead of aborting."""
    pass


def attempt(
    operation: Callable[..., T],
    fallback: T,
    description: str,
    *args: Any,
    errors: tuple[type[BaseException], ...] = (Exception,),
    **kwargs: Any
) -> T:
    """
    Run operation(*args, **kwargs), returning fallback if it raises.

    Args:
        operation: Callable to run
        fallback: Value returned when operation raises one of errors
        description: What was being attempted, used in the log line
        errors: Exception types to absorb; anything else propagates

    Returns:
        The operation's result, or fallback on failure
    """
    try:
        return operation(*args, **kwargs)
    except errors as e:
        logger.warning(f"{description}: {e}")
        return fallback
