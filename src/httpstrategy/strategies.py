r"""Default strategies and helpers to invoke strategies and side
effects.

Strategies and side effects may be plain functions or coroutine
functions. Their results are awaited when awaitable, so both flavors can
be mixed freely in one configuration.
"""

from __future__ import annotations

__all__ = [
    "default_failed_strategy",
    "default_no_content_strategy",
    "default_refresh_token_strategy",
    "default_retry_fallback_strategy",
    "default_success_strategy",
    "default_unauthorized_strategy",
    "resolve",
    "run_side_effects",
]

import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from httpstrategy.request import RequestDescriptor
    from httpstrategy.response import Response

logger: logging.Logger = logging.getLogger(__name__)


def default_success_strategy(response: Response) -> Any:
    r"""Return the decoded body of the response."""
    return response.data


def default_no_content_strategy(response: Response) -> bool:  # noqa: ARG001
    return True


def default_failed_strategy(response: Response) -> bool:  # noqa: ARG001
    return False


def default_unauthorized_strategy(response: Response) -> None:  # noqa: ARG001
    return None


def default_retry_fallback_strategy(descriptor: RequestDescriptor) -> None:  # noqa: ARG001
    return None


def default_refresh_token_strategy() -> bool:
    r"""Never refresh: an unauthorized response is final."""
    return False


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as is.

    Args:
        value: The value returned by a strategy or side effect.

    Returns:
        The resolved value.

    Example:
        ```pycon
        >>> import asyncio
        >>> from httpstrategy.strategies import resolve
        >>> async def answer():
        ...     return 42
        ...
        >>> asyncio.run(resolve(answer()))
        42
        >>> asyncio.run(resolve(42))
        42

        ```
    """
    if inspect.isawaitable(value):
        return await value
    return value


async def run_side_effects(side_effects: Iterable[Callable[..., Any]], *args: Any) -> None:
    """Run side effects in registration order, discarding their results.

    Each side effect completes (awaited if needed) before the next one
    starts. An exception raised by a side effect propagates and stops
    the sequence.

    Args:
        side_effects: The side effects to run.
        *args: The positional arguments passed to every side effect.
    """
    for side_effect in side_effects:
        logger.debug(f"Running side effect {getattr(side_effect, '__name__', side_effect)!r}")
        await resolve(side_effect(*args))
