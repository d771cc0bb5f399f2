r"""Validation of request configurations.

The validator stops at the first violation. It reports the violation
through a warning log record and never raises; callers decide whether
an invalid configuration is an error.
"""

from __future__ import annotations

__all__ = ["find_configuration_error", "validate_configuration"]

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING

from httpstrategy.request import HttpMethod

if TYPE_CHECKING:
    from httpstrategy.core.config import RequestConfig

logger: logging.Logger = logging.getLogger(__name__)


def find_configuration_error(config: RequestConfig) -> str | None:
    """Return the message of the first violation in a configuration.

    The checks run in this order: method, url, headers, query
    parameters, retry budget type, retry budget finiteness and sign,
    bearer, and finally strategies and side effects.

    Args:
        config: The configuration to check.

    Returns:
        The diagnostic message, or ``None`` if the configuration is
        valid.

    Example:
        ```pycon
        >>> from httpstrategy.core.config import RequestConfig
        >>> from httpstrategy.core.validation import find_configuration_error
        >>> from httpstrategy.request import HttpMethod
        >>> find_configuration_error(RequestConfig(method=HttpMethod.GET))
        'No url configured'
        >>> find_configuration_error(RequestConfig(method=HttpMethod.GET, url="https://a.b"))

        ```
    """
    if not isinstance(config.method, HttpMethod):
        return "HTTP method not defined or is invalid"
    if not config.url or not isinstance(config.url, str):
        return "No url configured"
    if not isinstance(config.headers, Mapping):
        return "Headers must be a mapping"
    if config.query_params is not None and not isinstance(config.query_params, Mapping):
        return "Parameters must be a mapping"
    if isinstance(config.max_retry, bool) or not isinstance(config.max_retry, (int, float)):
        return "Max retries must be a number"
    if not math.isfinite(config.max_retry):
        return f"Max retries must be finite, got {config.max_retry}"
    if config.max_retry < 0:
        return f"Max retries must be >= 0, got {config.max_retry}"
    if config.bearer is not None and not (
        isinstance(config.bearer, str) or callable(config.bearer)
    ):
        return "Authorization must be a token or a token provider"
    if not all(callable(func) for func in (*config.strategies, *config.side_effects)):
        return "Strategies must be callable"
    return None


def validate_configuration(config: RequestConfig) -> bool:
    """Check whether a configuration can be executed.

    Args:
        config: The configuration to check.

    Returns:
        ``True`` if the configuration is valid. Otherwise a warning is
        logged with the first violation and ``False`` is returned.

    Example:
        ```pycon
        >>> from httpstrategy.core.config import RequestConfig
        >>> from httpstrategy.core.validation import validate_configuration
        >>> from httpstrategy.request import HttpMethod
        >>> validate_configuration(RequestConfig(method=HttpMethod.GET, url="https://a.b"))
        True
        >>> validate_configuration(RequestConfig(url="https://a.b"))
        False

        ```
    """
    message = find_configuration_error(config)
    if message is not None:
        logger.warning(message)
        return False
    return True
