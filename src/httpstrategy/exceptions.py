r"""Exceptions raised by httpstrategy.

Classified failures (failed, unauthorized, exhausted retries) are not
exceptions: they are routed through strategies. Exceptions are reserved
for invalid configurations in strict mode and transport misuse.
"""

from __future__ import annotations

__all__ = ["HttpStrategyError", "InvalidConfigurationError"]


class HttpStrategyError(Exception):
    r"""Base class of the exceptions raised by httpstrategy."""


class InvalidConfigurationError(HttpStrategyError):
    """Raised when a request configuration fails validation.

    Args:
        message: The diagnostic of the first violation.

    Example:
        ```pycon
        >>> from httpstrategy.exceptions import InvalidConfigurationError
        >>> error = InvalidConfigurationError("No url configured")
        >>> error.message
        'No url configured'

        ```
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
