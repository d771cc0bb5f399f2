r"""Request configuration snapshot and defaults.

This module provides the configuration constants and the frozen
dataclass holding everything the request executor needs to run one
request: request fields, retry budget, strategies and side effects.
"""

from __future__ import annotations

__all__ = ["DEFAULT_MAX_RETRY", "DEFAULT_TIMEOUT", "BearerToken", "RequestConfig"]

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from httpstrategy.strategies import (
    default_failed_strategy,
    default_no_content_strategy,
    default_refresh_token_strategy,
    default_retry_fallback_strategy,
    default_success_strategy,
    default_unauthorized_strategy,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from httpstrategy.request import HttpMethod, ResponseType

# Default maximum number of dispatch attempts, refresh-triggered
# redispatches included
DEFAULT_MAX_RETRY = 2

# Default timeout in seconds used by the httpx transport
DEFAULT_TIMEOUT = 10.0

# A token, or a zero-argument provider returning one (possibly awaitable)
BearerToken = Union[str, Callable[[], Union[str, Awaitable[str]]]]


@dataclass(frozen=True)
class RequestConfig:
    """Immutable snapshot of one request configuration.

    The executor never mutates a configuration. Each attempt derives a
    fresh request descriptor from it.

    Args:
        method: The HTTP method. ``None`` until one is chosen.
        url: The URL to send the request to.
        headers: The request headers.
        bearer: Optional bearer token or token provider. A provider is
            called at the start of every attempt.
        query_params: Optional query parameters.
        response_type: Optional response decoding hint.
        body: Optional request body.
        max_retry: Maximum number of dispatch attempts before the retry
            fallback strategy is used. ``0`` means no dispatch at all.
        retry_fallback_strategy: Called with the descriptor when the
            retry budget is exhausted.
        unauthorized_strategy: Called with the response on a 401 that
            was not followed by a successful token refresh.
        failed_strategy: Called with the response on a failure.
        no_content_strategy: Called with the response on a 204.
        success_strategy: Called with the response on any other 2xx.
        refresh_token_strategy: Called without arguments on a 401.
            A truthy result triggers a new attempt.
        retry_fallback_side_effects: Run before the retry fallback
            strategy.
        unauthorized_side_effects: Run before the unauthorized strategy.
        failed_side_effects: Run before the failed strategy.
        success_side_effects: Run before the success and no content
            strategies.

    Example:
        ```pycon
        >>> from httpstrategy.core.config import RequestConfig
        >>> from httpstrategy.request import HttpMethod
        >>> config = RequestConfig(method=HttpMethod.GET, url="https://api.example.com/data")
        >>> config.max_retry
        2

        ```
    """

    method: HttpMethod | None = None
    url: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    bearer: BearerToken | None = None
    query_params: Mapping[str, str] | None = None
    response_type: ResponseType | None = None
    body: Any = None
    max_retry: int = DEFAULT_MAX_RETRY

    retry_fallback_strategy: Callable[..., Any] = default_retry_fallback_strategy
    unauthorized_strategy: Callable[..., Any] = default_unauthorized_strategy
    failed_strategy: Callable[..., Any] = default_failed_strategy
    no_content_strategy: Callable[..., Any] = default_no_content_strategy
    success_strategy: Callable[..., Any] = default_success_strategy
    refresh_token_strategy: Callable[[], Any] = default_refresh_token_strategy

    retry_fallback_side_effects: tuple[Callable[..., Any], ...] = ()
    unauthorized_side_effects: tuple[Callable[..., Any], ...] = ()
    failed_side_effects: tuple[Callable[..., Any], ...] = ()
    success_side_effects: tuple[Callable[..., Any], ...] = ()

    @property
    def strategies(self) -> tuple[Callable[..., Any], ...]:
        r"""All strategy slots, in validation order."""
        return (
            self.retry_fallback_strategy,
            self.unauthorized_strategy,
            self.failed_strategy,
            self.no_content_strategy,
            self.success_strategy,
            self.refresh_token_strategy,
        )

    @property
    def side_effects(self) -> tuple[Callable[..., Any], ...]:
        r"""All side effects of every sequence, flattened."""
        return (
            *self.retry_fallback_side_effects,
            *self.unauthorized_side_effects,
            *self.failed_side_effects,
            *self.success_side_effects,
        )
