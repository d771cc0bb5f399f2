r"""Fluent builder assembling a request configuration and sending it.

Every setter returns the builder, so a whole request can be described
in one chained expression and sent with ``send``.
"""

from __future__ import annotations

__all__ = ["HttpBuilder"]

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from httpstrategy.core.config import DEFAULT_MAX_RETRY, RequestConfig
from httpstrategy.core.validation import find_configuration_error, validate_configuration
from httpstrategy.exceptions import InvalidConfigurationError
from httpstrategy.executor import RequestExecutor
from httpstrategy.request import HttpMethod
from httpstrategy.strategies import (
    default_failed_strategy,
    default_no_content_strategy,
    default_refresh_token_strategy,
    default_retry_fallback_strategy,
    default_success_strategy,
    default_unauthorized_strategy,
)
from httpstrategy.transport import get_default_transport

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Self

    from httpstrategy.core.config import BearerToken
    from httpstrategy.request import ResponseType
    from httpstrategy.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


class HttpBuilder:
    r"""Accumulate a request configuration and send it.

    Strategies default to trivial implementations, so only the branches
    a caller cares about need a handler: success returns the decoded
    body, no content returns ``True``, failure returns ``False``,
    unauthorized and retry fallback return ``None``, and tokens are
    never refreshed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from httpstrategy import HttpBuilder
        >>> async def main():  # doctest: +SKIP
        ...     return await (
        ...         HttpBuilder()
        ...         .as_get()
        ...         .with_url("https://api.example.com/data")
        ...         .with_authorization("my-token")
        ...         .with_max_retries(3)
        ...         .with_success_strategy(lambda response: response.data["items"])
        ...         .with_failed_side_effect(lambda response: print(response.status_code))
        ...         .send()
        ...     )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self) -> None:
        self.method: HttpMethod | str | None = None
        self.url: str | None = None
        self.bearer: BearerToken | None = None
        self.headers: Mapping[str, str] = {}
        self.query_params: Mapping[str, str] | None = None
        self.response_type: ResponseType | None = None
        self.body: Any = None
        self.max_retry: int = DEFAULT_MAX_RETRY

        self.retry_fallback_strategy: Callable[..., Any] = default_retry_fallback_strategy
        self.unauthorized_strategy: Callable[..., Any] = default_unauthorized_strategy
        self.failed_strategy: Callable[..., Any] = default_failed_strategy
        self.no_content_strategy: Callable[..., Any] = default_no_content_strategy
        self.success_strategy: Callable[..., Any] = default_success_strategy
        self.refresh_token_strategy: Callable[[], Any] = default_refresh_token_strategy

        self.retry_fallback_side_effects: list[Callable[..., Any]] = []
        self.unauthorized_side_effects: list[Callable[..., Any]] = []
        self.failed_side_effects: list[Callable[..., Any]] = []
        self.success_side_effects: list[Callable[..., Any]] = []

        self.transport: Transport | None = None

    # Method

    def as_get(self) -> Self:
        self.method = HttpMethod.GET
        return self

    def as_post(self) -> Self:
        self.method = HttpMethod.POST
        return self

    def as_put(self) -> Self:
        self.method = HttpMethod.PUT
        return self

    def as_delete(self) -> Self:
        self.method = HttpMethod.DELETE
        return self

    def with_method(self, method: HttpMethod | str) -> Self:
        """Set the HTTP method from an enum member or a verb.

        Args:
            method: An ``HttpMethod`` or a case-insensitive verb such
                as ``"post"``. An unknown verb is kept as is and
                rejected when the configuration is validated.

        Returns:
            The builder.
        """
        if isinstance(method, str) and not isinstance(method, HttpMethod):
            method = HttpMethod.__members__.get(method.upper(), method)
        self.method = method
        return self

    # Request

    def with_url(self, url: str) -> Self:
        self.url = url
        return self

    def with_authorization(self, bearer: BearerToken | None) -> Self:
        """Set the bearer token sent in the ``Authorization`` header.

        Args:
            bearer: A token, or a zero-argument callable returning one
                (possibly awaitable). A callable is called before every
                attempt, so a token updated by the refresh token
                strategy is used by the next attempt.

        Returns:
            The builder.
        """
        self.bearer = bearer
        return self

    def with_headers(self, headers: Mapping[str, str]) -> Self:
        self.headers = headers
        return self

    def with_params(self, params: Mapping[str, str] | None) -> Self:
        self.query_params = params
        return self

    def with_response_type(self, response_type: ResponseType | None) -> Self:
        self.response_type = response_type
        return self

    def with_body(self, body: Any) -> Self:
        self.body = body
        return self

    def with_max_retries(self, retries: int) -> Self:
        """Set the maximum number of dispatch attempts.

        Attempts triggered by a token refresh count against the same
        budget. With ``0`` no request is sent and the retry fallback
        strategy is used right away.

        Args:
            retries: The maximum number of attempts.

        Returns:
            The builder.
        """
        self.max_retry = retries
        return self

    def with_transport(self, transport: Transport) -> Self:
        """Set the transport used by ``send``.

        Args:
            transport: The transport. The default transport of the
                running event loop is used if none is set.

        Returns:
            The builder.
        """
        self.transport = transport
        return self

    # Strategies

    def with_retry_fallback_strategy(self, strategy: Callable[..., Any]) -> Self:
        self.retry_fallback_strategy = strategy
        return self

    def with_unauthorized_strategy(self, strategy: Callable[..., Any]) -> Self:
        self.unauthorized_strategy = strategy
        return self

    def with_failed_strategy(self, strategy: Callable[..., Any]) -> Self:
        self.failed_strategy = strategy
        return self

    def with_no_content_strategy(self, strategy: Callable[..., Any]) -> Self:
        self.no_content_strategy = strategy
        return self

    def with_success_strategy(self, strategy: Callable[..., Any]) -> Self:
        self.success_strategy = strategy
        return self

    def with_refresh_token_strategy(self, strategy: Callable[[], Any]) -> Self:
        """Set the strategy called when a response is unauthorized.

        Args:
            strategy: A zero-argument callable returning a truthy value
                (possibly awaitable) if the token was refreshed and the
                request should be sent again.

        Returns:
            The builder.
        """
        self.refresh_token_strategy = strategy
        return self

    # Side effects

    def with_retry_fallback_side_effect(self, side_effect: Callable[..., Any]) -> Self:
        self.retry_fallback_side_effects.append(side_effect)
        return self

    def with_unauthorized_side_effect(self, side_effect: Callable[..., Any]) -> Self:
        self.unauthorized_side_effects.append(side_effect)
        return self

    def with_failed_side_effect(self, side_effect: Callable[..., Any]) -> Self:
        self.failed_side_effects.append(side_effect)
        return self

    def with_success_side_effect(self, side_effect: Callable[..., Any]) -> Self:
        self.success_side_effects.append(side_effect)
        return self

    # Terminal operations

    def build(self) -> RequestConfig:
        """Snapshot the accumulated fields into a configuration.

        The configuration is not validated. Later changes to the
        builder do not affect the returned snapshot.

        Returns:
            The request configuration.
        """
        return RequestConfig(
            method=self.method,
            url=self.url,
            headers=dict(self.headers) if isinstance(self.headers, Mapping) else self.headers,
            bearer=self.bearer,
            query_params=(
                dict(self.query_params)
                if isinstance(self.query_params, Mapping)
                else self.query_params
            ),
            response_type=self.response_type,
            body=self.body,
            max_retry=self.max_retry,
            retry_fallback_strategy=self.retry_fallback_strategy,
            unauthorized_strategy=self.unauthorized_strategy,
            failed_strategy=self.failed_strategy,
            no_content_strategy=self.no_content_strategy,
            success_strategy=self.success_strategy,
            refresh_token_strategy=self.refresh_token_strategy,
            retry_fallback_side_effects=tuple(self.retry_fallback_side_effects),
            unauthorized_side_effects=tuple(self.unauthorized_side_effects),
            failed_side_effects=tuple(self.failed_side_effects),
            success_side_effects=tuple(self.success_side_effects),
        )

    async def send(self, *, strict: bool = False) -> Any:
        """Validate the configuration and execute the request.

        Args:
            strict: If ``True``, an invalid configuration raises instead
                of returning ``None``.

        Returns:
            The result of the terminal strategy, or ``None`` if the
            configuration is invalid and ``strict`` is not set.

        Raises:
            InvalidConfigurationError: If the configuration is invalid
                and ``strict`` is set.
        """
        config = self.build()
        if not validate_configuration(config):
            if strict:
                raise InvalidConfigurationError(find_configuration_error(config))
            return None
        transport = self.transport
        if transport is None:
            logger.debug("No transport configured, using the default transport")
            transport = get_default_transport()
        return await RequestExecutor(transport).execute(config)
