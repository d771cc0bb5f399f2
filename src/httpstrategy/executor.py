r"""Request executor: dispatch, classify, refresh and terminate.

This module provides the ``RequestExecutor`` class that runs one request
configuration to completion. Each attempt derives a fresh request
descriptor from the configuration, dispatches it through a transport,
classifies the response and hands it to exactly one terminal strategy.
An unauthorized response may trigger a token refresh followed by a new
attempt; refresh-triggered attempts share the ``max_retry`` budget with
every other attempt.
"""

from __future__ import annotations

__all__ = ["RequestExecutor", "build_descriptor"]

import logging
from typing import TYPE_CHECKING, Any

from httpstrategy.classifier import Classification, classify_response
from httpstrategy.request import RequestDescriptor
from httpstrategy.strategies import resolve, run_side_effects

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from httpstrategy.core.config import RequestConfig
    from httpstrategy.response import Response
    from httpstrategy.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


def build_descriptor(config: RequestConfig) -> RequestDescriptor:
    """Derive a fresh request descriptor from a configuration.

    The descriptor gets its own copy of the configured headers and no
    authorization header.

    Args:
        config: The request configuration.

    Returns:
        A new request descriptor.

    Example:
        ```pycon
        >>> from httpstrategy.core.config import RequestConfig
        >>> from httpstrategy.executor import build_descriptor
        >>> config = RequestConfig(url="https://api.example.com/data", headers={"X-A": "1"})
        >>> descriptor = build_descriptor(config)
        >>> descriptor.url, descriptor.headers
        ('https://api.example.com/data', {'X-A': '1'})

        ```
    """
    return RequestDescriptor(
        url=config.url,
        body=config.body,
        headers=config.headers,
        query_params=config.query_params,
        response_type=config.response_type,
    )


class RequestExecutor:
    """Execute request configurations against a transport.

    The executor is stateless between calls: every ``execute`` call owns
    its attempt counter, and attempts run one after the other.

    Args:
        transport: The transport used to dispatch requests.

    Example:
        ```pycon
        >>> import asyncio
        >>> from httpstrategy.core.config import RequestConfig
        >>> from httpstrategy.executor import RequestExecutor
        >>> from httpstrategy.request import HttpMethod
        >>> from httpstrategy.transport import HttpxTransport
        >>> async def main():  # doctest: +SKIP
        ...     async with HttpxTransport() as transport:
        ...         executor = RequestExecutor(transport)
        ...         return await executor.execute(
        ...             RequestConfig(method=HttpMethod.GET, url="https://api.example.com/data")
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    async def execute(self, config: RequestConfig) -> Any:
        """Run a configuration until a terminal strategy returns.

        The configuration is assumed to be valid.

        Args:
            config: The request configuration.

        Returns:
            The result of the terminal strategy.

        Raises:
            Exception: Anything raised by the transport, a strategy or a
                side effect propagates unchanged.
        """
        attempt = 0
        while True:
            descriptor = build_descriptor(config)
            if attempt >= config.max_retry:
                logger.debug(
                    f"{config.method.value} request to {config.url} exhausted its retry budget "
                    f"({config.max_retry} attempts)"
                )
                await run_side_effects(config.retry_fallback_side_effects, descriptor)
                return await resolve(config.retry_fallback_strategy(descriptor))

            await self._authorize(config, descriptor)
            logger.debug(
                f"{config.method.value} request to {config.url}: attempt "
                f"{attempt + 1}/{config.max_retry}"
            )
            response = await self.transport.dispatch(config.method, descriptor)
            classification = classify_response(response)
            logger.debug(
                f"{config.method.value} request to {config.url} classified as "
                f"{classification.value}"
            )

            if classification is Classification.UNAUTHORIZED:
                if await resolve(config.refresh_token_strategy()):
                    logger.debug(
                        f"Token refreshed, retrying {config.method.value} request to {config.url}"
                    )
                    attempt += 1
                    continue
                return await self._terminate(
                    config.unauthorized_side_effects, config.unauthorized_strategy, response
                )
            if classification is Classification.FAILED:
                return await self._terminate(
                    config.failed_side_effects, config.failed_strategy, response
                )
            if classification is Classification.NO_CONTENT:
                return await self._terminate(
                    config.success_side_effects, config.no_content_strategy, response
                )
            return await self._terminate(
                config.success_side_effects, config.success_strategy, response
            )

    async def _authorize(self, config: RequestConfig, descriptor: RequestDescriptor) -> None:
        r"""Set the bearer authorization header, resolving a token provider
        if needed."""
        bearer = config.bearer
        if callable(bearer):
            bearer = await resolve(bearer())
        if bearer:
            descriptor.set_header("Authorization", f"Bearer {bearer}")

    async def _terminate(
        self,
        side_effects: Iterable[Callable[..., Any]],
        strategy: Callable[..., Any],
        response: Response,
    ) -> Any:
        await run_side_effects(side_effects, response)
        return await resolve(strategy(response))
