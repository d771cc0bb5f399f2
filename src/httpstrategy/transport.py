r"""Transports performing one HTTP exchange per request descriptor.

The executor only depends on the ``Transport`` protocol. The default
implementation, ``HttpxTransport``, is built on ``httpx.AsyncClient``.

The default transport is either installed explicitly with
``set_default_transport`` and shared by every event loop, or created by
``get_default_transport`` on first use in each event loop. It lives until
``close_default_transport`` is awaited or its event loop is closed.
"""

from __future__ import annotations

__all__ = [
    "HttpxTransport",
    "Transport",
    "close_default_transport",
    "get_default_transport",
    "set_default_transport",
]

import asyncio
import logging
import weakref
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from httpstrategy.core.config import DEFAULT_TIMEOUT
from httpstrategy.request import HttpMethod
from httpstrategy.response import Response

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from httpstrategy.request import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Perform one HTTP exchange."""

    async def dispatch(self, method: HttpMethod, descriptor: RequestDescriptor) -> Response:
        """Send the request described by ``descriptor``.

        Args:
            method: The HTTP method.
            descriptor: The request descriptor.

        Returns:
            The response. Implementations should turn network failures
            into transport-error responses rather than raise.
        """


class HttpxTransport:
    r"""Transport built on ``httpx.AsyncClient``.

    The transport either wraps an injected client or owns one it creates
    itself. Only an owned client is closed by ``aclose``.

    Args:
        client: Optional preconfigured ``httpx.AsyncClient``.
        timeout: Timeout used when the transport creates its own client.
        normalize_errors: If ``True``, httpx errors are turned into
            transport-error responses, which classify as failures (or
            as unauthorized when they carry a 401 response). If
            ``False``, httpx errors propagate to the caller.

    Example:
        ```pycon
        >>> import asyncio
        >>> from httpstrategy.request import HttpMethod, RequestDescriptor
        >>> from httpstrategy.transport import HttpxTransport
        >>> async def main():  # doctest: +SKIP
        ...     async with HttpxTransport(timeout=30) as transport:
        ...         return await transport.dispatch(
        ...             HttpMethod.GET, RequestDescriptor(url="https://api.example.com/data")
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        normalize_errors: bool = True,
    ) -> None:
        self._owns_client = client is None
        self._client: httpx.AsyncClient | None = (
            client if client is not None else httpx.AsyncClient(timeout=timeout)
        )
        self.normalize_errors = normalize_errors

    async def __aenter__(self) -> Self:
        self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        r"""``True`` once ``aclose`` has been awaited."""
        return self._client is None

    async def aclose(self) -> None:
        """Close the transport, and the underlying client if owned."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the underlying client.

        Raises:
            RuntimeError: If the transport is closed.
        """
        if self._client is None:
            msg = "HttpxTransport is closed"
            raise RuntimeError(msg)
        return self._client

    async def dispatch(self, method: HttpMethod, descriptor: RequestDescriptor) -> Response:
        """Send the request described by ``descriptor``.

        Args:
            method: The HTTP method.
            descriptor: The request descriptor.

        Returns:
            The response, or a transport-error response if the request
            failed and ``normalize_errors`` is set.

        Raises:
            httpx.HTTPError: If the request failed and
                ``normalize_errors`` is not set.
            RuntimeError: If the transport is closed.
        """
        client = self._ensure_client()
        method = HttpMethod(method)
        logger.debug(f"Dispatching {method.value} request to {descriptor.url}")
        try:
            raw = await client.request(
                method.value,
                descriptor.url,
                params=descriptor.query_params,
                headers=descriptor.headers,
                **_body_kwargs(method, descriptor.body),
            )
        except httpx.HTTPStatusError as exc:
            if not self.normalize_errors:
                raise
            logger.debug(
                f"{method.value} request to {descriptor.url} raised status error "
                f"{exc.response.status_code}"
            )
            return Response.from_error(exc, exc.response, descriptor.response_type)
        except httpx.RequestError as exc:
            if not self.normalize_errors:
                raise
            logger.debug(
                f"{method.value} request to {descriptor.url} encountered "
                f"{type(exc).__name__}: {exc}"
            )
            return Response.from_error(exc)
        logger.debug(f"{method.value} request to {descriptor.url} returned {raw.status_code}")
        return Response.from_httpx(raw, descriptor.response_type)


def _body_kwargs(method: HttpMethod, body: Any) -> dict[str, Any]:
    r"""Map a request body onto ``httpx`` keyword arguments.

    GET requests never carry a body. ``str`` and ``bytes`` are sent as raw
    content, anything else as JSON.
    """
    if body is None or method is HttpMethod.GET:
        return {}
    if isinstance(body, (str, bytes)):
        return {"content": body}
    return {"json": body}


# Explicitly installed default, shared by every event loop
_default_transport: Transport | None = None

# Lazily created defaults, one per event loop: an httpx connection pool
# must not outlive the loop it was opened on
_loop_transports: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, HttpxTransport] = (
    weakref.WeakKeyDictionary()
)


def get_default_transport() -> Transport:
    """Return the default transport for the running event loop.

    If a transport was installed with ``set_default_transport``, it is
    returned. Otherwise an ``HttpxTransport`` is created on the first
    call made from each event loop and reused for later calls from the
    same loop. Transports of closed loops are forgotten.

    Returns:
        The default transport.

    Raises:
        RuntimeError: If no transport was installed and there is no
            running event loop.
    """
    if _default_transport is not None:
        return _default_transport
    loop = asyncio.get_running_loop()
    for stale in [other for other in _loop_transports if other.is_closed()]:
        logger.debug("Forgetting the default HttpxTransport of a closed event loop")
        del _loop_transports[stale]
    transport = _loop_transports.get(loop)
    if transport is None:
        logger.debug("Creating the default HttpxTransport for the running event loop")
        transport = _loop_transports[loop] = HttpxTransport()
    return transport


def set_default_transport(transport: Transport | None) -> None:
    """Install the process-wide default transport.

    Args:
        transport: The transport to use by default from every event
            loop. ``None`` resets the default and forgets the
            transports created per event loop, so the next
            ``get_default_transport`` creates a new one. Previous
            transports are not closed.
    """
    global _default_transport  # noqa: PLW0603
    _default_transport = transport
    if transport is None:
        _loop_transports.clear()


async def close_default_transport() -> None:
    """Close and forget the installed default transport, if any, and the
    default transport created for the running event loop, if any."""
    global _default_transport  # noqa: PLW0603
    transport, _default_transport = _default_transport, None
    aclose = getattr(transport, "aclose", None)
    if aclose is not None:
        await aclose()
    loop_transport = _loop_transports.pop(asyncio.get_running_loop(), None)
    if loop_transport is not None:
        await loop_transport.aclose()
