r"""Response value object handed to strategies and side effects.

A ``Response`` is either a regular HTTP response (``status_code`` is
set) or a transport-error response. A transport-error response has no
direct status code; it carries the error and, when the error itself
wraps an HTTP response, that response as ``response``.
"""

from __future__ import annotations

__all__ = ["Response", "decode_body"]

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from httpstrategy.request import ResponseType

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class Response:
    """Outcome of one dispatch.

    Attributes:
        status_code: The HTTP status code, or ``None`` for a
            transport-error response.
        data: The decoded response body.
        headers: The response headers.
        response: The nested response of a transport error, if any.
        error: The transport error, if any.
        raw: The underlying ``httpx.Response``, if any.

    Example:
        ```pycon
        >>> from httpstrategy.response import Response
        >>> response = Response(status_code=200, data={"ok": True})
        >>> response.data
        {'ok': True}
        >>> response.is_error
        False

        ```
    """

    status_code: int | None
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    response: Response | None = None
    error: Exception | None = None
    raw: httpx.Response | None = field(default=None, repr=False, compare=False)

    @property
    def is_error(self) -> bool:
        r"""``True`` if this response stands for a transport error."""
        return self.error is not None

    @classmethod
    def from_httpx(
        cls, raw: httpx.Response, response_type: ResponseType | None = None
    ) -> Response:
        """Wrap an ``httpx.Response``, decoding its body.

        Args:
            raw: The httpx response. Its body must already be read.
            response_type: The decoding hint.

        Returns:
            The wrapped response.
        """
        return cls(
            status_code=raw.status_code,
            data=decode_body(raw, response_type),
            headers=dict(raw.headers),
            raw=raw,
        )

    @classmethod
    def from_error(
        cls,
        error: Exception,
        nested: httpx.Response | None = None,
        response_type: ResponseType | None = None,
    ) -> Response:
        """Create a transport-error response.

        Args:
            error: The transport error.
            nested: The HTTP response carried by the error, if any.
            response_type: The decoding hint for the nested response.

        Returns:
            A response without a direct status code.
        """
        return cls(
            status_code=None,
            response=cls.from_httpx(nested, response_type) if nested is not None else None,
            error=error,
        )


def decode_body(raw: httpx.Response, response_type: ResponseType | None = None) -> Any:
    """Decode a response body according to a response type hint.

    Args:
        raw: The httpx response.
        response_type: The decoding hint. ``None`` behaves like
            ``ResponseType.JSON``.

    Returns:
        ``bytes`` for ``BYTES``, ``str`` for ``TEXT``. For ``JSON``, the
        parsed payload, the text when the body is not valid JSON, or
        ``None`` for an empty body.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpstrategy.request import ResponseType
        >>> from httpstrategy.response import decode_body
        >>> decode_body(httpx.Response(200, json={"a": 1}))
        {'a': 1}
        >>> decode_body(httpx.Response(200, text="hello"), ResponseType.TEXT)
        'hello'

        ```
    """
    if response_type is ResponseType.BYTES:
        return raw.content
    if response_type is ResponseType.TEXT:
        return raw.text
    if not raw.content:
        return None
    try:
        return raw.json()
    except ValueError:
        logger.debug("Response body is not valid JSON, falling back to text")
        return raw.text
