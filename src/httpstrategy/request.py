r"""Request value objects: HTTP methods, response type hints and the
per-attempt request descriptor."""

from __future__ import annotations

__all__ = ["HttpMethod", "RequestDescriptor", "ResponseType"]

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


class HttpMethod(str, Enum):
    """HTTP methods supported by the request executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ResponseType(str, Enum):
    """Hint telling the transport how to decode a response body.

    When no hint is given, the body is decoded as ``JSON`` with a
    fallback to text for non-JSON payloads.
    """

    JSON = "json"
    TEXT = "text"
    BYTES = "bytes"


@dataclass
class RequestDescriptor:
    """Describe one dispatch attempt.

    A descriptor is derived from the request configuration at the start
    of every attempt and discarded afterwards. It owns a copy of the
    configured headers, so adding a header never leaks back into the
    configuration or into the next attempt.

    Attributes:
        url: The URL to send the request to.
        body: The request body, if any.
        headers: The request headers. Always a dict, empty by default.
        query_params: The query parameters, if any.
        response_type: The response decoding hint, if any.

    Example:
        ```pycon
        >>> from httpstrategy.request import RequestDescriptor
        >>> descriptor = RequestDescriptor(url="https://api.example.com/data")
        >>> descriptor.set_header("Authorization", "Bearer abc")
        >>> descriptor.headers
        {'Authorization': 'Bearer abc'}

        ```
    """

    url: str
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] | None = None
    response_type: ResponseType | None = None

    def __post_init__(self) -> None:
        self.headers = dict(self.headers) if self.headers is not None else {}

    def set_header(self, key: str, value: str) -> None:
        """Set a header on this descriptor.

        Args:
            key: The header name.
            value: The header value. Replaces any previous value.
        """
        self.headers[key] = value
