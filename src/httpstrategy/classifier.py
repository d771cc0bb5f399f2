r"""Response classification policy.

Every response is classified into exactly one bucket. The checks run in
a fixed order: ``UNAUTHORIZED`` first, then ``FAILED``, then
``NO_CONTENT``, and ``SUCCESS`` otherwise. A 401 therefore never
reaches the generic failure branch.
"""

from __future__ import annotations

__all__ = [
    "Classification",
    "classify_response",
    "get_status_code",
    "is_failed",
    "is_no_content",
    "is_unauthorized",
]

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpstrategy.response import Response

UNAUTHORIZED_STATUS = 401
NO_CONTENT_STATUS = 204


class Classification(str, Enum):
    """Outcome buckets of a dispatch."""

    UNAUTHORIZED = "unauthorized"
    FAILED = "failed"
    NO_CONTENT = "no_content"
    SUCCESS = "success"


def get_status_code(response: Response | None) -> int | None:
    """Return the status code of a response, looking into the nested
    response of a transport error when there is no direct status.

    Args:
        response: The response, possibly ``None``.

    Returns:
        The status code, or ``None`` if it cannot be read.

    Example:
        ```pycon
        >>> from httpstrategy.classifier import get_status_code
        >>> from httpstrategy.response import Response
        >>> get_status_code(Response(status_code=200))
        200
        >>> get_status_code(Response(status_code=None, response=Response(status_code=401)))
        401
        >>> get_status_code(None)

        ```
    """
    if response is None:
        return None
    if response.status_code:
        return response.status_code
    if response.response is not None:
        return response.response.status_code
    return None


def is_unauthorized(response: Response | None) -> bool:
    r"""Return ``True`` if the direct or nested status is 401."""
    return get_status_code(response) == UNAUTHORIZED_STATUS


def is_failed(response: Response | None) -> bool:
    r"""Return ``True`` if the response is absent or its status is not
    2xx."""
    status_code = get_status_code(response)
    return status_code is None or not 200 <= status_code < 300


def is_no_content(response: Response | None) -> bool:
    r"""Return ``True`` if the direct status is 204."""
    return response is not None and response.status_code == NO_CONTENT_STATUS


def classify_response(response: Response | None) -> Classification:
    """Classify a response.

    Args:
        response: The response to classify. ``None`` stands for a
            dispatch that produced no response at all.

    Returns:
        The classification of the response.

    Example:
        ```pycon
        >>> from httpstrategy.classifier import classify_response
        >>> from httpstrategy.response import Response
        >>> classify_response(Response(status_code=200)).value
        'success'
        >>> classify_response(Response(status_code=204)).value
        'no_content'
        >>> classify_response(Response(status_code=401)).value
        'unauthorized'
        >>> classify_response(None).value
        'failed'

        ```
    """
    if is_unauthorized(response):
        return Classification.UNAUTHORIZED
    if is_failed(response):
        return Classification.FAILED
    if is_no_content(response):
        return Classification.NO_CONTENT
    return Classification.SUCCESS
