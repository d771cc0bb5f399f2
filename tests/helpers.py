r"""Shared test helpers for the request executor tests."""

from __future__ import annotations

__all__ = ["TEST_URL", "StubTransport", "create_response"]

from typing import TYPE_CHECKING, Any

from httpstrategy.response import Response

if TYPE_CHECKING:
    from collections.abc import Iterable

    from httpstrategy.request import HttpMethod, RequestDescriptor

TEST_URL = "https://api.test/x"


def create_response(status_code: int | None, data: Any = None) -> Response:
    """Create a response with the given status code and body."""
    return Response(status_code=status_code, data=data)


class StubTransport:
    """Transport returning scripted responses and recording dispatches.

    The last scripted response is repeated once the script runs out.

    Args:
        responses: The responses to return, in order.
    """

    def __init__(self, responses: Iterable[Response | None]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[HttpMethod, RequestDescriptor]] = []

    async def dispatch(self, method: HttpMethod, descriptor: RequestDescriptor) -> Response | None:
        self.calls.append((method, descriptor))
        index = min(len(self.calls), len(self.responses)) - 1
        return self.responses[index]

    @property
    def dispatch_count(self) -> int:
        return len(self.calls)
