from __future__ import annotations

import httpx
import pytest

from httpstrategy.request import ResponseType
from httpstrategy.response import Response, decode_body

##################################
#     Tests for decode_body     #
##################################


def test_decode_body_json() -> None:
    assert decode_body(httpx.Response(200, json={"a": [1, 2]})) == {"a": [1, 2]}


def test_decode_body_json_fallback_to_text() -> None:
    assert decode_body(httpx.Response(200, text="not json"), ResponseType.JSON) == "not json"


def test_decode_body_empty() -> None:
    assert decode_body(httpx.Response(204)) is None


def test_decode_body_text() -> None:
    assert decode_body(httpx.Response(200, json={"a": 1}), ResponseType.TEXT) == '{"a": 1}'


def test_decode_body_bytes() -> None:
    assert decode_body(httpx.Response(200, content=b"\x00\x01"), ResponseType.BYTES) == b"\x00\x01"


###############################
#     Tests for Response     #
###############################


def test_response_from_httpx() -> None:
    raw = httpx.Response(201, json={"id": 3}, headers={"X-Test": "1"})
    response = Response.from_httpx(raw)
    assert response.status_code == 201
    assert response.data == {"id": 3}
    assert response.headers["x-test"] == "1"
    assert response.raw is raw
    assert not response.is_error


def test_response_from_error() -> None:
    error = httpx.ReadTimeout("timed out")
    response = Response.from_error(error)
    assert response == Response(status_code=None, error=error)
    assert response.is_error


def test_response_from_error_with_nested_response() -> None:
    raw = httpx.Response(401, text="denied")
    error = httpx.HTTPStatusError(
        "denied", request=httpx.Request("GET", "https://a.b"), response=raw
    )
    response = Response.from_error(error, raw, ResponseType.TEXT)
    assert response.status_code is None
    assert response.response.status_code == 401
    assert response.response.data == "denied"


@pytest.mark.parametrize("status_code", [200, 404])
def test_response_equality_ignores_raw(status_code: int) -> None:
    raw = httpx.Response(status_code)
    assert Response.from_httpx(raw) == Response(status_code=status_code)
