from __future__ import annotations

import pytest

from httpstrategy.request import HttpMethod, RequestDescriptor, ResponseType
from tests.helpers import TEST_URL


def test_http_method_values() -> None:
    assert [method.value for method in HttpMethod] == ["GET", "POST", "PUT", "DELETE"]


def test_response_type_values() -> None:
    assert ResponseType("text") is ResponseType.TEXT


def test_http_method_rejects_unknown_verb() -> None:
    with pytest.raises(ValueError, match=r"PATCH"):
        HttpMethod("PATCH")


##########################################
#     Tests for RequestDescriptor     #
##########################################


def test_request_descriptor_defaults() -> None:
    descriptor = RequestDescriptor(url=TEST_URL)
    assert descriptor.body is None
    assert descriptor.headers == {}
    assert descriptor.query_params is None
    assert descriptor.response_type is None


def test_request_descriptor_none_headers() -> None:
    assert RequestDescriptor(url=TEST_URL, headers=None).headers == {}


def test_request_descriptor_copies_headers() -> None:
    headers = {"X-Test": "1"}
    descriptor = RequestDescriptor(url=TEST_URL, headers=headers)
    descriptor.set_header("X-Other", "2")
    assert descriptor.headers == {"X-Test": "1", "X-Other": "2"}
    assert headers == {"X-Test": "1"}


def test_request_descriptor_set_header_replaces() -> None:
    descriptor = RequestDescriptor(url=TEST_URL, headers={"Authorization": "Bearer old"})
    descriptor.set_header("Authorization", "Bearer new")
    assert descriptor.headers == {"Authorization": "Bearer new"}
