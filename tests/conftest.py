from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from httpstrategy.core.config import RequestConfig
from httpstrategy.request import HttpMethod
from httpstrategy.transport import set_default_transport
from tests.helpers import TEST_URL, StubTransport, create_response

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def config() -> RequestConfig:
    """Create a valid GET configuration for testing."""
    return RequestConfig(method=HttpMethod.GET, url=TEST_URL, max_retry=1)


@pytest.fixture
def success_transport() -> StubTransport:
    """Create a transport always answering 200 with a JSON body."""
    return StubTransport([create_response(200, {"ok": True})])


@pytest.fixture
def unauthorized_transport() -> StubTransport:
    """Create a transport always answering 401."""
    return StubTransport([create_response(401)])


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing strategies and side
    effects."""
    return Mock()


@pytest.fixture(autouse=True)
def reset_default_transport() -> Generator[None, None, None]:
    """Make sure no test leaks a default transport into another."""
    set_default_transport(None)
    yield
    set_default_transport(None)
