from __future__ import annotations

from unittest.mock import AsyncMock, Mock, call

import pytest

from httpstrategy.request import RequestDescriptor
from httpstrategy.strategies import (
    default_failed_strategy,
    default_no_content_strategy,
    default_refresh_token_strategy,
    default_retry_fallback_strategy,
    default_success_strategy,
    default_unauthorized_strategy,
    resolve,
    run_side_effects,
)
from tests.helpers import TEST_URL, create_response


def test_default_strategies() -> None:
    response = create_response(200, {"a": 1})
    assert default_success_strategy(response) == {"a": 1}
    assert default_no_content_strategy(response) is True
    assert default_failed_strategy(response) is False
    assert default_unauthorized_strategy(response) is None
    assert default_retry_fallback_strategy(RequestDescriptor(url=TEST_URL)) is None
    assert default_refresh_token_strategy() is False


@pytest.mark.asyncio
async def test_resolve_value() -> None:
    assert await resolve(42) == 42


@pytest.mark.asyncio
async def test_resolve_awaitable() -> None:
    async def answer() -> int:
        return 42

    assert await resolve(answer()) == 42


@pytest.mark.asyncio
async def test_run_side_effects_in_order() -> None:
    manager = Mock()
    manager.attach_mock(AsyncMock(), "second")
    await run_side_effects([manager.first, manager.second, manager.third], "arg")
    assert manager.mock_calls == [call.first("arg"), call.second("arg"), call.third("arg")]
    manager.second.assert_awaited_once_with("arg")


@pytest.mark.asyncio
async def test_run_side_effects_empty() -> None:
    await run_side_effects([], "arg")


@pytest.mark.asyncio
async def test_run_side_effects_stops_on_error() -> None:
    second = Mock()
    with pytest.raises(ValueError, match=r"boom"):
        await run_side_effects([Mock(side_effect=ValueError("boom")), second])
    second.assert_not_called()
