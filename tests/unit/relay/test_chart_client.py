# tests/unit/relay/test_chart_client.py

import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from helpers import as_context_manager, make_response
from watchlist_relay.clients.chart_client import ChartImageClient, ChartResult
from watchlist_relay.config.models import ChartSettings


@pytest.mark.asyncio
class TestChartImageClient:
    """Unit tests for the ChartImageClient. fetch() must never raise."""

    async def test_fetch_success(self, mock_session, chart_settings):
        mock_session.get = MagicMock(
            return_value=as_context_manager(
                make_response(body=b"\x89PNG", headers={"Content-Type": "image/png; charset=binary"})
            )
        )
        client = ChartImageClient(mock_session, chart_settings, timeout_s=4)

        result = await client.fetch("abc")

        assert result.ok
        assert result.error is None
        assert result.image.data == b"\x89PNG"
        assert result.image.content_type == "image/png"
        args, kwargs = mock_session.get.call_args
        assert args[0] == "https://api.chart-img.com/v1/tradingview/advanced-chart"
        assert kwargs["params"] == {
            "symbol": "ABC",
            "interval": "1D",
            "width": 800,
            "height": 600,
            "key": "chart_key",
        }
        assert kwargs["timeout"].total == 4

    async def test_disabled_without_key(self, mock_session):
        client = ChartImageClient(mock_session, ChartSettings())

        result = await client.fetch("ABC")

        assert not client.is_enabled
        assert not result.ok
        mock_session.get.assert_not_called()

    async def test_non_success_status_is_an_error_result(self, mock_session, chart_settings):
        mock_session.get = MagicMock(
            return_value=as_context_manager(make_response(status=429, text="rate limited"))
        )
        client = ChartImageClient(mock_session, chart_settings)

        result = await client.fetch("ABC")

        assert not result.ok
        assert "429" in result.error

    async def test_empty_body_is_an_error_result(self, mock_session, chart_settings):
        mock_session.get = MagicMock(return_value=as_context_manager(make_response(body=b"")))
        client = ChartImageClient(mock_session, chart_settings)

        assert not (await client.fetch("ABC")).ok

    @pytest.mark.parametrize(
        "exc",
        [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
    )
    async def test_transport_failures_are_error_results(self, mock_session, chart_settings, exc):
        mock_session.get = MagicMock(side_effect=exc)
        client = ChartImageClient(mock_session, chart_settings)

        result = await client.fetch("ABC")

        assert isinstance(result, ChartResult)
        assert not result.ok
        assert result.error
