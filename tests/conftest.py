# tests/conftest.py
"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import aiohttp
import pytest
from pydantic import SecretStr

from helpers import as_context_manager, make_response
from watchlist_relay.config.models import (
    ChartSettings,
    DiscordSettings,
    NotionSettings,
    RelaySettings,
)


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables between tests."""
    import os

    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def notion_settings():
    return NotionSettings(api_key=SecretStr("secret_notion"), database_id="db123")


@pytest.fixture
def discord_settings():
    return DiscordSettings(webhook_url=SecretStr("https://discord.com/api/webhooks/1/abc"))


@pytest.fixture
def chart_settings():
    return ChartSettings(api_key=SecretStr("chart_key"))


@pytest.fixture
def relay_settings(notion_settings, discord_settings, chart_settings):
    return RelaySettings(
        notion=notion_settings,
        discord=discord_settings,
        chart=chart_settings,
    )


@pytest.fixture
def mock_session():
    """A ClientSession whose get/post return whatever the test configures."""
    session = MagicMock(spec=aiohttp.ClientSession)
    session.get = MagicMock(return_value=as_context_manager(make_response()))
    session.post = MagicMock(return_value=as_context_manager(make_response()))
    return session
