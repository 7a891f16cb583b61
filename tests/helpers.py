# tests/helpers.py
"""
Builders for Notion pages and aiohttp response doubles shared by the test suite.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

FIXED_NOW = datetime(2026, 1, 20, 15, 30, tzinfo=timezone.utc)


def rich_text(text: str) -> dict:
    return {"type": "rich_text", "rich_text": [{"plain_text": text}] if text else []}


def make_page(ticker: str = "ABC", tier: str | None = None, **rich_fields: str) -> dict:
    """
    Builds a Notion page dict. Keyword names map to columns, e.g.
    entry_conditions="..." -> "Entry Conditions", industry_etf -> "Industry ETF".
    """
    properties = {
        "Ticker": {"type": "title", "title": [{"plain_text": ticker}]},
        "Tier": {"type": "select", "select": {"name": tier} if tier else None},
    }
    for field, text in rich_fields.items():
        column = " ".join(
            part.upper() if part == "etf" else part.capitalize() for part in field.split("_")
        )
        properties[column] = rich_text(text)
    return {"object": "page", "id": f"page-{ticker.lower()}", "properties": properties}


def make_response(status=200, json_data=None, text="", body=b"", headers=None):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)
    response.read = AsyncMock(return_value=body)
    response.headers = headers or {}
    return response


def as_context_manager(response):
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx
