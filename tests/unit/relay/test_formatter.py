# tests/unit/relay/test_formatter.py

import pytest

from helpers import FIXED_NOW
from watchlist_relay.alerts.warnings import PAUSED_WARNING, RADAR_WARNING
from watchlist_relay.core.enums import RenderMode
from watchlist_relay.core.models import AlertContext, AlertRequest, WatchlistRecord
from watchlist_relay.notifications.formatter import (
    EmbedRenderer,
    PlainTextRenderer,
    build_renderer,
)
from watchlist_relay.notifications.models import ChartAttachment

FULL_RECORD = WatchlistRecord(
    ticker="NVDA",
    tier="Core",
    entry_conditions="Reclaim 120 on volume",
    invalidation_level="112",
    industry_etf="SMH",
    demand_zone="114-116",
    strength_level="130",
    pivot_level="124",
    execution_lines="120.5",
)


def make_context(record=FULL_RECORD, warnings=(), level="execution", price=120.5, ticker="nvda"):
    return AlertContext(
        request=AlertRequest(ticker=ticker, price=price, level=level),
        record=record,
        warnings=warnings,
        evaluated_at=FIXED_NOW,
    )


class TestEmbedRenderer:
    """Tests for the rich embed renderer."""

    def test_full_embed(self):
        payload = EmbedRenderer().render(make_context(level="pivot"))
        embed = payload.embed

        assert embed.title == "⚪ NVDA hit $120.5 [pivot]"
        assert embed.color == 0x95A5A6
        assert embed.timestamp == "2026-01-20T15:30:00+00:00"
        assert embed.image_url is None
        assert payload.attachment is None
        assert payload.content is None
        assert embed.description == (
            "**Tier:** Core\n\n"
            "**LEVELS:**\n"
            "🟢 Strength: 130\n"
            "⚪ Pivot: 124\n"
            "🟡 Demand: 114-116\n"
            "🔵 Execution: 120.5\n"
            "🔴 Invalidation: 112\n\n"
            "**PLAY:**\nReclaim 120 on volume\n\n"
            "**Sector:** SMH\n\n"
            "📈 [View Chart](https://www.tradingview.com/chart/?symbol=NVDA)"
        )

    def test_empty_record_renders_placeholders_and_omits_sections(self):
        payload = EmbedRenderer().render(make_context(record=WatchlistRecord(), ticker="abc", price=10))
        description = payload.embed.description

        assert description == (
            "**LEVELS:**\n"
            "🟢 Strength: -\n"
            "⚪ Pivot: -\n"
            "🟡 Demand: -\n"
            "🔵 Execution: -\n"
            "🔴 Invalidation: -\n\n"
            "📈 [View Chart](https://www.tradingview.com/chart/?symbol=ABC)"
        )
        assert "PLAY" not in description
        assert "Sector" not in description
        assert "Tier" not in description

    def test_warnings_lead_the_description(self):
        record = FULL_RECORD.model_copy(update={"tier": "Radar"})
        payload = EmbedRenderer().render(
            make_context(record=record, warnings=(RADAR_WARNING, PAUSED_WARNING), level="strength")
        )
        description = payload.embed.description
        assert description.startswith(f"{RADAR_WARNING}\n{PAUSED_WARNING}\n\n**Tier:** Radar")
        assert payload.embed.color == 0xE74C3C

    def test_unknown_level_echoed_with_fallback_emoji(self):
        payload = EmbedRenderer().render(make_context(level="breakout", price=10))
        assert payload.embed.title == "🔵 NVDA hit $10 [breakout]"
        assert payload.embed.color == 0x3498DB

    def test_chart_attached_by_reference(self):
        chart = ChartAttachment(data=b"\x89PNG")
        payload = EmbedRenderer().render(make_context(), chart)

        assert payload.has_attachment
        assert payload.attachment == chart
        assert payload.embed.image_url == "attachment://chart.png"
        assert payload.to_json()["embeds"][0]["image"] == {"url": "attachment://chart.png"}

    def test_rendering_is_idempotent(self):
        renderer = EmbedRenderer()
        context = make_context(warnings=(PAUSED_WARNING,))
        first = renderer.render(context)
        second = renderer.render(context)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()


class TestPlainTextRenderer:
    """Tests for the plain text renderer."""

    def test_full_message(self):
        payload = PlainTextRenderer().render(make_context(price=120.5))
        assert payload.embed is None
        assert payload.content == (
            "**NVDA** hit $120.5\n"
            "Tier: Core\n"
            "Demand Zone: 114-116\n"
            "\n"
            "Reclaim 120 on volume\n"
            "Invalidation: 112\n"
            "Sector: SMH"
        )

    def test_empty_fields_omitted(self):
        payload = PlainTextRenderer().render(make_context(record=WatchlistRecord(), ticker="abc", price=10))
        assert payload.content == "**ABC** hit $10"

    def test_ignores_warnings_and_chart(self):
        chart = ChartAttachment(data=b"\x89PNG")
        payload = PlainTextRenderer().render(make_context(warnings=(RADAR_WARNING,)), chart)
        assert RADAR_WARNING not in payload.content
        assert not payload.has_attachment
        assert payload.to_json() == {"content": payload.content}


class TestBuildRenderer:
    @pytest.mark.parametrize(
        "mode, expected",
        [
            (RenderMode.EMBED, EmbedRenderer),
            (RenderMode.PLAIN, PlainTextRenderer),
            ("plain", PlainTextRenderer),
        ],
    )
    def test_selects_renderer(self, mode, expected):
        assert isinstance(build_renderer(mode), expected)

    def test_only_embed_uses_chart(self):
        assert EmbedRenderer.uses_chart
        assert not PlainTextRenderer.uses_chart
