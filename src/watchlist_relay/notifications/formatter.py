# src/watchlist_relay/notifications/formatter.py

# --- Built Ins  ---
from abc import ABC, abstractmethod
from datetime import timezone
from typing import List, Optional

# --- Local  ---
from ..core.enums import RenderMode
from ..core.models import AlertContext
from ..utils.formatter import format_price, join_sections, or_placeholder
from .models import ChartAttachment, DiscordEmbed, NotificationPayload

CHART_URL_TEMPLATE = "https://www.tradingview.com/chart/?symbol={ticker}"


class AlertRenderer(ABC):
    """Turns an AlertContext into a NotificationPayload. Pure apart from its inputs."""

    # Whether a chart image is worth fetching for this renderer.
    uses_chart = False

    @abstractmethod
    def render(
        self,
        context: AlertContext,
        chart: Optional[ChartAttachment] = None,
    ) -> NotificationPayload:
        raise NotImplementedError


class EmbedRenderer(AlertRenderer):
    """Rich Discord embed with warnings, levels, play, sector and chart link."""

    uses_chart = True

    def render(
        self,
        context: AlertContext,
        chart: Optional[ChartAttachment] = None,
    ) -> NotificationPayload:
        request = context.request
        embed = DiscordEmbed(
            title=(
                f"{request.level_emoji} {request.ticker} hit "
                f"${format_price(request.price)} [{request.level}]"
            ),
            description=self._build_description(context),
            color=context.color,
            timestamp=context.evaluated_at.astimezone(timezone.utc).isoformat(),
            image_url=chart.reference if chart else None,
        )
        return NotificationPayload(embed=embed, attachment=chart)

    def _build_description(self, context: AlertContext) -> str:
        record = context.record
        sections: List[str] = [
            "\n".join(context.warnings),
            f"**Tier:** {record.tier}" if record.tier else "",
            self._levels_block(context),
            f"**PLAY:**\n{record.entry_conditions}" if record.entry_conditions else "",
            f"**Sector:** {record.industry_etf}" if record.industry_etf else "",
            f"📈 [View Chart]({CHART_URL_TEMPLATE.format(ticker=context.request.ticker)})",
        ]
        return join_sections(sections)

    @staticmethod
    def _levels_block(context: AlertContext) -> str:
        # Always rendered, with placeholders for empty levels.
        record = context.record
        return (
            "**LEVELS:**\n"
            f"🟢 Strength: {or_placeholder(record.strength_level)}\n"
            f"⚪ Pivot: {or_placeholder(record.pivot_level)}\n"
            f"🟡 Demand: {or_placeholder(record.demand_zone)}\n"
            f"🔵 Execution: {or_placeholder(record.execution_lines)}\n"
            f"🔴 Invalidation: {or_placeholder(record.invalidation_level)}"
        )


class PlainTextRenderer(AlertRenderer):
    """Plain markdown message. Carries no warnings and never attaches a chart."""

    def render(
        self,
        context: AlertContext,
        chart: Optional[ChartAttachment] = None,
    ) -> NotificationPayload:
        request = context.request
        record = context.record

        lines = [f"**{request.ticker}** hit ${format_price(request.price)}"]
        if record.tier:
            lines.append(f"Tier: {record.tier}")
        if record.demand_zone:
            lines.append(f"Demand Zone: {record.demand_zone}")
        lines.append("")
        if record.entry_conditions:
            lines.append(record.entry_conditions)
        if record.invalidation_level:
            lines.append(f"Invalidation: {record.invalidation_level}")
        if record.industry_etf:
            lines.append(f"Sector: {record.industry_etf}")

        return NotificationPayload(content="\n".join(lines).rstrip("\n"))


RENDERERS = {
    RenderMode.EMBED: EmbedRenderer,
    RenderMode.PLAIN: PlainTextRenderer,
}


def build_renderer(mode: RenderMode) -> AlertRenderer:
    return RENDERERS[RenderMode(mode)]()
