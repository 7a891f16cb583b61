# src/watchlist_relay/core/enums.py

from enum import Enum


class AlertLevel(str, Enum):
    """
    The price thresholds a TradingView alert can be attached to.
    Each one maps to a distinct emoji and embed colour.
    """

    EXECUTION = "execution"
    DEMAND = "demand"
    PIVOT = "pivot"
    STRENGTH = "strength"
    INVALIDATION = "invalidation"


class RenderMode(str, Enum):
    """Selects how an alert is rendered before it is posted to Discord."""

    EMBED = "embed"  # Rich embed, optional chart attachment
    PLAIN = "plain"  # Plain markdown message, no chart


class Tier(str, Enum):
    # Only the distinguished value is modelled; other tiers pass through as text.
    RADAR = "Radar"


# Embed colour used when a Radar-tier stock triggers, regardless of level.
RADAR_COLOR = 0xE74C3C

LEVEL_CONFIG = {
    AlertLevel.EXECUTION: {"emoji": "🔵", "color": 0x3498DB},
    AlertLevel.DEMAND: {"emoji": "🟡", "color": 0xF1C40F},
    AlertLevel.PIVOT: {"emoji": "⚪", "color": 0x95A5A6},
    AlertLevel.STRENGTH: {"emoji": "🟢", "color": 0x2ECC71},
    AlertLevel.INVALIDATION: {"emoji": "🔴", "color": 0xE74C3C},
}
