# src/watchlist_relay/core/models.py

# --- Built Ins  ---
from datetime import datetime
from typing import Any, Dict, Tuple

# --- Installed  ---
from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Local  ---
from .enums import LEVEL_CONFIG, RADAR_COLOR, AlertLevel, Tier


class AlertRequest(BaseModel):
    """
    A single price alert as posted by TradingView.
    The ticker is normalized to uppercase on construction.
    """

    model_config = ConfigDict(frozen=True)

    ticker: str
    price: float = Field(gt=0)
    level: str = AlertLevel.EXECUTION.value

    @field_validator("ticker")
    @classmethod
    def _normalize_ticker(cls, value: str) -> str:
        ticker = value.strip().upper()
        if not ticker:
            raise ValueError("ticker must not be blank")
        return ticker

    @property
    def level_emoji(self) -> str:
        return _level_entry(self.level)["emoji"]

    @property
    def level_color(self) -> int:
        return _level_entry(self.level)["color"]


def _level_entry(level: str) -> Dict[str, Any]:
    """Unknown levels fall back to the execution entry."""
    try:
        return LEVEL_CONFIG[AlertLevel(level)]
    except ValueError:
        return LEVEL_CONFIG[AlertLevel.EXECUTION]


class WatchlistRecord(BaseModel):
    """The fields of a Notion watchlist page the relay consumes. Empty means absent."""

    model_config = ConfigDict(frozen=True)

    ticker: str = ""
    tier: str = ""
    entry_conditions: str = ""
    invalidation_level: str = ""
    industry_etf: str = ""
    demand_zone: str = ""
    strength_level: str = ""
    pivot_level: str = ""
    execution_lines: str = ""

    @property
    def is_radar(self) -> bool:
        return self.tier == Tier.RADAR.value


class AlertContext(BaseModel):
    """Everything a renderer needs, fixed at one evaluation instant."""

    model_config = ConfigDict(frozen=True)

    request: AlertRequest
    record: WatchlistRecord
    warnings: Tuple[str, ...] = ()
    evaluated_at: datetime

    @property
    def color(self) -> int:
        if self.record.is_radar:
            return RADAR_COLOR
        return self.request.level_color


class RelayResponse(BaseModel):
    status_code: int
    body: Dict[str, Any]

    @classmethod
    def error(cls, status_code: int, message: str) -> "RelayResponse":
        return cls(status_code=status_code, body={"error": message})
