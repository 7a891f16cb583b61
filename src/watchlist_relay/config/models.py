# src\watchlist_relay\config\models.py

# --- Built Ins  ---
import os
from typing import Mapping, Optional

# --- Installed  ---
from pydantic import BaseModel, Field, SecretStr, computed_field

# --- Local  ---
from ..core.enums import RenderMode
from ..core.exceptions import ConfigurationError


class NotionSettings(BaseModel):
    api_key: SecretStr
    database_id: str
    api_url: str = Field(default="https://api.notion.com/v1")
    api_version: str = Field(default="2022-06-28")

    @computed_field
    @property
    def query_url(self) -> str:
        """Endpoint for querying the watchlist database."""
        return f"{self.api_url}/databases/{self.database_id}/query"


class DiscordSettings(BaseModel):
    webhook_url: SecretStr


class ChartSettings(BaseModel):
    # The chart service is optional; without a key no image is fetched.
    api_key: Optional[SecretStr] = None
    api_url: str = Field(
        default="https://api.chart-img.com/v1/tradingview/advanced-chart"
    )
    interval: str = "1D"
    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)

    @computed_field
    @property
    def is_enabled(self) -> bool:
        return bool(self.api_key and self.api_key.get_secret_value())


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8080, gt=0, lt=65536)


class RelaySettings(BaseModel):
    notion: NotionSettings
    discord: DiscordSettings
    chart: ChartSettings = Field(default_factory=ChartSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    render_mode: RenderMode = RenderMode.EMBED
    stale_after_days: float = Field(
        default=7.0,
        ge=0,
        description="Entry dates older than this many days are flagged as stale.",
    )
    http_timeout_s: float = Field(
        default=5.0,
        gt=0,
        description="Total timeout applied to every outbound HTTP call.",
    )
    log_level: str = "INFO"


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ConfigurationError(f"{name} environment variable not set")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> RelaySettings:
    """
    Builds RelaySettings from environment variables. Only this function reads
    the environment; everything else receives the settings object.
    """
    env = os.environ if environ is None else environ

    chart_fields = {
        "api_key": env.get("CHART_IMG_API_KEY") or None,
        "interval": env.get("CHART_INTERVAL"),
        "width": env.get("CHART_WIDTH"),
        "height": env.get("CHART_HEIGHT"),
    }
    server_fields = {
        "host": env.get("RELAY_HOST"),
        "port": env.get("RELAY_PORT"),
    }
    relay_fields = {
        "render_mode": _lower(env.get("RELAY_RENDER_MODE")),
        "stale_after_days": env.get("RELAY_STALE_AFTER_DAYS"),
        "http_timeout_s": env.get("RELAY_HTTP_TIMEOUT_S"),
        "log_level": env.get("RELAY_LOG_LEVEL"),
    }

    return RelaySettings(
        notion=NotionSettings(
            api_key=_require(env, "NOTION_API_KEY"),
            database_id=_require(env, "NOTION_WATCHLIST_DB"),
        ),
        discord=DiscordSettings(webhook_url=_require(env, "DISCORD_WEBHOOK_URL")),
        chart=ChartSettings(**_drop_unset(chart_fields)),
        server=ServerSettings(**_drop_unset(server_fields)),
        **_drop_unset(relay_fields),
    )


def _lower(value: Optional[str]) -> Optional[str]:
    return value.strip().lower() if value is not None else None


def _drop_unset(fields: dict) -> dict:
    # Unset variables fall back to the model defaults.
    return {key: value for key, value in fields.items() if value is not None}
