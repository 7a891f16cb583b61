# src/watchlist_relay/clients/chart_client.py

# --- Built Ins ---
import asyncio
from typing import Optional

# --- Installed ---
import aiohttp
from pydantic import BaseModel, ConfigDict

# --- Local ---
from ..config.models import ChartSettings
from ..notifications.models import ChartAttachment


class ChartResult(BaseModel):
    """Outcome of a chart fetch: an image, or the reason there is none."""

    model_config = ConfigDict(frozen=True)

    image: Optional[ChartAttachment] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.image is not None


class ChartImageClient:
    """
    Client for the chart-img TradingView snapshot API.
    `fetch` never raises: every failure comes back as ChartResult.error.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: ChartSettings,
        timeout_s: float = 5.0,
    ):
        self._session = session
        self._settings = settings
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)

    @property
    def is_enabled(self) -> bool:
        return self._settings.is_enabled

    def _build_params(self, ticker: str) -> dict:
        return {
            "symbol": ticker.upper(),
            "interval": self._settings.interval,
            "width": self._settings.width,
            "height": self._settings.height,
            "key": self._settings.api_key.get_secret_value(),
        }

    async def fetch(self, ticker: str) -> ChartResult:
        if not self.is_enabled:
            return ChartResult(error="chart service not configured")

        try:
            async with self._session.get(
                self._settings.api_url,
                params=self._build_params(ticker),
                timeout=self._timeout,
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    return ChartResult(
                        error=f"chart service returned {response.status}: {error_text[:200]}"
                    )

                data = await response.read()
                if not data:
                    return ChartResult(error="chart service returned an empty body")

                content_type = response.headers.get("Content-Type", "image/png").split(";")[0]
                return ChartResult(
                    image=ChartAttachment(
                        data=data,
                        content_type=content_type,
                    )
                )

        except asyncio.TimeoutError:
            return ChartResult(error="chart service timed out")
        except aiohttp.ClientError as e:
            return ChartResult(error=f"chart service unreachable: {e}")
