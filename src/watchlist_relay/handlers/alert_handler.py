# src/watchlist_relay/handlers/alert_handler.py

# --- Built Ins ---
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

# --- Installed ---
import orjson
from loguru import logger as log
from pydantic import ValidationError

# --- Local ---
from ..alerts.warnings import DEFAULT_STALE_AFTER_DAYS, derive_warnings
from ..clients.chart_client import ChartImageClient
from ..clients.notion_client import NotionWatchlistClient
from ..core.exceptions import (
    DeliveryError,
    InputError,
    MethodNotAllowedError,
    RelayError,
    TickerNotFoundError,
)
from ..core.models import AlertContext, AlertRequest, RelayResponse
from ..notifications.discord_client import DiscordWebhookClient
from ..notifications.formatter import AlertRenderer, EmbedRenderer
from ..notifications.models import ChartAttachment

RawBody = Union[str, bytes, None]


def parse_alert_request(body: RawBody) -> AlertRequest:
    """Decodes and validates an inbound alert body. Raises InputError."""
    try:
        payload = orjson.loads(body or b"")
    except orjson.JSONDecodeError as e:
        raise InputError("Invalid JSON payload") from e

    if not isinstance(payload, dict):
        raise InputError("Invalid JSON payload")

    if not payload.get("ticker") or not payload.get("price"):
        raise InputError("Missing required fields: ticker and price")

    fields: Dict[str, Any] = {"ticker": payload["ticker"], "price": payload["price"]}
    if payload.get("level") is not None:
        # Unknown levels are echoed as text.
        fields["level"] = str(payload["level"])

    try:
        return AlertRequest(**fields)
    except ValidationError as e:
        invalid = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise InputError(f"Invalid alert fields: {invalid}") from e


class AlertHandler:
    """
    Relays one TradingView alert: looks the ticker up in the Notion watchlist,
    derives warnings, renders the notification and posts it to Discord.
    """

    def __init__(
        self,
        watchlist: NotionWatchlistClient,
        discord: DiscordWebhookClient,
        chart: Optional[ChartImageClient] = None,
        renderer: Optional[AlertRenderer] = None,
        stale_after_days: float = DEFAULT_STALE_AFTER_DAYS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._watchlist = watchlist
        self._discord = discord
        self._chart = chart
        self._renderer = renderer or EmbedRenderer()
        self._stale_after_days = stale_after_days
        self._clock = clock

    async def handle(self, method: str, body: RawBody) -> RelayResponse:
        try:
            if (method or "").upper() != "POST":
                raise MethodNotAllowedError()
            request = parse_alert_request(body)
            await self._relay(request)
        except DeliveryError:
            return RelayResponse.error(DeliveryError.status_code, "Failed to post to Discord")
        except RelayError as e:
            return RelayResponse.error(e.status_code, e.message)

        return RelayResponse(
            status_code=200,
            body={"success": True, "ticker": request.ticker},
        )

    async def _relay(self, request: AlertRequest) -> None:
        record = await self._watchlist.fetch_record(request.ticker)
        if record is None:
            log.info(f"Ticker {request.ticker} not found in watchlist.")
            raise TickerNotFoundError(request.ticker)

        evaluated_at = self._clock()
        context = AlertContext(
            request=request,
            record=record,
            warnings=derive_warnings(
                record.tier,
                record.entry_conditions,
                now=evaluated_at,
                stale_after_days=self._stale_after_days,
            ),
            evaluated_at=evaluated_at,
        )

        payload = self._renderer.render(context, await self._fetch_chart(request.ticker))
        await self._discord.send(payload)
        log.success(
            f"Relayed {request.level} alert for {request.ticker} at {request.price} "
            f"({len(context.warnings)} warning(s))."
        )

    async def _fetch_chart(self, ticker: str) -> Optional[ChartAttachment]:
        if not (self._renderer.uses_chart and self._chart and self._chart.is_enabled):
            return None

        result = await self._chart.fetch(ticker)
        if not result.ok:
            # Non-fatal: the alert goes out without an image.
            log.warning(f"Chart fetch for {ticker} failed, sending without image: {result.error}")
            return None
        return result.image
