# src/watchlist_relay/server/app.py

"""
HTTP entry point.

Routes:
    /webhook       TradingView alert relay (POST only; other methods get 405)
    /test-discord  Webhook connectivity check (GET or POST)
    /health        Liveness probe
"""

# --- Built Ins ---
from typing import AsyncIterator, Optional

# --- Installed ---
import aiohttp
import orjson
from aiohttp import web
from loguru import logger as log

# --- Local ---
from ..clients.chart_client import ChartImageClient
from ..clients.notion_client import NotionWatchlistClient
from ..config.models import RelaySettings, load_settings
from ..core.models import RelayResponse
from ..handlers.alert_handler import AlertHandler
from ..handlers.diagnostic_handler import DiagnosticHandler
from ..notifications.discord_client import DiscordWebhookClient
from ..notifications.formatter import build_renderer
from ..utils.logging import configure_logging

SETTINGS_KEY = web.AppKey("settings", RelaySettings)
ALERT_HANDLER_KEY = web.AppKey("alert_handler", AlertHandler)
DIAGNOSTIC_HANDLER_KEY = web.AppKey("diagnostic_handler", DiagnosticHandler)


def _dumps(obj) -> str:
    return orjson.dumps(obj).decode()


def to_web_response(response: RelayResponse) -> web.Response:
    return web.json_response(response.body, status=response.status_code, dumps=_dumps)


async def _http_session_ctx(app: web.Application) -> AsyncIterator[None]:
    """Owns the shared ClientSession and the handlers built on it."""
    settings = app[SETTINGS_KEY]
    async with aiohttp.ClientSession() as session:
        _install_handlers(app, settings, session)
        yield
    log.info("HTTP session closed.")


def _install_handlers(
    app: web.Application, settings: RelaySettings, session: aiohttp.ClientSession
) -> None:
    timeout_s = settings.http_timeout_s

    discord = DiscordWebhookClient(session, settings.discord, timeout_s)
    chart = ChartImageClient(session, settings.chart, timeout_s)
    if not chart.is_enabled:
        log.warning("Chart images are disabled (CHART_IMG_API_KEY not set).")

    app[ALERT_HANDLER_KEY] = AlertHandler(
        watchlist=NotionWatchlistClient(session, settings.notion, timeout_s),
        discord=discord,
        chart=chart,
        renderer=build_renderer(settings.render_mode),
        stale_after_days=settings.stale_after_days,
    )
    app[DIAGNOSTIC_HANDLER_KEY] = DiagnosticHandler(discord)
    log.info(f"Relay ready (render mode: {settings.render_mode.value}).")



async def handle_webhook(request: web.Request) -> web.Response:
    body = await request.read()
    response = await request.app[ALERT_HANDLER_KEY].handle(request.method, body)
    return to_web_response(response)


async def handle_test_discord(request: web.Request) -> web.Response:
    response = await request.app[DIAGNOSTIC_HANDLER_KEY].handle(request.method)
    return to_web_response(response)


async def handle_health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"}, dumps=_dumps)


def create_app(settings: RelaySettings) -> web.Application:
    app = web.Application()
    app[SETTINGS_KEY] = settings
    app.cleanup_ctx.append(_http_session_ctx)

    app.router.add_route("*", "/webhook", handle_webhook)
    app.router.add_route("*", "/test-discord", handle_test_discord)
    app.router.add_get("/health", handle_health)
    return app


def main(settings: Optional[RelaySettings] = None) -> None:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    log.info(f"Starting watchlist relay on {settings.server.host}:{settings.server.port}")
    web.run_app(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        print=None,
    )


if __name__ == "__main__":
    main()
