# src/watchlist_relay/handlers/diagnostic_handler.py

from loguru import logger as log

from ..core.exceptions import DeliveryError
from ..core.models import RelayResponse
from ..notifications.discord_client import DiscordWebhookClient

TEST_MESSAGE = "Trading Alerts webhook is connected and working."


class DiagnosticHandler:
    """Posts a fixed message to Discord to confirm the webhook is wired up."""

    ALLOWED_METHODS = ("GET", "POST")

    def __init__(self, discord: DiscordWebhookClient):
        self._discord = discord

    async def handle(self, method: str) -> RelayResponse:
        if (method or "").upper() not in self.ALLOWED_METHODS:
            return RelayResponse.error(405, "Method not allowed")

        try:
            await self._discord.send_text(TEST_MESSAGE)
        except DeliveryError as e:
            log.error(f"Discord webhook test failed: {e.message}")
            return RelayResponse.error(500, "Failed to send test message to Discord")

        return RelayResponse(
            status_code=200,
            body={"success": True, "message": "Test message sent to Discord"},
        )
