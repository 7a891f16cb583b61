# src/watchlist_relay/notifications/discord_client.py

import asyncio

import aiohttp
import orjson
from loguru import logger as log

from ..config.models import DiscordSettings
from ..core.exceptions import DeliveryError
from .models import NotificationPayload


class DiscordWebhookClient:
    """
    A transport-layer client for a Discord channel webhook.
    Sends JSON for plain payloads and multipart/form-data when a file is attached.
    A single attempt is made per message; failures raise DeliveryError.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: DiscordSettings,
        timeout_s: float = 5.0,
    ):
        self._session = session
        self._webhook_url = settings.webhook_url.get_secret_value()
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)

    def _build_multipart(self, payload: NotificationPayload) -> aiohttp.FormData:
        attachment = payload.attachment
        form = aiohttp.FormData()
        form.add_field(
            "payload_json",
            orjson.dumps(payload.to_json()).decode(),
            content_type="application/json",
        )
        form.add_field(
            "files[0]",
            attachment.data,
            filename=attachment.filename,
            content_type=attachment.content_type,
        )
        return form

    async def send(self, payload: NotificationPayload) -> None:
        if payload.has_attachment:
            request_kwargs = {"data": self._build_multipart(payload)}
        else:
            request_kwargs = {"json": payload.to_json()}

        try:
            async with self._session.post(
                self._webhook_url, timeout=self._timeout, **request_kwargs
            ) as response:
                if 200 <= response.status < 300:
                    log.debug(f"Discord message delivered (status {response.status}).")
                    return

                error_text = await response.text()
                log.error(
                    f"Discord webhook rejected message. Status: {response.status}, "
                    f"Response: {error_text}"
                )
                raise DeliveryError(f"Discord responded with {response.status}")

        except asyncio.TimeoutError as e:
            log.error("Request to Discord webhook timed out.")
            raise DeliveryError("Discord webhook timed out") from e
        except aiohttp.ClientError as e:
            log.error(f"Network error sending Discord message: {e}")
            raise DeliveryError(f"Discord webhook unreachable: {e}") from e

    async def send_text(self, content: str) -> None:
        await self.send(NotificationPayload(content=content))
