# src/watchlist_relay/notifications/models.py

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChartAttachment(BaseModel):
    """A rendered chart image to upload alongside the embed."""

    model_config = ConfigDict(frozen=True)

    filename: str = "chart.png"
    data: bytes
    content_type: str = "image/png"

    @property
    def reference(self) -> str:
        return f"attachment://{self.filename}"


class DiscordEmbed(BaseModel):
    """A structured model for a Discord embed."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    color: int = Field(ge=0, le=0xFFFFFF)
    timestamp: str
    image_url: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        embed: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "timestamp": self.timestamp,
        }
        if self.image_url:
            embed["image"] = {"url": self.image_url}
        return embed


class NotificationPayload(BaseModel):
    """
    The outbound Discord message: either plain `content` or a single embed,
    plus an optional file when a chart was rendered.
    """

    model_config = ConfigDict(frozen=True)

    content: Optional[str] = None
    embed: Optional[DiscordEmbed] = None
    attachment: Optional[ChartAttachment] = None

    @property
    def has_attachment(self) -> bool:
        return self.attachment is not None

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.content is not None:
            body["content"] = self.content
        if self.embed is not None:
            body["embeds"] = [self.embed.to_json()]
        return body
