"""Pydantic models for Discord webhook messages."""

from collections.abc import Sequence

from pydantic import BaseModel


class EmbedField(BaseModel):
    """Name/value field of an embed."""

    name: str
    value: str
    inline: bool = True


class EmbedFooter(BaseModel):
    """Embed footer."""

    text: str


class Embed(BaseModel):
    """Rich embed. The colour is a decimal RGB integer."""

    title: str
    description: str | None = None
    url: str | None = None
    color: int
    fields: Sequence[EmbedField]
    timestamp: str | None = None
    footer: EmbedFooter | None = None


class DiscordMessage(BaseModel):
    """Webhook execution payload."""

    content: str | None = None
    embeds: Sequence[Embed]
