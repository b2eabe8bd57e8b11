"""Pydantic models for Slack Block Kit messages."""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel


class TextObject(BaseModel):
    """Block Kit text object."""

    type: Literal["plain_text", "mrkdwn"]
    text: str
    emoji: bool | None = None


class HeaderBlock(BaseModel):
    """Large bold header."""

    type: Literal["header"] = "header"
    text: TextObject


class SectionBlock(BaseModel):
    """Text section, optionally with a two-column field list."""

    type: Literal["section"] = "section"
    text: TextObject | None = None
    fields: Sequence[TextObject] | None = None


class ButtonElement(BaseModel):
    """Link button."""

    type: Literal["button"] = "button"
    text: TextObject
    url: str


class ActionsBlock(BaseModel):
    """Block holding interactive elements."""

    type: Literal["actions"] = "actions"
    elements: Sequence[ButtonElement]


class ContextBlock(BaseModel):
    """Small secondary text."""

    type: Literal["context"] = "context"
    elements: Sequence[TextObject]


Block = HeaderBlock | SectionBlock | ActionsBlock | ContextBlock


class Attachment(BaseModel):
    """Legacy attachment, used for the coloured side bar."""

    color: str
    blocks: Sequence[Block]


class SlackMessage(BaseModel):
    """Incoming webhook payload."""

    text: str
    blocks: Sequence[Block]
    attachments: Sequence[Attachment] | None = None
