"""Pydantic models for Teams MessageCard payloads."""

from collections.abc import Sequence
from typing import Literal

from pydantic import Field

from run_notifier.models.base import Model


class Fact(Model):
    """Key/value pair shown in a section."""

    name: str
    value: str


class Section(Model):
    """Card section."""

    activity_title: str | None = None
    activity_subtitle: str | None = None
    text: str | None = None
    facts: Sequence[Fact] | None = None
    markdown: bool = True


class Target(Model):
    """Platform specific URI target of an action."""

    os: str = "default"
    uri: str


class OpenUriAction(Model):
    """Action opening a URL."""

    type: Literal["OpenUri"] = Field(default="OpenUri", alias="@type")
    name: str
    targets: Sequence[Target]


class MessageCard(Model):
    """Incoming webhook payload."""

    type: Literal["MessageCard"] = Field(default="MessageCard", alias="@type")
    context: str = Field(default="http://schema.org/extensions", alias="@context")
    theme_color: str
    summary: str
    text: str | None = None
    sections: Sequence[Section]
    potential_action: Sequence[OpenUriAction] | None = None
