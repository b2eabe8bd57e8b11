"""Slack channel implementation."""

from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import ClassVar

import aiohttp

from run_notifier.channels.base import NotificationChannel
from run_notifier.channels.http import missing_target, open_session, post_json
from run_notifier.channels.rendering import (
    bullet_list,
    failure_titles,
    format_duration,
    format_timestamp,
    status_color,
    title,
)
from run_notifier.channels.slack.config import SlackConfig
from run_notifier.channels.slack.models import (
    ActionsBlock,
    Attachment,
    Block,
    ButtonElement,
    ContextBlock,
    HeaderBlock,
    SectionBlock,
    SlackMessage,
    TextObject,
)
from run_notifier.models.result import DeliveryResult, RunSummary


def mrkdwn(text: str) -> TextObject:
    """Markdown text object."""
    return TextObject(type="mrkdwn", text=text)


def plain(text: str) -> TextObject:
    """Plain text object with emoji rendering."""
    return TextObject(type="plain_text", text=text, emoji=True)


@dataclass(frozen=True, kw_only=True)
class SlackChannel(NotificationChannel[SlackConfig]):
    """Slack incoming webhook channel."""

    name: ClassVar[str] = "Slack"

    session: aiohttp.ClientSession = field(repr=False)
    webhook_url: str | None = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: SlackConfig, environ: Mapping[str, str] | None = None
    ) -> AsyncGenerator["SlackChannel", None]:
        """Create channel with managed session lifecycle."""
        async with open_session(config) as session:
            yield cls(
                config=config,
                session=session,
                webhook_url=config.resolve_webhook_url(environ),
            )

    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Post the Block Kit message to the webhook."""
        if self.webhook_url is None:
            return missing_target(self.name, self.config.webhook_url_env)

        message = self.build_message(summary)
        return await post_json(
            self.session,
            self.webhook_url,
            message.model_dump(mode="json", exclude_none=True),
            channel=self.name,
        )

    def build_message(self, summary: RunSummary) -> SlackMessage:
        """Build the Block Kit message for a summary."""
        headline = title(summary)
        mentions = " ".join(
            f"<@{member}>" for member in self.config.mentions_for(summary.is_success)
        )

        blocks: list[Block] = [HeaderBlock(text=plain(headline))]
        if mentions:
            blocks.append(SectionBlock(text=mrkdwn(mentions)))
        blocks.append(SectionBlock(fields=self.build_fields(summary)))

        if titles := failure_titles(summary):
            blocks.append(
                SectionBlock(text=mrkdwn(f"*Failed tests:*\n{bullet_list(titles)}"))
            )

        if summary.run_url:
            blocks.append(
                ActionsBlock(
                    elements=[ButtonElement(text=plain("View run"), url=summary.run_url)]
                )
            )

        context = ContextBlock(
            elements=[mrkdwn(f"Started at: {format_timestamp(summary.start_time)}")]
        )

        fallback = f"{headline} ({summary.passed}/{summary.total})"
        if mentions:
            fallback = f"{mentions}\n{fallback}"

        return SlackMessage(
            text=fallback,
            blocks=blocks,
            attachments=[
                Attachment(color=f"#{status_color(summary)}", blocks=[context])
            ],
        )

    def build_fields(self, summary: RunSummary) -> Sequence[TextObject]:
        """Key/value fields of the summary section."""
        fields = [
            mrkdwn(f"*Total:*\n{summary.total}"),
            mrkdwn(f"*Duration:*\n{format_duration(summary.duration)}"),
            mrkdwn(f"*Passed:*\n{summary.passed} ✅"),
            mrkdwn(f"*Failed:*\n{summary.failed} ❌"),
        ]
        if summary.skipped:
            fields.append(mrkdwn(f"*Skipped:*\n{summary.skipped} ⏭️"))
        if summary.flaky:
            fields.append(mrkdwn(f"*Flaky:*\n{summary.flaky} ⚠️"))
        return fields
