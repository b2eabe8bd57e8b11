"""Discord channel implementation."""

from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import ClassVar

import aiohttp

from run_notifier.channels.base import NotificationChannel
from run_notifier.channels.discord.config import DiscordConfig
from run_notifier.channels.discord.models import (
    DiscordMessage,
    Embed,
    EmbedField,
    EmbedFooter,
)
from run_notifier.channels.http import missing_target, open_session, post_json
from run_notifier.channels.rendering import (
    MAX_LISTED_FAILURES,
    bullet_list,
    failure_titles,
    format_duration,
    status_color,
    title,
    truncate,
)
from run_notifier.models.result import DeliveryResult, RunSummary

# Discord rejects embeds whose field values exceed this length
FIELD_VALUE_LIMIT = 1024
FAILURE_TITLE_WIDTH = FIELD_VALUE_LIMIT // MAX_LISTED_FAILURES - len("• \n")


@dataclass(frozen=True, kw_only=True)
class DiscordChannel(NotificationChannel[DiscordConfig]):
    """Discord webhook channel."""

    name: ClassVar[str] = "Discord"

    session: aiohttp.ClientSession = field(repr=False)
    webhook_url: str | None = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: DiscordConfig, environ: Mapping[str, str] | None = None
    ) -> AsyncGenerator["DiscordChannel", None]:
        """Create channel with managed session lifecycle."""
        async with open_session(config) as session:
            yield cls(
                config=config,
                session=session,
                webhook_url=config.resolve_webhook_url(environ),
            )

    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Post the embed message to the webhook."""
        if self.webhook_url is None:
            return missing_target(self.name, self.config.webhook_url_env)

        message = self.build_message(summary)
        return await post_json(
            self.session,
            self.webhook_url,
            message.model_dump(mode="json", exclude_none=True),
            channel=self.name,
        )

    def build_message(self, summary: RunSummary) -> DiscordMessage:
        """Build the embed message for a summary."""
        mentions = " ".join(
            f"<@{user}>" for user in self.config.mentions_for(summary.is_success)
        )

        embed = Embed(
            title=title(summary),
            description=f"**{summary.passed}/{summary.total}** tests passed",
            url=summary.run_url,
            color=int(status_color(summary), 16),
            fields=self.build_fields(summary),
            timestamp=summary.start_time.isoformat(),
            footer=EmbedFooter(text=self.config.footer),
        )

        return DiscordMessage(content=mentions or None, embeds=[embed])

    def build_fields(self, summary: RunSummary) -> Sequence[EmbedField]:
        """Inline statistics plus the failed test list."""
        fields = [
            EmbedField(name="📊 Total", value=str(summary.total)),
            EmbedField(name="⏱️ Duration", value=format_duration(summary.duration)),
            EmbedField(name="✅ Passed", value=str(summary.passed)),
            EmbedField(name="❌ Failed", value=str(summary.failed)),
        ]
        if summary.skipped:
            fields.append(EmbedField(name="⏭️ Skipped", value=str(summary.skipped)))
        if summary.flaky:
            fields.append(EmbedField(name="⚠️ Flaky", value=str(summary.flaky)))

        if titles := failure_titles(summary):
            value = bullet_list(truncate(t, FAILURE_TITLE_WIDTH) for t in titles)
            fields.append(
                EmbedField(name="❌ Failed tests", value=value, inline=False)
            )
        return fields
