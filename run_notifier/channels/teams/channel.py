"""Microsoft Teams channel implementation."""

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
from run_notifier.channels.teams.config import TeamsConfig
from run_notifier.channels.teams.models import (
    Fact,
    MessageCard,
    OpenUriAction,
    Section,
    Target,
)
from run_notifier.models.result import DeliveryResult, RunSummary


@dataclass(frozen=True, kw_only=True)
class TeamsChannel(NotificationChannel[TeamsConfig]):
    """Microsoft Teams incoming webhook channel."""

    name: ClassVar[str] = "Microsoft Teams"

    session: aiohttp.ClientSession = field(repr=False)
    webhook_url: str | None = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: TeamsConfig, environ: Mapping[str, str] | None = None
    ) -> AsyncGenerator["TeamsChannel", None]:
        """Create channel with managed session lifecycle."""
        async with open_session(config) as session:
            yield cls(
                config=config,
                session=session,
                webhook_url=config.resolve_webhook_url(environ),
            )

    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Post the MessageCard to the webhook."""
        if self.webhook_url is None:
            return missing_target(self.name, self.config.webhook_url_env)

        card = self.build_message(summary)
        return await post_json(
            self.session,
            self.webhook_url,
            card.model_dump(mode="json", by_alias=True, exclude_none=True),
            channel=self.name,
        )

    def build_message(self, summary: RunSummary) -> MessageCard:
        """Build the MessageCard for a summary."""
        headline = title(summary)
        mentions = " ".join(
            f"<at>{user}</at>" for user in self.config.mentions_for(summary.is_success)
        )

        sections = [
            Section(
                activity_title=headline,
                activity_subtitle=format_timestamp(summary.start_time),
                facts=self.build_facts(summary),
            )
        ]
        if titles := failure_titles(summary):
            sections.append(
                Section(activity_title="❌ Failed tests", text=bullet_list(titles, "-"))
            )

        actions = None
        if summary.run_url:
            actions = [
                OpenUriAction(name="View run", targets=[Target(uri=summary.run_url)])
            ]

        return MessageCard(
            theme_color=status_color(summary),
            summary=headline,
            text=mentions or None,
            sections=sections,
            potential_action=actions,
        )

    def build_facts(self, summary: RunSummary) -> Sequence[Fact]:
        """Statistics shown as facts of the main section."""
        facts = [
            Fact(name="Total", value=str(summary.total)),
            Fact(name="Passed", value=f"{summary.passed} ✅"),
            Fact(name="Failed", value=f"{summary.failed} ❌"),
            Fact(name="Duration", value=format_duration(summary.duration)),
        ]
        if summary.skipped:
            facts.append(Fact(name="Skipped", value=str(summary.skipped)))
        if summary.flaky:
            facts.append(Fact(name="Flaky", value=str(summary.flaky)))
        return facts
