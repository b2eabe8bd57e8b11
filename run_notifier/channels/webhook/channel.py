"""Generic webhook channel implementation."""

from collections.abc import AsyncGenerator, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

import aiohttp

from run_notifier.aggregator import utc_now
from run_notifier.channels.base import NotificationChannel
from run_notifier.channels.http import missing_target, open_session, post_json
from run_notifier.channels.webhook.config import WebhookConfig
from run_notifier.channels.webhook.models import (
    Execution,
    Failure,
    SummaryCounts,
    WebhookPayload,
)
from run_notifier.models.result import DeliveryResult, RunSummary


@dataclass(frozen=True, kw_only=True)
class WebhookChannel(NotificationChannel[WebhookConfig]):
    """Posts the complete summary as JSON to an arbitrary endpoint."""

    name: ClassVar[str] = "Webhook"

    session: aiohttp.ClientSession = field(repr=False)
    webhook_url: str | None = field(repr=False)
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)
    clock: Callable[[], datetime] = field(default=utc_now, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: WebhookConfig, environ: Mapping[str, str] | None = None
    ) -> AsyncGenerator["WebhookChannel", None]:
        """Create channel with managed session lifecycle."""
        async with open_session(config) as session:
            yield cls(
                config=config,
                session=session,
                webhook_url=config.resolve_webhook_url(environ),
                headers=config.resolve_headers(environ),
            )

    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Post the payload with the resolved headers."""
        if self.webhook_url is None:
            return missing_target(self.name, self.config.webhook_url_env)

        payload = self.build_payload(summary)
        return await post_json(
            self.session,
            self.webhook_url,
            payload.model_dump(mode="json", by_alias=True),
            channel=self.name,
            headers=self.headers,
        )

    def build_payload(self, summary: RunSummary) -> WebhookPayload:
        """Serialize the summary, including every captured failure."""
        return WebhookPayload(
            event=self.config.event,
            timestamp=self.clock(),
            status=summary.status,
            summary=SummaryCounts(
                total=summary.total,
                passed=summary.passed,
                failed=summary.failed,
                skipped=summary.skipped,
                flaky=summary.flaky,
                duration=summary.duration,
                success_rate=summary.success_rate,
            ),
            execution=Execution(
                start_time=summary.start_time,
                end_time=summary.end_time,
                project_name=summary.project_name,
                run_url=summary.run_url,
            ),
            failures=[
                Failure(
                    title=failure.title,
                    file=failure.file,
                    error=failure.error,
                    duration=failure.duration,
                )
                for failure in summary.failures
            ],
        )
