"""Reporter driven by the test runner's lifecycle hooks."""

import logging
import os
from collections.abc import Mapping, Sequence
from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Any

from run_notifier.aggregator import Clock, LifecycleError, RunContext, utc_now
from run_notifier.channels.base import NotificationChannel
from run_notifier.channels.loading import load_channel_manifest, parse_channel_config
from run_notifier.dispatcher import NotificationDispatcher
from run_notifier.environment import get_project_name, get_run_url
from run_notifier.models.config import NotificationConfig
from run_notifier.models.result import (
    DeliveryResult,
    RunStatus,
    RunSummary,
    TestCaseResult,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ReportOutcome:
    """Finalized summary together with the per-channel delivery results."""

    summary: RunSummary
    deliveries: Sequence[DeliveryResult]


def coerce_config(config: NotificationConfig | Mapping[str, Any]) -> NotificationConfig:
    """Validate a configuration with the config class of its channel."""
    if isinstance(config, Mapping):
        return parse_channel_config(config)

    manifest = load_channel_manifest(config.type)
    if isinstance(config, manifest.config_cls):
        return config
    return manifest.config_cls.model_validate(config.model_dump())


class NotificationReporter:
    """Aggregates one test run and notifies the configured channels at its end.

    The runner calls on_begin(), then on_test_end() once per test case, then
    on_end(). Calls out of that order raise LifecycleError.
    """

    def __init__(
        self,
        configs: Sequence[NotificationConfig | Mapping[str, Any]],
        *,
        clock: Clock = utc_now,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.configs = [coerce_config(config) for config in configs]
        self.clock = clock
        self.environ = os.environ if environ is None else environ
        self._context: RunContext | None = None

    @property
    def context(self) -> RunContext:
        """Context of the current run.

        Raises:
            LifecycleError: If on_begin() has not been called

        """
        if self._context is None:
            raise LifecycleError("Run has not begun")
        return self._context

    def on_begin(self) -> None:
        """Start a run. A new run may begin once the previous one has ended."""
        if self._context is not None and not self._context.finalized:
            raise LifecycleError("Run has already begun")
        self._context = RunContext.begin(self.clock)
        log.info("Run started at %s", self._context.start_time.isoformat())

    def on_test_end(self, result: TestCaseResult) -> None:
        """Record the outcome of one test case."""
        self.context.record(result)

    async def on_end(self, status: RunStatus) -> ReportOutcome:
        """Finalize the run and deliver notifications.

        Interrupted runs are finalized and notified like any other run.
        Delivery problems are reported in the outcome and never raised.
        """
        summary = self.context.finalize(
            status,
            project_name=get_project_name(
                [config.project_name for config in self.configs], self.environ
            ),
            run_url=get_run_url(self.environ),
        )
        deliveries = await self.notify(summary)
        return ReportOutcome(summary=summary, deliveries=deliveries)

    async def notify(self, summary: RunSummary) -> Sequence[DeliveryResult]:
        """Open every configured channel and dispatch the summary."""
        async with AsyncExitStack() as stack:
            channels: list[NotificationChannel[Any]] = []
            for config in self.configs:
                manifest = load_channel_manifest(config.type)
                channels.append(
                    await stack.enter_async_context(
                        manifest.channel_factory(config, self.environ)
                    )
                )

            dispatcher = NotificationDispatcher(channels=channels)
            return await dispatcher.dispatch(summary)
