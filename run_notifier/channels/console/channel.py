"""Console channel implementation."""

import logging
import sys
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import ClassVar, TextIO

from run_notifier.channels.base import NotificationChannel
from run_notifier.channels.console.config import ConsoleConfig
from run_notifier.channels.rendering import render_console_summary
from run_notifier.models.result import DeliveryResult, RunSummary

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ConsoleChannel(NotificationChannel[ConsoleConfig]):
    """Prints a human summary of the run. Makes no network call."""

    name: ClassVar[str] = "Console"

    stream: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ConsoleConfig, environ: Mapping[str, str] | None = None
    ) -> AsyncGenerator["ConsoleChannel", None]:
        """Create a channel writing to stdout."""
        yield cls(config=config)

    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Print the summary to the stream."""
        try:
            for line in render_console_summary(summary):
                print(line, file=self.stream)
            self.stream.flush()
        except OSError as exc:
            log.error("Failed to write console notification: %s", exc)
            return DeliveryResult(channel=self.name, status="failed", message=str(exc))

        return DeliveryResult(channel=self.name, status="delivered")
