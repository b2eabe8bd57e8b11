"""JSON summary file channel implementation."""

import logging
import sys
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, TextIO

from run_notifier.channels.base import NotificationChannel
from run_notifier.channels.json_file.config import JsonFileConfig
from run_notifier.channels.json_file.models import SummaryReport
from run_notifier.channels.rendering import render_report
from run_notifier.models.result import DeliveryResult, RunSummary

log = logging.getLogger(__name__)


def write_report(report: SummaryReport, path: Path) -> None:
    """Write the report, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(by_alias=True, indent=2), encoding="utf-8")


def read_report(path: Path) -> SummaryReport:
    """Load a report written by write_report."""
    return SummaryReport.model_validate_json(path.read_text(encoding="utf-8"))


@dataclass(frozen=True, kw_only=True)
class JsonFileChannel(NotificationChannel[JsonFileConfig]):
    """Persists the full summary to disk, then prints a human summary."""

    name: ClassVar[str] = "JSON file"

    stream: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: JsonFileConfig, environ: Mapping[str, str] | None = None
    ) -> AsyncGenerator["JsonFileChannel", None]:
        """Create a channel printing to stdout."""
        yield cls(config=config)

    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Write the report file and print the summary."""
        path = self.config.output_path
        try:
            write_report(SummaryReport.from_summary(summary), path)
        except OSError as exc:
            log.error("Failed to write summary report to %s: %s", path, exc)
            return DeliveryResult(channel=self.name, status="failed", message=str(exc))

        log.info("Summary report written to %s", path)
        for line in render_report(summary, path):
            print(line, file=self.stream)
        return DeliveryResult(channel=self.name, status="delivered", message=str(path))
