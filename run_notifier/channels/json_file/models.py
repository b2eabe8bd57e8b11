"""Pydantic models for the persisted JSON summary report."""

from collections.abc import Mapping, Sequence
from datetime import datetime

from pydantic import Field

from run_notifier.models.base import Model
from run_notifier.models.result import RunStatus, RunSummary


class ProjectStats(Model):
    """Per-project counters."""

    total: int
    passed: int
    failed: int


class ReportFailure(Model):
    """Failed test with its project and full error message."""

    title: str
    file: str
    project: str
    error: str
    duration: float


class ReportSlowTest(Model):
    """Entry of the slow test ranking."""

    title: str
    file: str
    duration: float


class SummaryReport(Model):
    """Complete run summary as written to disk."""

    start_time: datetime
    end_time: datetime
    duration: float
    total: int
    passed: int
    failed: int
    skipped: int
    flaky: int
    success_rate: float
    status: RunStatus
    project_name: str | None = None
    run_url: str | None = None
    projects: Mapping[str, ProjectStats] = Field(default_factory=dict)
    failures: Sequence[ReportFailure] = Field(default_factory=list)
    slow_tests: Sequence[ReportSlowTest] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: RunSummary) -> "SummaryReport":
        """Build the report from a finalized summary, without truncation."""
        return cls(
            start_time=summary.start_time,
            end_time=summary.end_time,
            duration=summary.duration,
            total=summary.total,
            passed=summary.passed,
            failed=summary.failed,
            skipped=summary.skipped,
            flaky=summary.flaky,
            success_rate=summary.success_rate,
            status=summary.status,
            project_name=summary.project_name,
            run_url=summary.run_url,
            projects={
                name: ProjectStats(
                    total=stats.total, passed=stats.passed, failed=stats.failed
                )
                for name, stats in summary.groups.items()
            },
            failures=[
                ReportFailure(
                    title=failure.title,
                    file=failure.file,
                    project=failure.project,
                    error=failure.error,
                    duration=failure.duration,
                )
                for failure in summary.failures
            ],
            slow_tests=[
                ReportSlowTest(title=slow.title, file=slow.file, duration=slow.duration)
                for slow in summary.slow_tests
            ],
        )
