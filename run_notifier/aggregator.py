"""Result aggregation over the lifecycle of a single test run."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import TypeAlias

from run_notifier.models.result import (
    FailedTest,
    GroupStats,
    RunStatus,
    RunSummary,
    TestCaseResult,
    canonical_run_status,
)
from run_notifier.summary import build_summary

log = logging.getLogger(__name__)

Clock: TypeAlias = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


class LifecycleError(RuntimeError):
    """Raised when lifecycle events arrive out of order."""


@dataclass(kw_only=True)
class RunContext:
    """Mutable accumulator threaded from run-begin to run-end.

    Callbacks must be serialized by the host: the context does no locking.
    """

    start_time: datetime
    clock: Clock = field(default=utc_now, repr=False)
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    flaky: int = 0
    failures: list[FailedTest] = field(default_factory=list)
    groups: dict[str, GroupStats] = field(default_factory=dict)
    passed_results: list[TestCaseResult] = field(default_factory=list)
    summary: RunSummary | None = None

    @classmethod
    def begin(cls, clock: Clock = utc_now) -> "RunContext":
        """Start a new run at the current clock time."""
        return cls(start_time=clock(), clock=clock)

    @property
    def finalized(self) -> bool:
        """Whether finalize() has already been called."""
        return self.summary is not None

    @property
    def counts(self) -> Mapping[str, int]:
        """Snapshot of the top-level counters."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "flaky": self.flaky,
        }

    def record(self, result: TestCaseResult) -> None:
        """Fold one test-end event into the running counters.

        Raises:
            LifecycleError: If the run has already been finalized

        """
        if self.finalized:
            raise LifecycleError(
                f"Test result {result.title!r} received after the run was finalized"
            )

        group = self.groups.get(result.project, GroupStats())
        group = replace(group, total=group.total + 1)
        self.total += 1

        if result.status == "passed":
            self.passed += 1
            group = replace(group, passed=group.passed + 1)
            self.passed_results.append(result)
            if result.is_flaky:
                self.flaky += 1
        elif result.is_failure:
            self.failed += 1
            group = replace(group, failed=group.failed + 1)
            self.failures.append(FailedTest.from_result(result))
        elif result.status == "skipped":
            self.skipped += 1

        self.groups[result.project] = group
        log.debug(
            "Recorded %s: status=%s duration=%.3fs retry=%d",
            result.title,
            result.status,
            result.duration,
            result.retry,
        )

    def finalize(
        self,
        status: RunStatus,
        *,
        project_name: str | None = None,
        run_url: str | None = None,
    ) -> RunSummary:
        """Stop the clock and freeze the summary.

        Raises:
            LifecycleError: If the run has already been finalized
            ValueError: If the status is not a known run status

        """
        if self.summary is not None:
            raise LifecycleError("Run has already been finalized")
        status = canonical_run_status(status)

        self.summary = build_summary(
            start_time=self.start_time,
            end_time=self.clock(),
            status=status,
            counts=self.counts,
            failures=self.failures,
            groups=self.groups,
            passed_results=self.passed_results,
            project_name=project_name,
            run_url=run_url,
        )
        log.info(
            "Run finalized: status=%s total=%d passed=%d failed=%d skipped=%d flaky=%d",
            status,
            self.total,
            self.passed,
            self.failed,
            self.skipped,
            self.flaky,
        )
        return self.summary


def aggregate(
    results: Sequence[TestCaseResult],
    status: RunStatus,
    clock: Clock = utc_now,
) -> RunSummary:
    """Aggregate a complete, already collected sequence of results."""
    context = RunContext.begin(clock)
    for result in results:
        context.record(result)
    return context.finalize(status)
