"""Summary builder: derived statistics computed when a run is finalized."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from types import MappingProxyType

from run_notifier.models.result import (
    FailedTest,
    GroupStats,
    RunStatus,
    RunSummary,
    SlowTest,
    TestCaseResult,
)

SLOW_TEST_LIMIT = 5


def success_rate(passed: int, total: int) -> float:
    """Percentage of passed tests, 0.0 for an empty run."""
    if total == 0:
        return 0.0
    return passed / total * 100


def rank_slow_tests(
    results: Iterable[TestCaseResult], limit: int = SLOW_TEST_LIMIT
) -> Sequence[SlowTest]:
    """Rank passed tests by duration, slowest first.

    Failed, timed out and skipped tests are not ranked. Ties keep the order in
    which the results were reported.
    """
    passed = [result for result in results if result.status == "passed"]
    ranked = sorted(passed, key=lambda result: result.duration, reverse=True)
    return tuple(
        SlowTest(title=result.title, file=result.file, duration=result.duration)
        for result in ranked[:limit]
    )


def build_summary(
    *,
    start_time: datetime,
    end_time: datetime,
    status: RunStatus,
    counts: Mapping[str, int],
    failures: Sequence[FailedTest],
    groups: Mapping[str, GroupStats],
    passed_results: Sequence[TestCaseResult],
    project_name: str | None = None,
    run_url: str | None = None,
) -> RunSummary:
    """Assemble the finalized run summary."""
    return RunSummary(
        start_time=start_time,
        end_time=end_time,
        duration=max((end_time - start_time).total_seconds(), 0.0),
        total=counts["total"],
        passed=counts["passed"],
        failed=counts["failed"],
        skipped=counts["skipped"],
        flaky=counts["flaky"],
        success_rate=success_rate(counts["passed"], counts["total"]),
        status=status,
        failures=tuple(failures),
        groups=MappingProxyType(dict(groups)),
        slow_tests=rank_slow_tests(passed_results),
        project_name=project_name,
        run_url=run_url,
    )
