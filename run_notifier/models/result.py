"""Models for test case outcomes, run summaries and delivery results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, cast, get_args

TestStatus = Literal["passed", "failed", "timed_out", "skipped"]
RunStatus = Literal["passed", "failed", "timed_out", "interrupted"]
DeliveryStatus = Literal["delivered", "skipped", "suppressed", "failed"]

TEST_STATUSES: frozenset[str] = frozenset(get_args(TestStatus))
RUN_STATUSES: frozenset[str] = frozenset(get_args(RunStatus))
FAILED_STATUSES: frozenset[TestStatus] = frozenset(["failed", "timed_out"])

# Spellings used by other runners for the same statuses
STATUS_ALIASES = {
    "timedOut": "timed_out",
    "timedout": "timed_out",
    "timed-out": "timed_out",
    "timeout": "timed_out",
}

UNKNOWN_ERROR = "Unknown error"


def normalize_status(value: Any) -> Any:
    """Map alternative status spellings onto the canonical ones."""
    if isinstance(value, str):
        return STATUS_ALIASES.get(value, value)
    return value


def canonical_run_status(status: str) -> RunStatus:
    """Normalize a run status.

    Raises:
        ValueError: If the status is not a known run status

    """
    status = normalize_status(status)
    if status not in RUN_STATUSES:
        raise ValueError(
            f"unknown run status {status!r}, expected one of {sorted(RUN_STATUSES)}"
        )
    return cast(RunStatus, status)


@dataclass(frozen=True, kw_only=True)
class TestCaseResult:
    """Terminal outcome of a single test case, as reported by the runner."""

    __test__ = False

    title: str
    file: str
    project: str = "default"
    status: TestStatus
    duration: float
    retry: int = 0
    error: str | None = None

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
        if self.retry < 0:
            raise ValueError(f"retry must be >= 0, got {self.retry}")

        status = normalize_status(self.status)
        if status not in TEST_STATUSES:
            raise ValueError(
                f"unknown test status {status!r}, expected one of {sorted(TEST_STATUSES)}"
            )
        object.__setattr__(self, "status", status)

    @property
    def is_failure(self) -> bool:
        """Whether the outcome belongs in the failure log."""
        return self.status in FAILED_STATUSES

    @property
    def is_flaky(self) -> bool:
        """Whether the test passed only after at least one retry."""
        return self.status == "passed" and self.retry > 0


@dataclass(frozen=True, kw_only=True)
class FailedTest:
    """Failure log entry captured for a failed or timed out test."""

    title: str
    file: str
    project: str
    error: str
    duration: float

    @classmethod
    def from_result(cls, result: TestCaseResult) -> "FailedTest":
        """Capture a failing result."""
        return cls(
            title=result.title,
            file=result.file,
            project=result.project,
            error=result.error or UNKNOWN_ERROR,
            duration=result.duration,
        )


@dataclass(frozen=True, kw_only=True)
class SlowTest:
    """Entry of the slow test ranking."""

    title: str
    file: str
    duration: float


@dataclass(frozen=True, kw_only=True)
class GroupStats:
    """Per-project counters. Skipped tests only count toward the total."""

    total: int = 0
    passed: int = 0
    failed: int = 0


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Finalized, read-only aggregate of a whole test run."""

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
    failures: Sequence[FailedTest] = ()
    groups: Mapping[str, GroupStats] = field(default_factory=dict)
    slow_tests: Sequence[SlowTest] = ()
    project_name: str | None = None
    run_url: str | None = None

    @property
    def is_success(self) -> bool:
        """Whether the run as a whole passed."""
        return self.status == "passed"


@dataclass(frozen=True, kw_only=True)
class DeliveryResult:
    """Outcome of delivering a summary to one channel."""

    channel: str
    status: DeliveryStatus
    message: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the delivery did not fail. Skipped deliveries count as ok."""
        return self.status != "failed"
