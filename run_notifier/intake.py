"""Lifecycle events read from a JSON Lines stream.

Each line holds one event::

    {"event": "begin"}
    {"event": "test_end", "title": "login", "file": "tests/login.py",
     "status": "passed", "duration": 1.2, "retry": 0}
    {"event": "end", "status": "failed"}

Events may carry an ISO 8601 "timestamp"; events without one are stamped
when they are read.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, field_validator

from run_notifier.aggregator import LifecycleError, utc_now
from run_notifier.models.base import Model
from run_notifier.models.result import (
    RunStatus,
    TestCaseResult,
    TestStatus,
    normalize_status,
)
from run_notifier.reporter import NotificationReporter, ReportOutcome

log = logging.getLogger(__name__)


class LifecycleEvent(Model):
    """Fields shared by every event. Naive timestamps are taken as UTC."""

    timestamp: datetime | None = None

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        """Attach UTC to naive timestamps."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class BeginEvent(LifecycleEvent):
    """Run started."""

    event: Literal["begin"]


class TestEndEvent(LifecycleEvent):
    """One test case reached its terminal status."""

    __test__ = False

    event: Literal["test_end"]
    title: str
    file: str
    project: str = "default"
    status: TestStatus
    duration: float = Field(ge=0, description="Wall-clock duration in seconds")
    retry: int = Field(default=0, ge=0)
    error: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def canonical_status(cls, value: Any) -> Any:
        """Accept alternative status spellings."""
        return normalize_status(value)

    def to_result(self) -> TestCaseResult:
        """Convert to the aggregator's result type."""
        return TestCaseResult(
            title=self.title,
            file=self.file,
            project=self.project,
            status=self.status,
            duration=self.duration,
            retry=self.retry,
            error=self.error,
        )


class EndEvent(LifecycleEvent):
    """Run finished with its overall status."""

    event: Literal["end"]
    status: RunStatus

    @field_validator("status", mode="before")
    @classmethod
    def canonical_status(cls, value: Any) -> Any:
        """Accept alternative status spellings."""
        return normalize_status(value)


Event = Annotated[
    BeginEvent | TestEndEvent | EndEvent, Field(discriminator="event")
]

event_adapter: TypeAdapter[Event] = TypeAdapter(Event)


def parse_event(line: str, received_at: datetime | None = None) -> Event:
    """Parse one JSON line, stamping it with the receipt time if needed.

    Raises:
        pydantic.ValidationError: If the line is not a valid event

    """
    event = event_adapter.validate_json(line)
    if event.timestamp is None:
        event = event.model_copy(update={"timestamp": received_at or utc_now()})
    return event


def read_events(lines: Iterable[str]) -> Sequence[Event]:
    """Parse every non-blank line. Ctrl-C stops reading but keeps what was read."""
    events: list[Event] = []
    try:
        for line in lines:
            if line.strip():
                events.append(parse_event(line))
    except KeyboardInterrupt:
        log.warning("Reading events interrupted after %d event(s)", len(events))
    return events


class EventClock:
    """Clock that follows event timestamps, falling back to the wall clock."""

    def __init__(self) -> None:
        self.current: datetime | None = None

    def __call__(self) -> datetime:
        return self.current or utc_now()

    def advance(self, moment: datetime | None) -> None:
        """Move to the timestamp of the event being processed."""
        self.current = moment


async def replay(
    reporter: NotificationReporter, events: Iterable[Event], clock: EventClock
) -> ReportOutcome:
    """Feed events to the reporter in order.

    A stream without an end event is finalized as interrupted and still
    notified.

    Raises:
        LifecycleError: If an event arrives before begin or after end

    """
    outcome: ReportOutcome | None = None

    for event in events:
        if outcome is not None:
            raise LifecycleError(f"Event {event.event!r} received after the run ended")

        clock.advance(event.timestamp)
        if isinstance(event, BeginEvent):
            reporter.on_begin()
        elif isinstance(event, TestEndEvent):
            reporter.on_test_end(event.to_result())
        else:
            outcome = await reporter.on_end(event.status)

    if outcome is None:
        log.warning(
            "Event stream ended before the run finished, reporting it as interrupted"
        )
        clock.advance(None)
        outcome = await reporter.on_end("interrupted")

    return outcome
