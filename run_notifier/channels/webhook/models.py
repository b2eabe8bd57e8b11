"""Pydantic models for the generic webhook payload."""

from collections.abc import Sequence
from datetime import datetime

from run_notifier.models.base import Model


class SummaryCounts(Model):
    """Counters and derived statistics."""

    total: int
    passed: int
    failed: int
    skipped: int
    flaky: int
    duration: float
    success_rate: float


class Execution(Model):
    """Timing and CI context of the run."""

    start_time: datetime
    end_time: datetime
    project_name: str | None = None
    run_url: str | None = None


class Failure(Model):
    """Failed test, with its full error message."""

    title: str
    file: str
    error: str
    duration: float


class WebhookPayload(Model):
    """Flat JSON document posted to the webhook."""

    event: str
    timestamp: datetime
    status: str
    summary: SummaryCounts
    execution: Execution
    failures: Sequence[Failure]
