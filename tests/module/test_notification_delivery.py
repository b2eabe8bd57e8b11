"""Module test delivering a finished run to WireMock-backed webhooks."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from wiremock.client import (
    HttpMethods,
    Mapping,
    MappingRequest,
    MappingResponse,
    Mappings,
)

from run_notifier.channels.json_file import read_report
from run_notifier.models.result import TestCaseResult
from run_notifier.reporter import NotificationReporter

pytestmark = pytest.mark.module


def stub_endpoint(path: str, status: int) -> None:
    """Answer POSTs to path with the given status."""
    Mappings.create_mapping(
        Mapping(
            request=MappingRequest(method=HttpMethods.POST, url_path=path),
            response=MappingResponse(
                status=status, body="ok" if status < 300 else "boom"
            ),
        )
    )


class StepClock:
    """Clock advancing one second per reading."""

    def __init__(self) -> None:
        self.now = datetime(2099, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        moment = self.now
        self.now += timedelta(seconds=1)
        return moment


async def test_failed_run_reaches_every_channel(
    wiremock_url: str, tmp_path: Path
) -> None:
    """Each channel reports its own outcome, a broken endpoint only its own."""
    stub_endpoint("/slack", 200)
    stub_endpoint("/discord", 204)
    stub_endpoint("/teams", 200)
    stub_endpoint("/hook", 500)

    reporter = NotificationReporter(
        [
            {"type": "slack", "webhookUrl": f"{wiremock_url}/slack"},
            {"type": "discord", "webhookUrl": f"{wiremock_url}/discord"},
            {"type": "teams", "webhookUrl": f"{wiremock_url}/teams"},
            {"type": "webhook", "webhookUrl": f"{wiremock_url}/hook"},
            {"type": "json-file", "outputDir": str(tmp_path)},
            {"type": "slack", "notifyOn": {"success": True}},
        ],
        clock=StepClock(),
        environ={},
    )

    reporter.on_begin()
    reporter.on_test_end(
        TestCaseResult(
            title="login", file="tests/login.py", status="passed", duration=1.0
        )
    )
    reporter.on_test_end(
        TestCaseResult(
            title="checkout",
            file="tests/checkout.py",
            status="failed",
            duration=2.0,
            error="AssertionError: total mismatch",
        )
    )
    outcome = await reporter.on_end("failed")

    assert [d.status for d in outcome.deliveries] == [
        "delivered",
        "delivered",
        "delivered",
        "failed",
        "delivered",
        "suppressed",
    ]
    assert outcome.deliveries[3].message == "HTTP 500: boom"

    report = read_report(tmp_path / "test-summary.json")
    assert report.total == 2
    assert report.failed == 1
    assert [failure.title for failure in report.failures] == ["checkout"]
