"""Tests for the lifecycle reporter."""

import io
from pathlib import Path

import pytest
from aioresponses import aioresponses as aioresponses_cls

from run_notifier.aggregator import LifecycleError
from run_notifier.channels.json_file import JsonFileConfig, read_report
from run_notifier.channels.slack import SlackConfig
from run_notifier.models.config import NotificationConfig
from run_notifier.reporter import NotificationReporter, coerce_config
from run_notifier.testing.factories import TestCaseResultFactory

SLACK_URL = "http://slack.test/hook"


def test_coerce_config_upgrades_generic_config() -> None:
    """A base config is revalidated with its channel's config class."""
    config = coerce_config(NotificationConfig(type="slack", webhook_url=SLACK_URL))

    assert isinstance(config, SlackConfig)
    assert config.webhook_url == SLACK_URL


def test_coerce_config_accepts_mappings() -> None:
    """Raw mappings are parsed by type."""
    config = coerce_config({"type": "slack", "webhookUrl": SLACK_URL})

    assert isinstance(config, SlackConfig)


def test_test_end_before_begin_raises() -> None:
    """Results before run-begin break the lifecycle contract."""
    reporter = NotificationReporter([], environ={})

    with pytest.raises(LifecycleError, match="has not begun"):
        reporter.on_test_end(TestCaseResultFactory.build())


async def test_end_before_begin_raises() -> None:
    """Run-end before run-begin breaks the lifecycle contract."""
    reporter = NotificationReporter([], environ={})

    with pytest.raises(LifecycleError):
        await reporter.on_end("passed")


def test_begin_twice_raises() -> None:
    """A run cannot begin while another is in progress."""
    reporter = NotificationReporter([], environ={})
    reporter.on_begin()

    with pytest.raises(LifecycleError, match="already begun"):
        reporter.on_begin()


async def test_test_end_after_end_raises() -> None:
    """Results after run-end are rejected."""
    reporter = NotificationReporter([], environ={})
    reporter.on_begin()
    await reporter.on_end("passed")

    with pytest.raises(LifecycleError):
        reporter.on_test_end(TestCaseResultFactory.build())


async def test_full_lifecycle_notifies_channels(
    tmp_path: Path, aioresponses: aioresponses_cls
) -> None:
    """A failed run is finalized, posted to Slack and written to disk."""
    aioresponses.post(SLACK_URL, status=200)
    environ = {
        "GITHUB_SERVER_URL": "https://github.com",
        "GITHUB_REPOSITORY": "org/repo",
        "GITHUB_RUN_ID": "42",
        "PROJECT_NAME": "e2e",
    }
    reporter = NotificationReporter(
        [
            {"type": "slack", "webhookUrl": SLACK_URL},
            JsonFileConfig(output_dir=tmp_path),
        ],
        environ=environ,
    )

    reporter.on_begin()
    reporter.on_test_end(TestCaseResultFactory.build(status="passed"))
    reporter.on_test_end(TestCaseResultFactory.build(status="failed"))
    outcome = await reporter.on_end("failed")

    assert outcome.summary.total == 2
    assert outcome.summary.run_url == "https://github.com/org/repo/actions/runs/42"
    assert outcome.summary.project_name == "e2e"
    assert [(d.channel, d.status) for d in outcome.deliveries] == [
        ("Slack", "delivered"),
        ("JSON file", "delivered"),
    ]
    assert read_report(tmp_path / "test-summary.json").failed == 1


async def test_interrupted_run_is_still_notified(
    aioresponses: aioresponses_cls,
) -> None:
    """Interruption finalizes and dispatches like any failure."""
    aioresponses.post(SLACK_URL, status=200)
    reporter = NotificationReporter(
        [SlackConfig(webhook_url=SLACK_URL)], environ={}
    )

    reporter.on_begin()
    reporter.on_test_end(TestCaseResultFactory.build(status="passed"))
    outcome = await reporter.on_end("interrupted")

    assert outcome.summary.status == "interrupted"
    assert outcome.deliveries[0].status == "delivered"


async def test_alternative_timed_out_spelling_is_delivered(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A runner's "timedout" run status is notified as timed out."""
    reporter = NotificationReporter([{"type": "console"}], environ={})

    reporter.on_begin()
    outcome = await reporter.on_end("timedout")  # type: ignore[arg-type]

    assert outcome.summary.status == "timed_out"
    assert [d.status for d in outcome.deliveries] == ["delivered"]
    assert "Status: Timed out" in capsys.readouterr().out


async def test_unknown_run_status_raises() -> None:
    """An unknown run status is rejected before any channel is notified."""
    reporter = NotificationReporter([{"type": "console"}], environ={})
    reporter.on_begin()

    with pytest.raises(ValueError, match="unknown run status"):
        await reporter.on_end("aborted")  # type: ignore[arg-type]


async def test_delivery_failure_does_not_raise(
    aioresponses: aioresponses_cls,
) -> None:
    """A failing webhook is reported in the outcome."""
    aioresponses.post(SLACK_URL, status=500, body="internal error")
    reporter = NotificationReporter(
        [SlackConfig(webhook_url=SLACK_URL), {"type": "console"}], environ={}
    )

    reporter.on_begin()
    outcome = await reporter.on_end("failed")

    assert [d.status for d in outcome.deliveries] == ["failed", "delivered"]


async def test_new_run_after_end(capsys: pytest.CaptureFixture[str]) -> None:
    """The reporter can host consecutive runs."""
    reporter = NotificationReporter(
        [{"type": "console", "notifyOn": {"always": True}}], environ={}
    )

    reporter.on_begin()
    await reporter.on_end("passed")
    reporter.on_begin()
    reporter.on_test_end(TestCaseResultFactory.build())
    outcome = await reporter.on_end("passed")

    assert outcome.summary.total == 1
    assert capsys.readouterr().out.count("📢 Test notification") == 2
