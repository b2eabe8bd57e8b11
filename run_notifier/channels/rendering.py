"""Text rendering shared by the channels."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from pathlib import Path

from run_notifier.models.result import RunStatus, RunSummary

MAX_LISTED_FAILURES = 5

SUCCESS_COLOR = "36a64f"
FAILURE_COLOR = "dc3545"

STATUS_SYMBOLS: Mapping[RunStatus, str] = {
    "passed": "✅",
    "failed": "❌",
    "timed_out": "⏱️",
    "interrupted": "⛔",
}

STATUS_LABELS: Mapping[RunStatus, str] = {
    "passed": "Passed",
    "failed": "Failed",
    "timed_out": "Timed out",
    "interrupted": "Interrupted",
}

RULE_WIDTH = 50


def status_symbol(summary: RunSummary) -> str:
    """Emoji for the run status."""
    return STATUS_SYMBOLS.get(summary.status, "❔")


def status_label(summary: RunSummary) -> str:
    """Human label for the run status, the raw status if it has none."""
    return STATUS_LABELS.get(summary.status, summary.status)


def status_color(summary: RunSummary) -> str:
    """Hex colour (without '#') keyed to pass/fail."""
    return SUCCESS_COLOR if summary.is_success else FAILURE_COLOR


def title(summary: RunSummary) -> str:
    """Headline such as '❌ Test results: Failed'."""
    return f"{status_symbol(summary)} Test results: {status_label(summary)}"


def format_duration(seconds: float) -> str:
    """Format a duration in seconds with one decimal."""
    return f"{seconds:.1f}s"


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp in UTC for humans."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def format_rate(rate: float) -> str:
    """Format a success rate percentage."""
    return f"{rate:.1f}%"


def failure_titles(
    summary: RunSummary, limit: int = MAX_LISTED_FAILURES
) -> Sequence[str]:
    """Titles of the first failures, capped for chat messages."""
    return [failure.title for failure in summary.failures[:limit]]


def bullet_list(items: Iterable[str], bullet: str = "•") -> str:
    """Join items as a newline separated bulleted list."""
    return "\n".join(f"{bullet} {item}" for item in items)


def truncate(text: str, width: int) -> str:
    """Shorten text to at most width characters, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def first_line(text: str) -> str:
    """First line of a possibly multi-line error message."""
    return text.split("\n", 1)[0]


def render_console_summary(summary: RunSummary) -> Sequence[str]:
    """Human summary printed by the console channel."""
    lines = [
        "",
        "🔔" * 25,
        "📢 Test notification",
        "🔔" * 25,
        "",
        f"{status_symbol(summary)} Status: {status_label(summary)}",
        f"📊 Total: {summary.total}",
        f"✅ Passed: {summary.passed}",
        f"❌ Failed: {summary.failed}",
        f"⏭️  Skipped: {summary.skipped}",
        f"⏱️  Duration: {format_duration(summary.duration)}",
        f"📈 Success rate: {format_rate(summary.success_rate)}",
    ]

    if summary.failures:
        lines += ["", "❌ Failed tests:"]
        for failure in summary.failures[:MAX_LISTED_FAILURES]:
            lines.append(f"   - {failure.title}")
            lines.append(f"     File: {failure.file}")

    lines += ["", f"📅 Started at: {format_timestamp(summary.start_time)}"]

    if summary.run_url:
        lines.append(f"🔗 Details: {summary.run_url}")

    lines += ["", "🔔" * 25, ""]
    return lines


def render_report(summary: RunSummary, report_path: Path) -> Sequence[str]:
    """Human summary printed after the JSON report is written.

    Unlike chat messages, the report lists every failure.
    """
    lines = [
        "",
        "=" * RULE_WIDTH,
        "📊 Test results summary",
        "=" * RULE_WIDTH,
        "",
        f"⏱️  Duration: {summary.duration:.2f}s",
        f"📝 Total: {summary.total}",
        f"✅ Passed: {summary.passed}",
        f"❌ Failed: {summary.failed}",
        f"⏭️  Skipped: {summary.skipped}",
    ]
    if summary.flaky:
        lines.append(f"⚠️  Flaky: {summary.flaky}")

    if summary.groups:
        lines += ["", "📁 By project:"]
        for name, stats in summary.groups.items():
            symbol = "❌" if stats.failed else "✅"
            lines.append(f"   {symbol} {name}: {stats.passed}/{stats.total} passed")

    if summary.failures:
        lines += ["", "❌ Failed tests:"]
        for failure in summary.failures:
            lines.append(f"   - {failure.title}")
            lines.append(f"     {first_line(failure.error)}")

    if summary.slow_tests:
        lines += ["", f"🐢 Slowest tests (top {len(summary.slow_tests)}):"]
        for slow in summary.slow_tests:
            lines.append(f"   - {slow.title} ({slow.duration:.2f}s)")

    lines += ["", "=" * RULE_WIDTH, "", f"📄 Report: {report_path}", ""]
    return lines
