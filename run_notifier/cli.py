"""CLI entry point: replay lifecycle events and notify channels."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from run_notifier.channels.loading import parse_channel_config
from run_notifier.channels.rendering import STATUS_SYMBOLS, format_rate
from run_notifier.intake import Event, EventClock, read_events, replay
from run_notifier.models.config import NotificationConfig
from run_notifier.reporter import NotificationReporter, ReportOutcome

DELIVERY_SYMBOLS = {
    "delivered": "✅",
    "skipped": "⚠️",
    "suppressed": "🔕",
    "failed": "❌",
}


def load_channel_configs(config_json: str) -> Sequence[NotificationConfig]:
    """Parse a JSON object or list of objects into channel configurations."""
    data = json.loads(config_json)
    entries: list[Mapping[str, Any]] = data if isinstance(data, list) else [data]
    return [parse_channel_config(entry) for entry in entries]


def log_outcome_summary(log: logging.Logger, outcome: ReportOutcome) -> None:
    """Log the run status and the result of each delivery."""
    summary = outcome.summary
    log.info("=" * 80)
    log.info("Notification Summary:")
    log.info("=" * 80)
    log.info(
        "%s Run %s: %d/%d passed (%s)",
        STATUS_SYMBOLS.get(summary.status, "?"),
        summary.status,
        summary.passed,
        summary.total,
        format_rate(summary.success_rate),
    )

    for delivery in outcome.deliveries:
        symbol = DELIVERY_SYMBOLS.get(delivery.status, "?")
        log.info("%s %s: %s", symbol, delivery.channel, delivery.status)
        if delivery.message:
            log.info("  Message: %s", delivery.message)


def format_output(outcome: ReportOutcome) -> dict[str, Any]:
    """Format the outcome for JSON output."""
    summary = outcome.summary
    return {
        "status": summary.status,
        "total": summary.total,
        "passed": summary.passed,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "flaky": summary.flaky,
        "successRate": summary.success_rate,
        "deliveries": [
            {
                "channel": delivery.channel,
                "status": delivery.status,
                "message": delivery.message,
            }
            for delivery in outcome.deliveries
        ],
    }


async def run(
    configs: Sequence[NotificationConfig],
    events: Sequence[Event],
    environ: Mapping[str, str] | None = None,
) -> int:
    """Replay the events, notify, and return the exit code.

    The exit code reflects the run status only; failed deliveries are logged
    but never change it.
    """
    log = logging.getLogger("run_notifier")

    log.info("Replaying %d event(s) to %d channel(s)", len(events), len(configs))
    clock = EventClock()
    reporter = NotificationReporter(configs, clock=clock, environ=environ)
    outcome = await replay(reporter, events, clock)

    log_outcome_summary(log, outcome)
    print(json.dumps(format_output(outcome), indent=2))

    return 0 if outcome.summary.is_success else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Aggregate test run events and send notifications"
    )
    parser.add_argument(
        "--config",
        default='{"type": "console"}',
        help="JSON channel configuration (an object or a list of objects)",
    )
    parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="JSON Lines file of lifecycle events (default: stdin)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every recorded test result",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    configs = load_channel_configs(args.config)

    if args.events is None:
        events = read_events(sys.stdin)
    else:
        with args.events.open(encoding="utf-8") as events_file:
            events = read_events(events_file)

    exit_code = asyncio.run(run(configs=configs, events=events))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
