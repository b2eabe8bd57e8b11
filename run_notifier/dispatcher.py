"""Delivery of a finalized summary to every configured channel."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from run_notifier.channels.base import NotificationChannel
from run_notifier.models.result import DeliveryResult, RunSummary
from run_notifier.policy import should_notify

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class NotificationDispatcher:
    """Fans a summary out to channels concurrently, isolating their failures."""

    channels: Sequence[NotificationChannel[Any]]

    async def dispatch(self, summary: RunSummary) -> Sequence[DeliveryResult]:
        """Send the summary to every channel whose policy asks for it.

        Args:
            summary: Finalized run summary

        Returns:
            One result per channel, in channel order

        """
        if not self.channels:
            log.info("No notification channels configured")
            return []

        wanted = [
            should_notify(channel.config.notify_on, summary.status)
            for channel in self.channels
        ]
        selected = [
            channel for channel, notify in zip(self.channels, wanted) if notify
        ]
        log.info(
            "Dispatching %s run to %d of %d channel(s)...",
            summary.status,
            len(selected),
            len(self.channels),
        )

        results = await asyncio.gather(
            *(channel.send(summary) for channel in selected), return_exceptions=True
        )
        delivered = iter(self._process_results(selected, results))

        final_results: list[DeliveryResult] = []
        for channel, notify in zip(self.channels, wanted):
            if notify:
                final_results.append(next(delivered))
                continue
            log.info(
                "Notification suppressed for %s (status=%s)",
                channel.name,
                summary.status,
            )
            final_results.append(
                DeliveryResult(channel=channel.name, status="suppressed")
            )
        return final_results

    def _process_results(
        self,
        channels: Sequence[NotificationChannel[Any]],
        results: Sequence[DeliveryResult | BaseException],
    ) -> Sequence[DeliveryResult]:
        """Turn unexpected channel exceptions into failed deliveries."""
        final_results: list[DeliveryResult] = []

        for channel, result in zip(channels, results, strict=True):
            if isinstance(result, DeliveryResult):
                log.info(
                    "Notification completed: channel=%s status=%s",
                    result.channel,
                    result.status,
                )
                final_results.append(result)
            else:
                log.error(
                    "Notification channel %s failed: %s",
                    channel.name,
                    result,
                    exc_info=result,
                )
                final_results.append(
                    DeliveryResult(
                        channel=channel.name,
                        status="failed",
                        message=str(result) or type(result).__name__,
                    )
                )

        return final_results
