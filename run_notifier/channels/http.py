"""Shared HTTP delivery for network-backed channels."""

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from run_notifier.models.config import NotificationConfig
from run_notifier.models.result import DeliveryResult

log = logging.getLogger(__name__)


def open_session(config: NotificationConfig) -> aiohttp.ClientSession:
    """Create a client session bounded by the channel's timeout."""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=config.timeout),
    )


def missing_target(channel: str, env_var: str | None) -> DeliveryResult:
    """Report a channel without a resolvable webhook URL."""
    log.warning(
        "%s webhook URL is not configured (set webhook_url or %s), skipping",
        channel,
        env_var,
    )
    return DeliveryResult(
        channel=channel, status="skipped", message="webhook URL not configured"
    )


async def post_json(
    session: aiohttp.ClientSession,
    url: str,
    payload: Mapping[str, Any],
    *,
    channel: str,
    headers: Mapping[str, str] | None = None,
) -> DeliveryResult:
    """POST a JSON payload once and report the outcome.

    Non-2xx responses, client errors and timeouts are logged and reported as
    failed deliveries, never raised.
    """
    try:
        async with session.post(url, json=payload, headers=headers) as response:
            if not 200 <= response.status < 300:
                text = await response.text()
                log.error(
                    "Failed to deliver %s notification: %s %s",
                    channel,
                    response.status,
                    text,
                )
                return DeliveryResult(
                    channel=channel,
                    status="failed",
                    message=f"HTTP {response.status}: {text}",
                )
    except (aiohttp.ClientError, TimeoutError) as exc:
        message = str(exc) or type(exc).__name__
        log.error("Failed to deliver %s notification: %s", channel, message)
        return DeliveryResult(channel=channel, status="failed", message=message)

    log.info("Delivered %s notification", channel)
    return DeliveryResult(channel=channel, status="delivered")
