"""Integration tests for the Discord channel."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from yarl import URL

from run_notifier.channels.discord import DiscordChannel, DiscordConfig
from run_notifier.testing.factories import FailedTestFactory, RunSummaryFactory

WEBHOOK_URL = "http://discord.test/api/webhooks/1/token"


@pytest.fixture
async def channel(aioresponses: aioresponses_cls) -> AsyncGenerator[DiscordChannel, None]:
    """Create channel with managed session."""
    config = DiscordConfig.model_validate(
        {"webhookUrl": WEBHOOK_URL, "mentions": {"onFailure": ["123456789012345678"]}}
    )
    async with DiscordChannel.from_config(config, {}) as impl:
        yield impl


def posted_json(aioresponses: aioresponses_cls) -> dict:  # type: ignore[type-arg]
    """Body of the single POST to the webhook."""
    call = aioresponses.requests[("POST", URL(WEBHOOK_URL))][0]
    return call.kwargs["json"]  # type: ignore[no-any-return]


async def test_posts_embed_for_failed_run(
    channel: DiscordChannel, aioresponses: aioresponses_cls
) -> None:
    """Failed run: mention content, red embed, fields, failures and link."""
    aioresponses.post(WEBHOOK_URL, status=204)
    summary = RunSummaryFactory.build(
        failed=7,
        failures=[FailedTestFactory.build(title=f"test {i}") for i in range(7)],
        run_url="https://ci.example/run/9",
    )

    result = await channel.send(summary)

    assert result.status == "delivered"
    message = posted_json(aioresponses)
    assert message["content"] == "<@123456789012345678>"

    embed = message["embeds"][0]
    assert embed["title"] == "❌ Test results: Failed"
    assert embed["description"] == "**8/10** tests passed"
    assert embed["color"] == 0xDC3545
    assert embed["url"] == "https://ci.example/run/9"
    assert embed["timestamp"] == "2099-01-01T12:00:00+00:00"
    assert embed["footer"] == {"text": "Test Results"}

    names = [f["name"] for f in embed["fields"]]
    assert names == [
        "📊 Total",
        "⏱️ Duration",
        "✅ Passed",
        "❌ Failed",
        "⏭️ Skipped",
        "⚠️ Flaky",
        "❌ Failed tests",
    ]
    failures_field = embed["fields"][-1]
    assert failures_field["inline"] is False
    assert failures_field["value"].count("• ") == 5
    assert "test 5" not in failures_field["value"]


async def test_passed_run_has_no_mentions(
    channel: DiscordChannel, aioresponses: aioresponses_cls
) -> None:
    """Passed run: green embed, no content, no url, no failures field."""
    aioresponses.post(WEBHOOK_URL, status=204)
    summary = RunSummaryFactory.build(
        status="passed", passed=10, failed=0, skipped=0, flaky=0
    )

    await channel.send(summary)

    message = posted_json(aioresponses)
    assert "content" not in message
    embed = message["embeds"][0]
    assert embed["color"] == 0x36A64F
    assert "url" not in embed
    assert len(embed["fields"]) == 4


async def test_server_error_is_failed_delivery(
    channel: DiscordChannel, aioresponses: aioresponses_cls
) -> None:
    """A 5xx response is reported, not raised."""
    aioresponses.post(WEBHOOK_URL, status=503, body="unavailable")

    result = await channel.send(RunSummaryFactory.build())

    assert result.status == "failed"
    assert result.channel == "Discord"


async def test_missing_webhook_url_skips(aioresponses: aioresponses_cls) -> None:
    """Without URL nothing is posted."""
    async with DiscordChannel.from_config(DiscordConfig(), {}) as channel:
        result = await channel.send(RunSummaryFactory.build())

    assert result.status == "skipped"
    assert aioresponses.requests == {}


async def test_long_failure_titles_fit_embed_field(
    channel: DiscordChannel, aioresponses: aioresponses_cls
) -> None:
    """Failure titles are shortened so the field stays within Discord's limit."""
    aioresponses.post(WEBHOOK_URL, status=204)
    summary = RunSummaryFactory.build(
        failed=5,
        failures=[FailedTestFactory.build(title=f"{i} " + "x" * 500) for i in range(5)],
    )

    result = await channel.send(summary)

    assert result.status == "delivered"
    value = posted_json(aioresponses)["embeds"][0]["fields"][-1]["value"]
    assert len(value) <= 1024
    assert value.count("…") == 5
    assert value.startswith("• 0 xxx")
