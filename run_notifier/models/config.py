"""Models for notification channel configuration."""

import os
from collections.abc import Mapping, Sequence
from typing import ClassVar, Literal

from pydantic import Field

from run_notifier.models.base import Model

ChannelType = Literal[
    "console", "slack", "discord", "teams", "webhook", "json-file"
]


class NotifyOn(Model):
    """Dispatch policy.

    An explicitly supplied policy leaves unset flags false. Only the policy
    used when none is configured at all notifies on failure.
    """

    success: bool = Field(default=False, description="Notify when the run passed")
    failure: bool = Field(default=False, description="Notify when the run did not pass")
    always: bool = Field(default=False, description="Notify regardless of status")


DEFAULT_NOTIFY_ON = NotifyOn(failure=True)


class Mentions(Model):
    """Users or groups to mention in chat messages."""

    on_failure: Sequence[str] = Field(
        default_factory=list, description="Mentioned only when the run failed"
    )


class ChannelOptions(Model):
    """Free-form transport options."""

    headers: Mapping[str, str] = Field(
        default_factory=dict, description="Extra HTTP headers for the request"
    )


class NotificationConfig(Model):
    """Configuration shared by all notification channels."""

    # Environment variable consulted when webhook_url is not configured
    webhook_url_env: ClassVar[str | None] = None

    type: ChannelType
    webhook_url: str | None = None
    notify_on: NotifyOn = Field(default_factory=lambda: DEFAULT_NOTIFY_ON)
    mentions: Mentions = Field(default_factory=Mentions)
    options: ChannelOptions = Field(default_factory=ChannelOptions)
    timeout: float = Field(default=10.0, gt=0, description="Request timeout (s)")
    project_name: str | None = None

    def resolve_webhook_url(
        self, environ: Mapping[str, str] | None = None
    ) -> str | None:
        """Return the configured webhook URL, else the environment fallback."""
        if self.webhook_url:
            return self.webhook_url
        if self.webhook_url_env is None:
            return None
        env = os.environ if environ is None else environ
        return env.get(self.webhook_url_env) or None

    def mentions_for(self, is_success: bool) -> Sequence[str]:
        """Mentions apply to failed runs only."""
        if is_success:
            return ()
        return tuple(self.mentions.on_failure)
