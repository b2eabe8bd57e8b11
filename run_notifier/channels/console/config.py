"""Configuration for the console channel."""

from typing import Literal

from run_notifier.models.config import NotificationConfig


class ConsoleConfig(NotificationConfig):
    """Configuration for the console channel. No delivery target is needed."""

    type: Literal["console"] = "console"
