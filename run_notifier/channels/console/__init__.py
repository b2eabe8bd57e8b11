"""Console channel module."""

from run_notifier.channels.console.channel import ConsoleChannel
from run_notifier.channels.console.config import ConsoleConfig
from run_notifier.channels.console.manifest import console_manifest

__all__ = ["ConsoleChannel", "ConsoleConfig", "console_manifest"]
