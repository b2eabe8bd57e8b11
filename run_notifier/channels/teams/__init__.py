"""Microsoft Teams channel module."""

from run_notifier.channels.teams.channel import TeamsChannel
from run_notifier.channels.teams.config import TeamsConfig
from run_notifier.channels.teams.manifest import teams_manifest

__all__ = ["TeamsChannel", "TeamsConfig", "teams_manifest"]
