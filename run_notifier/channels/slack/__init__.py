"""Slack channel module."""

from run_notifier.channels.slack.channel import SlackChannel
from run_notifier.channels.slack.config import SlackConfig
from run_notifier.channels.slack.manifest import slack_manifest

__all__ = ["SlackChannel", "SlackConfig", "slack_manifest"]
