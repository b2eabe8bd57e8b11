"""Discord channel module."""

from run_notifier.channels.discord.channel import DiscordChannel
from run_notifier.channels.discord.config import DiscordConfig
from run_notifier.channels.discord.manifest import discord_manifest

__all__ = ["DiscordChannel", "DiscordConfig", "discord_manifest"]
