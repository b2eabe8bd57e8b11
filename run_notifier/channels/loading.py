"""Channel plugins registered under the run_notifier.channels entry points."""

from collections.abc import Mapping, Sequence
from importlib.metadata import entry_points
from typing import Any

from run_notifier.channels.manifest import ChannelManifest
from run_notifier.models.config import NotificationConfig

ENTRY_POINT_GROUP = "run_notifier.channels"
DEFAULT_CHANNEL = "console"


class ChannelNotFoundError(LookupError):
    """Raised when a channel type has no usable plugin."""


def available_channels() -> Sequence[str]:
    """Type keys of every installed channel, sorted."""
    return sorted(entry.name for entry in entry_points(group=ENTRY_POINT_GROUP))


def load_channel_manifest(key: str) -> ChannelManifest[Any]:
    """Resolve a channel type key to its manifest.

    Args:
        key: The channel type as registered in pyproject.toml
             (e.g., "slack", "json-file")

    Raises:
        ChannelNotFoundError: If no plugin is registered under the key, or
            the plugin does not point at a ChannelManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise ChannelNotFoundError(
            f"Channel '{key}' not found. Available channels: {available_channels()}"
        )

    entry = next(iter(matches))
    manifest = entry.load()
    if not isinstance(manifest, ChannelManifest):
        raise ChannelNotFoundError(
            f"Entry point '{key}' ({entry.value}) is not a channel manifest"
        )
    return manifest


def parse_channel_config(data: Mapping[str, Any]) -> NotificationConfig:
    """Validate a raw configuration mapping with its channel's config class.

    The channel is selected by the "type" discriminator; a missing type
    selects the console channel.

    Raises:
        ChannelNotFoundError: If the type names no registered channel
        pydantic.ValidationError: If the configuration is malformed

    """
    manifest = load_channel_manifest(str(data.get("type", DEFAULT_CHANNEL)))
    return manifest.config_cls.model_validate(data)
