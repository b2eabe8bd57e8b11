"""Channel manifest definition for the plugin system."""

from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Generic, TypeVar

from run_notifier.channels.base import NotificationChannel
from run_notifier.models.config import NotificationConfig

ConfigT = TypeVar("ConfigT", bound=NotificationConfig)


@dataclass(frozen=True, kw_only=True)
class ChannelManifest(Generic[ConfigT]):
    """Manifest describing a channel plugin.

    The manifest contains references to the configuration class and the
    channel factory so channels can be loaded lazily from their type key.
    The factory receives the validated configuration and the environment used
    to resolve fallbacks.
    """

    config_cls: type[ConfigT]
    channel_factory: Callable[
        [ConfigT, Mapping[str, str] | None],
        AbstractAsyncContextManager[NotificationChannel[ConfigT]],
    ]
