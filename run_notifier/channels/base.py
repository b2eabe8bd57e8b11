"""Abstract base class for notification channels."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from run_notifier.models.config import NotificationConfig
from run_notifier.models.result import DeliveryResult, RunSummary

ConfigT = TypeVar("ConfigT", bound=NotificationConfig)


@dataclass(frozen=True, kw_only=True)
class NotificationChannel(ABC, Generic[ConfigT]):
    """Abstract base for notification channels.

    A channel maps a finalized RunSummary to one destination's native
    representation and delivers it. The channel's configuration is bound at
    construction time by the channel factory.
    """

    name: ClassVar[str]

    config: ConfigT

    @abstractmethod
    async def send(self, summary: RunSummary) -> DeliveryResult:
        """Render and deliver the summary.

        Implementations never raise: delivery problems are reported through
        the returned DeliveryResult.

        Args:
            summary: Finalized run summary

        Returns:
            Outcome of the delivery

        """
