"""Dispatch policy evaluation."""

from run_notifier.models.config import NotifyOn
from run_notifier.models.result import RunStatus


def should_notify(notify_on: NotifyOn, status: RunStatus) -> bool:
    """Decide whether a finalized run triggers a notification.

    Args:
        notify_on: Configured dispatch policy
        status: Final status of the run

    Returns:
        True if the channel should be notified

    """
    if notify_on.always:
        return True

    if notify_on.success and status == "passed":
        return True

    return notify_on.failure and status != "passed"
