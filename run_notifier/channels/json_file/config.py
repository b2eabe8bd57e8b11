"""Configuration for the JSON summary file channel."""

from pathlib import Path
from typing import Literal

from run_notifier.models.config import NotificationConfig, NotifyOn

DEFAULT_OUTPUT_DIR = Path("test-results")
DEFAULT_FILENAME = "test-summary.json"


class JsonFileConfig(NotificationConfig):
    """Configuration for the persisted JSON summary.

    The report is written for every run unless a policy says otherwise.
    """

    type: Literal["json-file"] = "json-file"
    notify_on: NotifyOn = NotifyOn(always=True)
    output_dir: Path = DEFAULT_OUTPUT_DIR
    filename: str = DEFAULT_FILENAME

    @property
    def output_path(self) -> Path:
        """Path of the report file."""
        return self.output_dir / self.filename
