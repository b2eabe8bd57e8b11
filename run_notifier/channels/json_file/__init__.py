"""JSON summary file channel module."""

from run_notifier.channels.json_file.channel import (
    JsonFileChannel,
    read_report,
    write_report,
)
from run_notifier.channels.json_file.config import JsonFileConfig
from run_notifier.channels.json_file.manifest import json_file_manifest

__all__ = [
    "JsonFileChannel",
    "JsonFileConfig",
    "json_file_manifest",
    "read_report",
    "write_report",
]
