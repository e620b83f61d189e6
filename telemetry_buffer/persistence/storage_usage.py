"""Disk usage reporting for the signals buffer."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from telemetry_buffer.const import SignalType


def _tree_bytes(directory: Path) -> int:
    total = 0
    for dirpath, _dirnames, filenames in os.walk(directory):
        for filename in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, filename)).st_size
            except FileNotFoundError:
                # Writer renamed or evicted it mid-walk.
                continue
    return total


def signal_folder_usage(signals_dir: Path) -> dict[SignalType, int]:
    """Bytes held by each signal type's buffer folder.

    Folders the writer has not created yet report 0.
    """
    return {
        signal_type: _tree_bytes(signals_dir / signal_type.value)
        for signal_type in SignalType
    }


def get_free_bytes(path: Path) -> int:
    """Free bytes on the filesystem that holds an existing path."""
    return shutil.disk_usage(path).free
