"""Filesystem helpers for config files that are edited in place."""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path

__all__ = ["backup_file", "restore_backup", "write_json_atomic"]


def write_json_atomic(path: Path, data: Mapping[str, object]) -> None:
    """Write data as indented JSON through a temp file in the same directory.

    The parent directory must exist. Readers see either the old file or the
    new one, never a partial write.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            json.dump(data, handle, indent=2)
            handle.write("\n")
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def backup_file(path: Path, suffix: str) -> Path:
    """Copy path to a sibling with suffix appended; returns the copy."""
    backup = path.with_name(path.name + suffix)
    shutil.copy2(path, backup)
    return backup


def restore_backup(backup: Path, path: Path) -> None:
    """Move a backup made by backup_file over the original."""
    os.replace(backup, path)
