"""The project-name marker in the frontend's vercel.json.

The deploy needs `"name": "<project>"` in vercel.json, but the file is
checked in, so it is only changed for the duration of the deploy:
write_project_marker saves the prior state and MarkerBackup.restore puts it
back.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from ship.core.result import Err, Ok, Result
from ship.core.structured import StrDict, as_str_dict
from ship.platform.files import backup_file, restore_backup, write_json_atomic
from ship.services.deploy.errors import DeployError

MARKER_FILE = "vercel.json"
BACKUP_SUFFIX = ".bak"


@dataclass(frozen=True, slots=True)
class MarkerBackup:
    path: Path
    backup: Path | None  # None: the file did not exist before

    def restore(self) -> None:
        if self.backup is None:
            self.path.unlink(missing_ok=True)
            return
        restore_backup(self.backup, self.path)


def _parse_marker(content: str) -> StrDict | None:
    if not content.strip():
        return {}
    try:
        return as_str_dict(json.loads(content))
    except json.JSONDecodeError:
        return None


def write_project_marker(directory: Path, project_name: str) -> Result[MarkerBackup, DeployError]:
    """Create or update vercel.json with the project name.

    Returns:
        Ok(MarkerBackup) to restore later; Err if the file cannot be read,
        parsed, or written. On Err nothing has changed on disk.
    """
    path = directory / MARKER_FILE
    if not path.exists():
        try:
            write_json_atomic(path, {"name": project_name})
        except OSError as e:
            return Err(DeployError(kind="io_error", message=f"cannot write {path}: {e}"))
        return Ok(MarkerBackup(path=path, backup=None))

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(DeployError(kind="io_error", message=f"cannot read {path}: {e}"))

    data = _parse_marker(content)
    if data is None:
        return Err(
            DeployError(
                kind="config_error",
                message=f"{path} is not a JSON object",
                hint="Fix vercel.json or remove it; it is recreated as needed.",
            )
        )
    # "name" goes first, as in a freshly created file.
    updated = {"name": project_name, **{k: v for k, v in data.items() if k != "name"}}

    backup: Path | None = None
    try:
        backup = backup_file(path, BACKUP_SUFFIX)
        write_json_atomic(path, updated)
    except OSError as e:
        if backup is not None:
            restore_backup(backup, path)
        return Err(DeployError(kind="io_error", message=f"cannot update {path}: {e}"))
    return Ok(MarkerBackup(path=path, backup=backup))
