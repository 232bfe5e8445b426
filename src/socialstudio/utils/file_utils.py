# -*- coding: utf-8 -*-
"""File helpers for settings, secrets and export targets."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def ensure_dir(path: str | Path) -> Path:
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def read_json_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON object; anything else raises ValueError."""
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object in {file_path}")
    return data


def write_json_file(path: str | Path, data: dict[str, Any], mode: int | None = None) -> Path:
    """Replace ``path`` atomically with indented JSON.

    A reader never sees a half-written file. ``mode`` is applied before the
    rename, so the final file never exists with wider permissions.
    """
    file_path = Path(path)
    ensure_dir(file_path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=True)
            handle.write("\n")
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, file_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return file_path


def remove_if_exists(path: str | Path) -> bool:
    """Delete a file if present. Returns True when something was removed."""
    file_path = Path(path)
    if not file_path.exists():
        return False
    file_path.unlink()
    return True
