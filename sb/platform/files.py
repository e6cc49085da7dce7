"""Filesystem helpers for the tool cache and scratch directories."""

from __future__ import annotations

import json
import os
import shutil
import stat
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path

__all__ = ["remove_tree", "write_json_atomic"]


def write_json_atomic(path: Path, data: Mapping[str, object]) -> None:
    """Write ``data`` as JSON; readers see the old file or the new one.

    The cache marker is written this way: a marker that exists is always
    complete and parseable.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        tmp_path = Path(handle.name)
        json.dump(data, handle, indent=2, sort_keys=True)
        handle.write("\n")
    try:
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def _clear_readonly(func: Callable[[str], object], path: str, exc: BaseException) -> None:
    # Windows builds ship some read-only files; retry whichever call failed
    if isinstance(exc, PermissionError):
        os.chmod(path, stat.S_IWRITE)
        func(path)
    else:
        raise exc


def remove_tree(path: Path) -> None:
    """Delete a directory tree if it exists, read-only files included."""
    if not path.exists():
        return
    shutil.rmtree(path, onexc=_clear_readonly)
