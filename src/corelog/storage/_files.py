"""Atomic text-file helpers shared by the stores."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from corelog.exceptions import PersistenceError


def read_text(path: Path) -> str | None:
    """Return the contents of *path*, or ``None`` if it does not exist.

    Raises:
        PersistenceError: If the file exists but cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceError(f"Cannot read {path}: {exc}") from exc


def write_text_atomic(path: Path, text: str) -> None:
    """Replace *path* with *text* so readers never see a partial file.

    The parent directory is created if needed.

    Raises:
        PersistenceError: If any step of the write fails.
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise PersistenceError(f"Cannot write {path}: {exc}") from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass


def remove_file(path: Path) -> None:
    """Delete *path* if present.

    Raises:
        PersistenceError: If the file exists but cannot be removed.
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        raise PersistenceError(f"Cannot remove {path}: {exc}") from exc
