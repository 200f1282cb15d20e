"""File I/O operations for publishing."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..core.errors import PublishIOError, RenderingError


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def read_source_text(path: Path) -> str:
    """Read a markdown source as UTF-8 text.

    Args:
        path: Source file path

    Returns:
        Decoded file contents
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PublishIOError(f"Cannot read source: {exc.strerror or exc}", path) from exc

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RenderingError(
            f"Not valid UTF-8 text at byte {exc.start}", path
        ) from exc


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    try:
        ensure_parent(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as exc:
        raise PublishIOError(f"Cannot write output: {exc.strerror or exc}", path) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
        os.chmod(path, mode)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise PublishIOError(f"Cannot write output: {exc.strerror or exc}", path) from exc
