"""Storage provider for note files.

The daily note engine talks to storage only through the ``NoteStorage``
protocol so tests can substitute an in-memory store. ``LocalStorage`` is the
filesystem implementation used by the CLI.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

from daynotes.core.paths import ensure_directory
from daynotes.core.result import StorageError


class NoteStorage(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read(self, path: Path) -> str: ...

    def write(self, path: Path, content: str) -> None: ...

    def mkdir_all(self, path: Path) -> None: ...


class LocalStorage:
    """Plain-text notes on the local filesystem."""

    encoding = "utf-8"

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except OSError as exc:
            raise StorageError(
                "Failed to read note", context={"path": str(path), "error": str(exc)}
            ) from exc

    def write(self, path: Path, content: str) -> None:
        """Write ``content`` atomically: the note is either complete or absent."""
        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
        except OSError as exc:
            raise StorageError(
                "Failed to write note", context={"path": str(path), "error": str(exc)}
            ) from exc

        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding) as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(temp_path, path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise StorageError(
                "Failed to write note", context={"path": str(path), "error": str(exc)}
            ) from exc

    def mkdir_all(self, path: Path) -> None:
        ensure_directory(path)


__all__ = ["LocalStorage", "NoteStorage"]
