"""Filesystem access for post files.

The parser and index never touch ``os`` or ``pathlib`` directly; they go
through a :class:`Filesystem` so tests and hosts can substitute their own
(in-memory, remote, counting...). :class:`LocalFilesystem` is the
default. All errors surface as :class:`OSError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class FileStat:
    """The two timestamps the parser needs."""

    mtime: datetime
    ctime: datetime


class Filesystem(Protocol):
    """Read-only file access used by the post parser and index."""

    def stat(self, path: str) -> FileStat: ...

    def read_file(self, path: str) -> bytes: ...

    def list_dir(self, path: str) -> list[str]: ...


class LocalFilesystem:
    """:class:`Filesystem` backed by the local disk."""

    def stat(self, path: str) -> FileStat:
        st = Path(path).stat()
        return FileStat(
            mtime=datetime.fromtimestamp(st.st_mtime),
            ctime=datetime.fromtimestamp(st.st_ctime),
        )

    def read_file(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def list_dir(self, path: str) -> list[str]:
        """Entry names in *path*, sorted by name."""
        return sorted(entry.name for entry in Path(path).iterdir())


def join_path(directory: str, name: str) -> str:
    """Join a posts directory and an entry name the way the host OS does."""
    return str(Path(directory) / name)
