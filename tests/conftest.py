"""Shared pytest fixtures and test helpers for blogctl tests."""

from __future__ import annotations

import os
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from blogctl.domain.posts import Post
from blogctl.infrastructure.filesystem import FileStat, join_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary site directory with an empty ``posts/`` folder.

    The CWD is moved there and blogctl env vars are cleared so settings
    resolve against this directory only.
    """
    (tmp_path / "posts").mkdir()
    monkeypatch.chdir(tmp_path)
    for var in ("BLOGCTL_CONFIG", "BLOGCTL_SITE_ROOT", "BLOGCTL_BLOG__POSTS_DIR"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def posts_dir(site_root: Path) -> Path:
    return site_root / "posts"


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def render_post(header: str | None, body: str = "Body text.") -> str:
    """Post file text with an optional front matter block."""
    if header is None:
        return body
    return f"---\n{header}\n---\n{body}\n"


def write_post(directory: Path, name: str, header: str | None, body: str = "Body text.") -> Path:
    """Write a post file into *directory* and return its path."""
    path = directory / name
    path.write_text(render_post(header, body), encoding="utf-8")
    return path


def make_post(
    name: str,
    published_date: datetime,
    *,
    tags: list[str] | None = None,
    published: bool = True,
) -> Post:
    """An indexed post built directly, bypassing the parser."""
    return Post(
        file_path=f"posts/{name}.markdown",
        fields={"title": name, "tags": tags or [], "published": published},
        published_date=published_date,
        permalink=f"/{name}",
        last_modified=published_date,
    )


class MemoryFilesystem:
    """In-memory Filesystem that counts every call.

    Paths are built with :func:`join_path` so they match what the index
    and router compute.
    """

    def __init__(
        self,
        files: dict[str, str | bytes] | None = None,
        *,
        mtime: datetime = datetime(2012, 11, 20, 10, 0),
        ctime: datetime = datetime(2012, 11, 19, 9, 0),
    ) -> None:
        self.files: dict[str, bytes] = {}
        self.mtimes: dict[str, datetime] = {}
        self.calls: Counter[str] = Counter()
        self.missing_dirs: set[str] = set()
        self._mtime = mtime
        self._ctime = ctime
        for path, data in (files or {}).items():
            self.add(path, data)

    def add(self, path: str, data: str | bytes, *, mtime: datetime | None = None) -> None:
        self.files[path] = data.encode("utf-8") if isinstance(data, str) else data
        if mtime is not None:
            self.mtimes[path] = mtime

    def add_post(self, directory: str, name: str, header: str | None, **kwargs: Any) -> str:
        path = join_path(directory, name)
        self.add(path, render_post(header), **kwargs)
        return path

    def stat(self, path: str) -> FileStat:
        self.calls["stat"] += 1
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        return FileStat(mtime=self.mtimes.get(path, self._mtime), ctime=self._ctime)

    def read_file(self, path: str) -> bytes:
        self.calls["read_file"] += 1
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        return self.files[path]

    def list_dir(self, path: str) -> list[str]:
        self.calls["list_dir"] += 1
        if path in self.missing_dirs:
            raise FileNotFoundError(2, "No such file or directory", path)
        prefix = str(Path(path)) + os.sep
        return sorted(p[len(prefix) :] for p in self.files if p.startswith(prefix))


class UpperTransform:
    """Body transform that upper-cases the body."""

    def parse(self, raw_body: str) -> str:
        return raw_body.upper()
