"""Tests for PathEnumerator ordering and de-duplication."""

from __future__ import annotations

from datetime import datetime

from blogctl.domain.templates import UrlTemplates
from blogctl.infrastructure.generic import NullContentHandler
from blogctl.infrastructure.index import PostIndex
from blogctl.infrastructure.parser import PostParser
from blogctl.services.paths import PathEnumerator
from tests.conftest import MemoryFilesystem
from tests.services.test_router import ARCHIVES, FakeGeneric


def _enumerator(
    fs: MemoryFilesystem,
    archives: dict[str, str] | None = None,
    generic: FakeGeneric | NullContentHandler | None = None,
) -> PathEnumerator:
    templates = UrlTemplates.build("/{year}/{month}/{date}/{title}", archives or ARCHIVES)
    index = PostIndex("posts", PostParser(templates, fs), fs)
    return PathEnumerator(templates, index, generic or NullContentHandler())


def _fs() -> MemoryFilesystem:
    fs = MemoryFilesystem(mtime=datetime(2012, 11, 20))
    fs.add_post("posts", "2012-11-19-first.markdown", "tags: [Python]\npublished: true")
    fs.add_post("posts", "2012-11-20-second.markdown", "tags: [python, Life]\npublished: true")
    return fs


class TestAllPaths:
    def test_order(self) -> None:
        paths = _enumerator(_fs()).all_paths()
        assert paths == [
            "/2012/11/19/first",
            "/2012/11/20/second",
            "/archive",
            "/2012/11/19",
            "/2012/11",
            "/2012",
            "/2012/11/20",
            "/tag/python",
            "/tag/life",
        ]

    def test_no_duplicates(self) -> None:
        paths = _enumerator(_fs()).all_paths()
        assert len(paths) == len(set(paths))

    def test_generic_paths_come_first(self) -> None:
        paths = _enumerator(_fs(), generic=FakeGeneric()).get_content_paths("/")
        assert paths[0] == "/about"

    def test_custom_tag_template(self) -> None:
        archives = {**ARCHIVES, "tag": "/tagged/{tag}"}
        paths = _enumerator(_fs(), archives).all_paths()
        assert "/tagged/python" in paths
        assert "/tag/python" not in paths

    def test_missing_archive_templates_skipped(self) -> None:
        paths = _enumerator(_fs(), {"year": "/{year}"}).all_paths()
        assert paths == ["/2012/11/19/first", "/2012/11/20/second", "/2012"]

    def test_drafts_contribute_paths(self) -> None:
        fs = _fs()
        fs.add_post("posts", "2013-01-05-draft.markdown", "published: false")
        paths = _enumerator(fs).all_paths()
        assert "/2013/01/05/draft" in paths
        assert "/2013" in paths


class TestNonRootBase:
    def test_only_generic_paths(self) -> None:
        fs = _fs()
        paths = _enumerator(fs, generic=FakeGeneric()).get_content_paths("/docs")
        assert paths == ["/about"]
        assert fs.calls["list_dir"] == 0
