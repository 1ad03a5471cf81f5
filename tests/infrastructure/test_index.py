"""Tests for PostIndex: lazy build, caching and aggregates."""

from __future__ import annotations

from datetime import datetime

import pytest

from blogctl.domain.templates import UrlTemplates
from blogctl.infrastructure.index import PostIndex
from blogctl.infrastructure.parser import PostParser
from tests.conftest import MemoryFilesystem

ARCHIVES = {"all": "/archive", "tag": "/tag/{tag}"}


def _index(fs: MemoryFilesystem) -> PostIndex:
    templates = UrlTemplates.build("/{year}/{month}/{date}/{title}", ARCHIVES)
    return PostIndex("posts", PostParser(templates, fs), fs)


@pytest.fixture
def fs() -> MemoryFilesystem:
    fs = MemoryFilesystem()
    fs.add_post(
        "posts",
        "2012-11-19-first.markdown",
        "tags: [Python, life]\npublished: true",
        mtime=datetime(2012, 11, 19),
    )
    fs.add_post(
        "posts",
        "2012-11-20-second.markdown",
        "tags: [Python]\npublished: false",
        mtime=datetime(2012, 11, 21),
    )
    fs.add_post("posts", "2012-11-20-third.markdown", "tags: code\npublished: true")
    fs.add_post("posts", "about.markdown", "title: About")
    fs.add_post("posts", ".2012-11-22-hidden.markdown", "published: true")
    fs.add_post(
        "posts",
        "2012-12-01-broken.markdown",
        "tags: [broken\npublished: true",
        mtime=datetime(2012, 12, 1),
    )
    return fs


class TestBuild:
    def test_lazy(self, fs: MemoryFilesystem) -> None:
        index = _index(fs)
        assert not index.is_built
        assert fs.calls["list_dir"] == 0

    def test_indexes_conforming_posts(self, fs: MemoryFilesystem) -> None:
        posts, _ = _index(fs).get_all()
        assert sorted(p.permalink for p in posts.values()) == [
            "/2012/11/19/first",
            "/2012/11/20/second",
            "/2012/11/20/third",
        ]

    def test_skips_dotfiles(self, fs: MemoryFilesystem) -> None:
        posts, _ = _index(fs).get_all()
        assert not any("hidden" in path for path in posts)

    def test_cached_after_first_build(self, fs: MemoryFilesystem) -> None:
        index = _index(fs)
        index.get_all()
        calls = dict(fs.calls)
        index.get_all()
        index.tag_counts()
        index.post_dates()
        assert dict(fs.calls) == calls
        assert fs.calls["list_dir"] == 1

    def test_last_modified_is_newest_mtime(self, fs: MemoryFilesystem) -> None:
        _posts, last_modified = _index(fs).get_all()
        assert last_modified == datetime(2012, 11, 21)

    def test_views_are_read_only(self, fs: MemoryFilesystem) -> None:
        posts, _ = _index(fs).get_all()
        with pytest.raises(TypeError):
            posts["x"] = None  # type: ignore[index]


class TestAggregates:
    def test_tag_counts_include_drafts(self, fs: MemoryFilesystem) -> None:
        assert dict(_index(fs).tag_counts()) == {"Python": 2, "life": 1, "code": 1}

    def test_post_dates(self, fs: MemoryFilesystem) -> None:
        assert dict(_index(fs).post_dates()) == {"2012": {"11": ["19", "20"]}}

    def test_malformed_header_excluded(self, fs: MemoryFilesystem) -> None:
        index = _index(fs)
        posts, last_modified = index.get_all()
        assert "posts/2012-12-01-broken.markdown" not in posts
        assert "broken" not in index.tag_counts()
        assert "12" not in index.post_dates()["2012"]
        assert last_modified == datetime(2012, 11, 21)


class TestFailures:
    def test_list_dir_error_propagates(self) -> None:
        fs = MemoryFilesystem()
        fs.missing_dirs.add("posts")
        index = _index(fs)
        with pytest.raises(OSError):
            index.get_all()
        assert not index.is_built

    def test_undecodable_file_skipped(self, fs: MemoryFilesystem, caplog: pytest.LogCaptureFixture) -> None:
        fs.add("posts/2012-11-21-binary.markdown", b"\xff\xfe\x00garbage")
        with caplog.at_level("WARNING", logger="blogctl"):
            posts, _ = _index(fs).get_all()
        assert len(posts) == 3
        assert "binary" in caplog.text

    def test_impossible_timestamp_does_not_abort_build(self) -> None:
        fs = MemoryFilesystem()
        fs.add_post("posts", "2012-11-19-good.markdown", "title: good\npublished: true")
        fs.add_post(
            "posts",
            "2012-11-20-bad.markdown",
            "title: x\nupdated: 2012-13-45\npublished: true",
        )
        posts, _ = _index(fs).get_all()
        assert [p.permalink for p in posts.values()] == ["/2012/11/19/good"]


class TestLoadPost:
    def test_caches_entry_without_aggregates(self, fs: MemoryFilesystem) -> None:
        index = _index(fs)
        post = index.load_post("posts/2012-11-19-first.markdown")
        assert post.permalink == "/2012/11/19/first"
        assert not index.is_built

    def test_full_build_still_runs_after_load(self, fs: MemoryFilesystem) -> None:
        index = _index(fs)
        index.load_post("posts/2012-11-19-first.markdown")
        posts, _ = index.get_all()
        assert len(posts) == 3
        assert index.tag_counts()["Python"] == 2
