"""Tests for BlogContentHandler wiring."""

from __future__ import annotations

from pathlib import Path

import pytest

from blogctl.config.models import ArchiveUrlsConfig, BlogConfig
from blogctl.config.settings import BlogSettings
from blogctl.domain.errors import ConfigurationError, NotFoundError
from blogctl.services.handler import BlogContentHandler
from tests.conftest import UpperTransform, write_post

HEADER = "title: Hello\ntags: [code]\npublished: true"


class TestConstruction:
    def test_unknown_placeholder_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            BlogContentHandler(BlogConfig(post_url="/{year}/{slug}"))

    def test_posts_dir_resolved_against_root(self, tmp_path: Path) -> None:
        handler = BlogContentHandler(BlogConfig(posts_dir="articles"), root=tmp_path)
        assert handler.index.posts_dir == str(tmp_path / "articles")

    def test_from_settings(self, site_root: Path) -> None:
        settings = BlogSettings.from_cli(site_root=site_root)
        handler = BlogContentHandler.from_settings(settings)
        assert handler.index.posts_dir == str(site_root / "posts")
        assert handler.templates.post.source == "/{year}/{month}/{date}/{title}"


class TestEndToEnd:
    def test_resolve_post_with_transform(self, site_root: Path, posts_dir: Path) -> None:
        write_post(posts_dir, "2012-11-20-hello-world.markdown", HEADER, "hi")
        handler = BlogContentHandler(root=site_root, transforms={".markdown": UpperTransform()})
        result = handler.negotiate_content("/2012/11/20/hello-world/index")
        assert result.contents["content"] == "HI"
        post, last_modified = handler.get_post("/2012/11/20/hello-world/index")
        assert post.permalink == "/2012/11/20/hello-world"
        assert last_modified == post.last_modified

    def test_all_paths(self, site_root: Path, posts_dir: Path) -> None:
        write_post(posts_dir, "2012-11-20-hello-world.markdown", HEADER)
        handler = BlogContentHandler(root=site_root)
        assert handler.all_paths() == [
            "/2012/11/20/hello-world",
            "/archive",
            "/2012/11/20",
            "/2012/11",
            "/2012",
            "/tag/code",
        ]

    def test_custom_archive_urls(self, site_root: Path, posts_dir: Path) -> None:
        write_post(posts_dir, "2012-11-20-hello-world.markdown", HEADER)
        config = BlogConfig(archive_urls=ArchiveUrlsConfig(tag="/topics/{tag}"))
        handler = BlogContentHandler(config, root=site_root)
        view, _ = handler.get_posts("/topics/code/index")
        assert view.section == "code"

    def test_unknown_path_not_found(self, site_root: Path) -> None:
        with pytest.raises(NotFoundError):
            BlogContentHandler(root=site_root).negotiate_content("/about")

    def test_get_all_posts(self, site_root: Path, posts_dir: Path) -> None:
        write_post(posts_dir, "2012-11-20-hello-world.markdown", HEADER)
        posts, last_modified = BlogContentHandler(root=site_root).get_all_posts()
        assert len(posts) == 1
        assert last_modified is not None

    def test_missing_posts_dir_raises(self, tmp_path: Path) -> None:
        handler = BlogContentHandler(root=tmp_path)
        with pytest.raises(OSError):
            handler.all_paths()
