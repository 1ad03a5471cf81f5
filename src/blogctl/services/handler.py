"""BlogContentHandler: the blog engine behind a content-handler interface.

Wires the compiled URL templates, post parser, post index, router and
path enumerator together. It satisfies the same
:class:`~blogctl.infrastructure.generic.ContentHandler` protocol as the
generic handler it wraps, so a host can drop it in place.

Usage::

    handler = BlogContentHandler(BlogConfig(posts_dir="articles"), root=site_root)
    handler.negotiate_content("/2012/11/20/hello-world/index")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from blogctl.config.models import BlogConfig
from blogctl.domain.templates import UrlTemplates
from blogctl.infrastructure.filesystem import LocalFilesystem
from blogctl.infrastructure.generic import NullContentHandler
from blogctl.infrastructure.index import PostIndex
from blogctl.infrastructure.parser import PostParser
from blogctl.services.paths import PathEnumerator
from blogctl.services.router import Router

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.domain.posts import ArchiveView, NegotiatedContent, Post
    from blogctl.infrastructure.filesystem import Filesystem
    from blogctl.infrastructure.generic import ContentHandler
    from blogctl.infrastructure.parser import BodyTransform

logger = logging.getLogger(__name__)


class BlogContentHandler:
    """Routes, indexes and enumerates blog posts; delegates everything else.

    Args:
        config: The ``[blog]`` section.
        root: Site root; a relative ``posts_dir`` is resolved against it.
        generic: Handler for non-blog paths (default: nothing).
        transforms: Body transform registry keyed by extension.
        filesystem: File access (default: local disk).

    Raises:
        ConfigurationError: If a URL template uses an unknown placeholder.
    """

    def __init__(
        self,
        config: BlogConfig | None = None,
        *,
        root: Path | None = None,
        generic: ContentHandler | None = None,
        transforms: Mapping[str, BodyTransform] | None = None,
        filesystem: Filesystem | None = None,
    ) -> None:
        self.config = config or BlogConfig()
        self._generic: ContentHandler = generic or NullContentHandler()
        fs: Filesystem = filesystem or LocalFilesystem()

        posts_dir = self.config.posts_dir
        if root is not None:
            posts_dir = str(root / posts_dir)

        self.templates = UrlTemplates.build(
            self.config.post_url, self.config.archive_urls.model_dump()
        )
        logger.debug(
            "Post URL %s -> %s (file names %s)",
            self.config.post_url,
            self.templates.post.pattern,
            self.templates.file_name_pattern,
        )

        parser = PostParser(self.templates, fs, transforms, post_format=self.config.post_format)
        self.index = PostIndex(posts_dir, parser, fs)
        self._router = Router(
            self.templates, self.index, self._generic, post_format=self.config.post_format
        )
        self._paths = PathEnumerator(self.templates, self.index, self._generic)

    @classmethod
    def from_settings(
        cls,
        settings: BlogSettings,
        *,
        generic: ContentHandler | None = None,
        transforms: Mapping[str, BodyTransform] | None = None,
        filesystem: Filesystem | None = None,
    ) -> BlogContentHandler:
        """Build a handler from resolved CLI/TOML/env settings."""
        return cls(
            settings.blog,
            root=settings.site_root,
            generic=generic,
            transforms=transforms,
            filesystem=filesystem,
        )

    # --- ContentHandler protocol ---

    def is_section(self, path: str) -> bool:
        return self._router.is_section(path)

    def get_sections(self) -> list[str]:
        return self._router.get_sections()

    def get_content_paths(self, base_path: str) -> list[str]:
        return self._paths.get_content_paths(base_path)

    def get_shared_content(self) -> tuple[dict[str, Any], datetime | None]:
        return self._generic.get_shared_content()

    def negotiate_content(
        self,
        path: str,
        content_type: str = ".html",
        options: dict[str, Any] | None = None,
    ) -> NegotiatedContent:
        return self._router.negotiate_content(path, content_type, options)

    # --- Blog queries ---

    def all_paths(self) -> list[str]:
        return self._paths.all_paths()

    def get_post(self, path: str) -> tuple[Post, datetime | None]:
        return self._router.get_post(path)

    def get_posts(self, path: str) -> tuple[ArchiveView, datetime | None]:
        return self._router.get_posts(path)

    def get_all_posts(self) -> tuple[Mapping[str, Post], datetime | None]:
        return self.index.get_all()
