"""Router: classify a request path and produce its content.

Request paths for blog pages end with ``/index`` (every post and archive
is a directory index, giving pretty URLs). Classification order:

1. an archive template + ``/index`` -> archive view;
2. the post template + ``/index`` -> single post;
3. anything else -> the generic content handler, untouched.

Archive templates are tried first so a catch-all post template such as
``/{title}`` cannot shadow ``/archive``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from blogctl.domain.errors import NotFoundError
from blogctl.domain.posts import ArchiveView, NegotiatedContent, Post, filter_archive
from blogctl.domain.templates import FILE_NAME_SEPARATOR, INDEX_MARKER
from blogctl.infrastructure.filesystem import join_path

if TYPE_CHECKING:
    from blogctl.domain.templates import UrlTemplates
    from blogctl.infrastructure.generic import ContentHandler
    from blogctl.infrastructure.index import PostIndex

logger = logging.getLogger(__name__)

ARCHIVE_TITLE = "Archive"


class Router:
    """Content negotiation for posts and archives."""

    def __init__(
        self,
        templates: UrlTemplates,
        index: PostIndex,
        generic: ContentHandler,
        *,
        post_format: str = "markdown",
    ) -> None:
        self._templates = templates
        self._index = index
        self._generic = generic
        self._post_format = post_format

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def is_section(self, path: str) -> bool:
        """Whether *path* should be rendered as a directory index.

        ``/index`` is already an index and never a section.
        """
        if path == INDEX_MARKER:
            return False
        if self._templates.post.match(path) is not None:
            return True
        if self._templates.match_archive(path) is not None:
            return True
        return self._generic.is_section(path)

    def get_sections(self) -> list[str]:
        return self._generic.get_sections()

    # ------------------------------------------------------------------
    # Negotiation
    # ------------------------------------------------------------------

    def negotiate_content(
        self,
        path: str,
        content_type: str = ".html",
        options: dict[str, Any] | None = None,
    ) -> NegotiatedContent:
        """Resolve *path* to a post, an archive view, or the generic handler's content.

        Raises:
            NotFoundError: If a post path has no readable post file, or
                the generic handler has nothing for *path*.
            OSError: If the posts directory cannot be listed.
        """
        options = options if options is not None else {}

        if self._templates.match_archive(path, INDEX_MARKER) is not None:
            view, last_modified = self.get_posts(path)
            contents: dict[str, Any] = view.to_dict()
            contents["is_post"] = False
            contents["title"] = ARCHIVE_TITLE
            logger.debug("Archive %s: %d posts", path, len(view.posts))
            return self._with_shared_content(contents, last_modified)

        if self._templates.post.match(path, INDEX_MARKER) is not None:
            post, last_modified = self.get_post(path)
            contents = post.to_dict()
            contents["is_post"] = True
            return self._with_shared_content(contents, last_modified)

        return self._generic.negotiate_content(path, content_type, options)

    def get_post(self, path: str) -> tuple[Post, datetime | None]:
        """Load the post behind a ``<post template>/index`` path, body transformed.

        Raises:
            NotFoundError: If *path* is not a post path or its file cannot be read.
        """
        slugs = self._templates.post.match(path, INDEX_MARKER)
        if slugs is None:
            raise NotFoundError(path)

        file_name = f"{FILE_NAME_SEPARATOR.join(slugs)}.{self._post_format}"
        file_path = join_path(self._index.posts_dir, file_name)
        try:
            post = self._index.load_post(file_path, transform_body=True)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("No post file for %s at %s: %s", path, file_path, exc)
            raise NotFoundError(path) from exc
        return post, post.last_modified

    def get_posts(self, path: str) -> tuple[ArchiveView, datetime | None]:
        """Build the archive view behind an ``<archive template>/index`` path.

        Raises:
            NotFoundError: If *path* is not an archive path.
            OSError: If the posts directory cannot be listed.
        """
        matched = self._templates.match_archive(path, INDEX_MARKER)
        if matched is None:
            raise NotFoundError(path)
        _key, values = matched

        posts, last_modified = self._index.get_all()
        return filter_archive(posts.values(), values), last_modified

    def _with_shared_content(
        self,
        contents: dict[str, Any],
        last_modified: datetime | None,
    ) -> NegotiatedContent:
        """Mix in site-wide shared content; its mtime wins only if newer."""
        try:
            shared, shared_modified = self._generic.get_shared_content()
        except OSError:
            logger.warning("Shared content unavailable", exc_info=True)
            return NegotiatedContent(contents=contents, last_modified=last_modified)

        contents.update(shared)
        if shared_modified is not None and (
            last_modified is None or shared_modified > last_modified
        ):
            last_modified = shared_modified
        return NegotiatedContent(contents=contents, last_modified=last_modified)
