"""PostIndex: the lazily built, process-lifetime cache of all posts.

INVARIANT: Built once, never refreshed. The first :meth:`PostIndex.get_all`
scans the posts directory; every later call reuses the result. A new
PostIndex is the only way to pick up changes on disk.

The tag counts and the year -> month -> days tree are derived during the
same scan from every indexed post, drafts included, and are published
together once the scan finishes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING

from blogctl.infrastructure.filesystem import join_path

if TYPE_CHECKING:
    from blogctl.domain.posts import Post
    from blogctl.infrastructure.filesystem import Filesystem
    from blogctl.infrastructure.parser import PostParser

logger = logging.getLogger(__name__)

PostDates = dict[str, dict[str, list[str]]]


class PostIndex:
    """Owns the post cache and its two derived aggregates.

    Callers get read-only views; only the index itself (and the parser,
    through the ``record`` callback) writes.
    """

    def __init__(self, posts_dir: str, parser: PostParser, filesystem: Filesystem) -> None:
        self._posts_dir = posts_dir
        self._parser = parser
        self._fs = filesystem
        self._posts: dict[str, Post] = {}
        self._tag_counts: dict[str, int] = {}
        self._post_dates: PostDates = {}
        self._last_modified: datetime | None = None
        self._built = False
        self._build_lock = threading.Lock()

    @property
    def posts_dir(self) -> str:
        return self._posts_dir

    @property
    def is_built(self) -> bool:
        return self._built

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> tuple[Mapping[str, Post], datetime | None]:
        """Return ``(posts_by_path, last_modified)``, building on first use.

        Raises:
            OSError: If the posts directory cannot be listed.
        """
        if not self._built:
            self._build()
        return MappingProxyType(self._posts), self._last_modified

    def tag_counts(self) -> Mapping[str, int]:
        """Tag (case as written) -> number of posts carrying it."""
        if not self._built:
            self._build()
        return MappingProxyType(self._tag_counts)

    def post_dates(self) -> Mapping[str, Mapping[str, list[str]]]:
        """Year -> month -> zero-padded days that have at least one post."""
        if not self._built:
            self._build()
        return MappingProxyType(self._post_dates)

    def load_post(self, file_path: str, *, transform_body: bool = True) -> Post:
        """Parse a single post, caching its header-level entry.

        Does not touch the aggregates; those belong to the full build.

        Raises:
            OSError: If the file cannot be stat-ed or read.
        """
        return self._parser.parse(file_path, transform_body=transform_body, record=self._record)

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def _record(self, post: Post) -> None:
        self._posts[post.file_path] = post

    def _build(self) -> None:
        with self._build_lock:
            if self._built:
                return

            entries = self._fs.list_dir(self._posts_dir)
            tag_counts: dict[str, int] = {}
            post_dates: PostDates = {}
            last_modified: datetime | None = None
            skipped = 0

            for entry in entries:
                if entry.startswith("."):
                    continue
                file_path = join_path(self._posts_dir, entry)
                try:
                    post = self._parser.parse(file_path, record=self._record)
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Skipping unreadable post %s: %s", file_path, exc)
                    skipped += 1
                    continue
                if not post.is_indexed:
                    skipped += 1
                    continue

                if post.last_modified is not None and (
                    last_modified is None or post.last_modified > last_modified
                ):
                    last_modified = post.last_modified

                for tag in post.tags:
                    tag_counts[tag] = tag_counts.get(tag, 0) + 1

                if post.published_date is not None:
                    _add_post_date(post_dates, post.published_date)

            self._tag_counts = tag_counts
            self._post_dates = post_dates
            self._last_modified = last_modified
            self._built = True
            logger.debug(
                "Indexed %d posts from %s (%d skipped)",
                len(self._posts),
                self._posts_dir,
                skipped,
            )


def _add_post_date(post_dates: PostDates, published: datetime) -> None:
    """Insert *published* into the year -> month -> days tree."""
    year = str(published.year)
    month = f"{published.month:02d}"
    day = f"{published.day:02d}"
    days = post_dates.setdefault(year, {}).setdefault(month, [])
    if day not in days:
        days.append(day)
