"""Path enumerator: every output path the site has.

Order: the generic handler's paths, post permalinks, the whole-archive
path, date archives (``year/month/day``, ``year/month``, ``year`` per
day, each emitted once), then tag archives with lower-cased tags.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blogctl.domain.templates import UrlTemplates
    from blogctl.infrastructure.generic import ContentHandler
    from blogctl.infrastructure.index import PostIndex

ROOT_PATHS = frozenset({"/", os.sep})


class PathEnumerator:
    """Enumerates canonical output paths from the post index."""

    def __init__(self, templates: UrlTemplates, index: PostIndex, generic: ContentHandler) -> None:
        self._templates = templates
        self._index = index
        self._generic = generic

    def all_paths(self) -> list[str]:
        return self.get_content_paths("/")

    def get_content_paths(self, base_path: str) -> list[str]:
        """Paths under *base_path*; blog paths are only added for the site root.

        Raises:
            OSError: If the posts directory cannot be listed.
        """
        paths = list(self._generic.get_content_paths(base_path))
        if base_path not in ROOT_PATHS:
            return paths

        posts, _last_modified = self._index.get_all()
        paths.extend(post.permalink for post in posts.values() if post.permalink)
        paths.extend(self._archive_paths())
        return paths

    def _archive_paths(self) -> list[str]:
        archives = self._templates.archives
        seen: set[str] = set()
        result: list[str] = []

        def emit(path: str) -> None:
            if path not in seen:
                seen.add(path)
                result.append(path)

        whole = archives.get("all")
        if whole is not None and not whole.placeholders:
            emit(whole.expand([]))

        by_day = archives.get("year_month_date")
        by_month = archives.get("year_month")
        by_year = archives.get("year")
        for year, months in self._index.post_dates().items():
            for month, days in months.items():
                values = {"year": year, "month": month}
                for day in days:
                    values["date"] = day
                    if by_day is not None:
                        emit(by_day.expand_named(values))
                    if by_month is not None:
                        emit(by_month.expand_named(values))
                    if by_year is not None:
                        emit(by_year.expand_named(values))

        by_tag = archives.get("tag")
        if by_tag is not None:
            for tag in self._index.tag_counts():
                emit(by_tag.expand_named({"tag": tag.lower()}))

        return result
