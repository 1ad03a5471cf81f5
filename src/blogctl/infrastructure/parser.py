"""Post parser: one file on disk -> one :class:`Post`.

The file name carries the post's slugs (see
:mod:`blogctl.domain.templates`); the front matter carries everything
else. Only I/O errors escape :meth:`PostParser.parse`; a header that
does not decode, or a file name that does not follow the naming
convention, yields an opaque post holding just the trimmed text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Protocol

from blogctl.domain.content import decode_header, split_front_matter
from blogctl.domain.errors import HeaderDecodeError
from blogctl.domain.posts import DATE_FILTER_KEYS, Post
from blogctl.domain.templates import UrlTemplates
from blogctl.infrastructure.filesystem import FileStat, Filesystem

logger = logging.getLogger(__name__)


class BodyTransform(Protocol):
    """Converts a raw post body (e.g. markdown) into its output form."""

    def parse(self, raw_body: str) -> str: ...


class PostParser:
    """Reads post files and derives their date, permalink and content.

    Args:
        templates: Compiled URL templates; the post template and its
            file-name pattern drive slug extraction.
        filesystem: Where files are read from.
        transforms: Body transform registry keyed by extension
            (``".markdown"``).
        post_format: Configured body format; selects the transform.
    """

    def __init__(
        self,
        templates: UrlTemplates,
        filesystem: Filesystem,
        transforms: Mapping[str, BodyTransform] | None = None,
        *,
        post_format: str = "markdown",
    ) -> None:
        self._templates = templates
        self._fs = filesystem
        self._transforms: Mapping[str, BodyTransform] = transforms or {}
        self._post_format = post_format

    @property
    def extension(self) -> str:
        return f".{self._post_format}"

    def parse(
        self,
        file_path: str,
        *,
        transform_body: bool = False,
        record: Callable[[Post], None] | None = None,
    ) -> Post:
        """Parse *file_path* into a :class:`Post`.

        *record* receives the post (with its raw body) as soon as the
        header and derived fields are known, before any body transform
        runs, so a failing transform cannot lose the header-level entry.

        Raises:
            OSError: If the file cannot be stat-ed or read.
        """
        stat = self._fs.stat(file_path)
        raw = self._fs.read_file(file_path).decode("utf-8")

        split = split_front_matter(raw)
        if split.header is None:
            return Post(file_path=file_path, content=split.text)

        try:
            fields = decode_header(split.header)
        except HeaderDecodeError as exc:
            logger.debug("Treating %s as opaque: %s", file_path, exc)
            return Post(file_path=file_path, content=split.text)

        slugs = self._templates.match_file_name(file_path)
        if slugs is None:
            logger.debug("Treating %s as opaque: file name has no post slugs", file_path)
            return Post(file_path=file_path, content=split.text)

        post = Post(
            file_path=file_path,
            fields=fields,
            published_date=self._published_date(slugs, stat),
            permalink=self._templates.post.expand(slugs),
            last_modified=stat.mtime,
            content=split.body,
        )
        if record is not None:
            record(post)

        if transform_body:
            transform = self._transforms.get(self.extension)
            if transform is not None:
                post = post.model_copy(update={"content": transform.parse(split.body)})
        return post

    def _published_date(self, slugs: Sequence[str], stat: FileStat) -> datetime:
        """Date from the year/month/date slugs, else the file's ctime."""
        mappings = self._templates.post.mappings
        if not all(key in mappings for key in DATE_FILTER_KEYS):
            return stat.ctime

        year, month, day = (int(slugs[mappings[key] - 1]) for key in DATE_FILTER_KEYS)
        try:
            return datetime(year, month, day)
        except ValueError:
            logger.debug("Slugs %s are not a calendar date; using ctime", slugs)
            return stat.ctime
