"""Post models and archive filtering.

Header fields are an open mapping. The three keys the engine relies on
have explicit accessors with documented defaults:

- ``tags``: ``[]`` when absent; a bare string becomes a one-item list.
- ``published``: ``True`` only for a boolean ``true``; absent or any other value is ``False``.
- ``published_date``: derived by the parser, never read from the header.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Archive filter keys, in application order.
DATE_FILTER_KEYS: tuple[str, ...] = ("year", "month", "date")


class Post(BaseModel):
    """One parsed post file.

    ``fields`` holds header values as YAML decoded them (str, int, float,
    bool, date, datetime, list, dict or None).

    Opaque documents (no header, undecodable header, or a file name that
    does not follow the naming convention) only carry ``file_path`` and
    ``content``.
    """

    model_config = {"frozen": True}

    file_path: str
    fields: dict[str, Any] = Field(default_factory=dict)
    published_date: datetime | None = None
    permalink: str | None = None
    last_modified: datetime | None = None
    content: str = ""

    @property
    def is_indexed(self) -> bool:
        """Whether the header decoded and a permalink was derived."""
        return self.permalink is not None

    @property
    def tags(self) -> list[str]:
        value = self.fields.get("tags")
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(tag) for tag in value]
        return [str(value)]

    @property
    def published(self) -> bool:
        return self.fields.get("published") is True

    def has_tag(self, tag: str) -> bool:
        """Case-insensitive tag membership."""
        wanted = tag.lower()
        return any(t.lower() == wanted for t in self.tags)

    def to_dict(self) -> dict[str, Any]:
        """Flatten header fields and derived fields into one mapping.

        Derived keys win over header keys of the same name.
        """
        if not self.is_indexed:
            return {"content": self.content}
        data: dict[str, Any] = dict(self.fields)
        data["published_date"] = self.published_date
        data["permalink"] = self.permalink
        data["last_modified"] = self.last_modified
        data["content"] = self.content
        return data


class ArchiveView(BaseModel):
    """A filtered, reverse-chronological listing of published posts."""

    model_config = {"frozen": True}

    posts: list[Post] = Field(default_factory=list)
    section: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"posts": [p.to_dict() for p in self.posts], "section": self.section}


class NegotiatedContent(BaseModel):
    """What a content handler hands back for a request path."""

    model_config = {"frozen": True}

    contents: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    last_modified: datetime | None = None


def _sort_key(post: Post) -> datetime:
    return post.published_date or datetime.min


def latest_first(posts: Iterable[Post]) -> list[Post]:
    """Published posts, most recent first.

    Posts sharing a date keep reversed listing order (the later-listed
    file comes first).
    """
    published = [p for p in reversed(list(posts)) if p.published]
    return sorted(published, key=_sort_key, reverse=True)


def filter_archive(posts: Iterable[Post], values: Mapping[str, str]) -> ArchiveView:
    """Build the archive view for captured template *values*.

    A ``tag`` value is exclusive: date values are ignored when present.
    Otherwise ``year``, then ``month``, then ``date`` narrow the listing
    in turn; an empty intermediate result simply stays empty.
    """
    matched = latest_first(posts)

    tag = values.get("tag")
    if tag is not None:
        return ArchiveView(posts=[p for p in matched if p.has_tag(tag)], section=tag)

    year = values.get("year")
    if year is None:
        return ArchiveView(posts=matched, section="")

    matched = [p for p in matched if _date_part(p, "year") == int(year)]

    month = values.get("month")
    if matched and month is not None:
        matched = [p for p in matched if _date_part(p, "month") == int(month)]

    day = values.get("date")
    if matched and day is not None:
        matched = [p for p in matched if _date_part(p, "day") == int(day)]

    section = " ".join(values[key] for key in DATE_FILTER_KEYS if key in values)
    return ArchiveView(posts=matched, section=section)


def _date_part(post: Post, attr: str) -> int | None:
    if post.published_date is None:
        return None
    return getattr(post.published_date, attr)
