"""The generic content handler the blog engine delegates to.

Anything that is not a post or an archive (plain pages, sections,
shared site-wide content) belongs to a host-supplied
:class:`ContentHandler`. It is injected at construction time;
:class:`NullContentHandler` stands in when there is no host.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from blogctl.domain.errors import NotFoundError
from blogctl.domain.posts import NegotiatedContent


class ContentHandler(Protocol):
    """Interface shared by the generic handler and the blog handler."""

    def is_section(self, path: str) -> bool: ...

    def get_sections(self) -> list[str]: ...

    def get_content_paths(self, base_path: str) -> list[str]: ...

    def get_shared_content(self) -> tuple[dict[str, Any], datetime | None]: ...

    def negotiate_content(
        self,
        path: str,
        content_type: str,
        options: dict[str, Any],
    ) -> NegotiatedContent: ...


class NullContentHandler:
    """A site with no content besides the blog."""

    def is_section(self, path: str) -> bool:
        return False

    def get_sections(self) -> list[str]:
        return []

    def get_content_paths(self, base_path: str) -> list[str]:
        return []

    def get_shared_content(self) -> tuple[dict[str, Any], datetime | None]:
        return {}, None

    def negotiate_content(
        self,
        path: str,
        content_type: str,
        options: dict[str, Any],
    ) -> NegotiatedContent:
        raise NotFoundError(path)
