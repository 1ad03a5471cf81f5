"""Error taxonomy for the blog engine.

I/O failures are not wrapped: stat/read/list errors surface as the
builtin :class:`OSError` so callers see exactly what the filesystem
reported.
"""

from __future__ import annotations


class BlogError(Exception):
    """Base class for blog engine errors."""


class ConfigurationError(BlogError):
    """A URL template cannot be compiled (unknown placeholder name).

    Raised at setup time, never per request.
    """


class HeaderDecodeError(BlogError):
    """A post's front matter block is not a valid YAML mapping.

    Recovered inside the parser: the file becomes an opaque document.
    """


class NotFoundError(BlogError):
    """No content exists for a request path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Content for {path} not found")
        self.path = path
