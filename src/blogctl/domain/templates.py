"""URL template compiler.

A URL template is a path with ``{name}`` placeholders, e.g.
``/{year}/{month}/{date}/{title}``. Compiling it yields a regex with one
capture group per placeholder plus the bookkeeping needed to go the
other way (slug values back into a path).

The post template's ordered placeholder list is also the contract for
post file names: ``2012-11-20-hello-world.markdown`` carries the same
slugs, joined by :data:`FILE_NAME_SEPARATOR`, in the same order.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from blogctl.domain.errors import ConfigurationError

# Semantic class per placeholder name (regex source, no groups).
SEMANTIC_CLASSES: dict[str, str] = {
    "year": r"\d\d\d\d",
    "month": r"\d\d",
    "date": r"\d\d",
    "title": r"[^/\s]+",
    "tag": r"[^/\s]+",
}

FILE_NAME_SEPARATOR = "-"

# Request paths for posts and archives end with this marker.
INDEX_MARKER = "/index"

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

# Archive template keys, in classification order.
ARCHIVE_KEYS: tuple[str, ...] = ("all", "year", "year_month", "year_month_date", "tag")


@dataclass(frozen=True)
class CompiledTemplate:
    """A URL template compiled for matching and expansion.

    Attributes:
        source: The template string as configured.
        pattern: Anchorless regex source, one group per placeholder.
        mappings: Placeholder name -> 1-based capture index.
        placeholders: Placeholder names in encounter order (repeats kept).
        literals: Literal skeleton; ``len(literals) == len(placeholders) + 1``.
    """

    source: str
    pattern: str
    mappings: dict[str, int] = field(default_factory=dict)
    placeholders: tuple[str, ...] = ()
    literals: tuple[str, ...] = ("",)

    def match(self, path: str, suffix: str = "") -> list[str] | None:
        """Full-match *path* (plus literal *suffix*), returning slugs in capture order."""
        m = re.fullmatch(self.pattern + re.escape(suffix), path)
        if m is None:
            return None
        return list(m.groups())

    def values(self, path: str, suffix: str = "") -> dict[str, str] | None:
        """Like :meth:`match`, but keyed by placeholder name."""
        slugs = self.match(path, suffix)
        if slugs is None:
            return None
        return {name: slugs[index - 1] for name, index in self.mappings.items()}

    def expand(self, slugs: Sequence[str]) -> str:
        """Substitute *slugs* positionally into the literal skeleton."""
        if len(slugs) != len(self.placeholders):
            msg = (
                f"Template {self.source!r} takes {len(self.placeholders)} values, "
                f"got {len(slugs)}"
            )
            raise ValueError(msg)
        parts = [self.literals[0]]
        for slug, literal in zip(slugs, self.literals[1:], strict=True):
            parts.append(slug)
            parts.append(literal)
        return "".join(parts)

    def expand_named(self, values: Mapping[str, str]) -> str:
        """Substitute placeholder *values* by name."""
        return self.expand([values[name] for name in self.placeholders])


def compile_template(
    template: str,
    semantic_classes: Mapping[str, str] = SEMANTIC_CLASSES,
) -> CompiledTemplate:
    """Compile *template* into a :class:`CompiledTemplate`.

    Literal segments are escaped; each ``{name}`` becomes
    ``(<semantic_classes[name]>)``. Capture indexes are assigned left to
    right, once per occurrence (a repeated name keeps its last index).

    Raises:
        ConfigurationError: If a placeholder has no semantic class.

    Examples:
        >>> t = compile_template("/tag/{tag}")
        >>> t.pattern
        '/tag/([^/\\\\s]+)'
        >>> t.mappings
        {'tag': 1}
    """
    pattern_parts: list[str] = []
    literals: list[str] = []
    placeholders: list[str] = []
    mappings: dict[str, int] = {}

    position = 0
    for m in _PLACEHOLDER_RE.finditer(template):
        name = m.group(1)
        semantic_class = semantic_classes.get(name)
        if semantic_class is None:
            msg = f"Unknown placeholder {{{name}}} in URL template {template!r}"
            raise ConfigurationError(msg)

        literal = template[position : m.start()]
        literals.append(literal)
        pattern_parts.append(re.escape(literal))
        pattern_parts.append(f"({semantic_class})")

        placeholders.append(name)
        mappings[name] = len(placeholders)
        position = m.end()

    tail = template[position:]
    literals.append(tail)
    pattern_parts.append(re.escape(tail))

    return CompiledTemplate(
        source=template,
        pattern="".join(pattern_parts),
        mappings=mappings,
        placeholders=tuple(placeholders),
        literals=tuple(literals),
    )


def compile_file_name_pattern(
    placeholders: Sequence[str],
    semantic_classes: Mapping[str, str] = SEMANTIC_CLASSES,
    separator: str = FILE_NAME_SEPARATOR,
) -> str:
    """Build the regex that extracts post slugs from a file path.

    The groups are positional only, aligned with *placeholders* (the
    post template's order). Any leading directories and the extension
    are ignored.

    Raises:
        ConfigurationError: If a placeholder has no semantic class.
    """
    groups: list[str] = []
    for name in placeholders:
        semantic_class = semantic_classes.get(name)
        if semantic_class is None:
            msg = f"Unknown placeholder {{{name}}} in post file name"
            raise ConfigurationError(msg)
        groups.append(f"({semantic_class})")
    return r"^(?:.*/)?" + re.escape(separator).join(groups) + r"\.\S+$"


@dataclass(frozen=True)
class UrlTemplates:
    """Every template the router and path enumerator need."""

    post: CompiledTemplate
    file_name_pattern: str
    archives: dict[str, CompiledTemplate]

    @classmethod
    def build(cls, post_url: str, archive_urls: Mapping[str, str]) -> UrlTemplates:
        """Compile the post template, its file-name pattern and the archive templates.

        Archive templates are kept in :data:`ARCHIVE_KEYS` order; extra
        keys follow in the order given.
        """
        post = compile_template(post_url)
        ordered_keys = [k for k in ARCHIVE_KEYS if k in archive_urls]
        ordered_keys += [k for k in archive_urls if k not in ARCHIVE_KEYS]
        archives = {key: compile_template(archive_urls[key]) for key in ordered_keys}
        return cls(
            post=post,
            file_name_pattern=compile_file_name_pattern(post.placeholders),
            archives=archives,
        )

    def match_file_name(self, file_path: str) -> list[str] | None:
        """Extract post slugs from *file_path*, or None if it is not a post file name."""
        m = re.match(self.file_name_pattern, file_path.replace("\\", "/"))
        if m is None:
            return None
        return list(m.groups())

    def match_archive(self, path: str, suffix: str = "") -> tuple[str, dict[str, str]] | None:
        """Return ``(archive_key, values)`` for the first archive template matching *path*."""
        for key, template in self.archives.items():
            values = template.values(path, suffix)
            if values is not None:
                return key, values
        return None
