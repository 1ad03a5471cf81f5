"""Post file content: front matter splitting and header decoding.

A post file looks like::

    ---
    title: Hello
    tags: [life, code]
    published: true
    ---
    Body text.

The text is trimmed and split on the ``---`` token at most twice: the
segment between the first and second token is the YAML header, the
remainder is the body. Anything before the first token is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blogctl.domain.errors import HeaderDecodeError

FRONT_MATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader.

    ruamel.yaml's YAML object is stateful, so each decode gets its own.
    """
    return YAML(typ="safe", pure=True)


@dataclass(frozen=True)
class SplitContent:
    """A trimmed post file split into header text and body text.

    ``header`` is None when the text carries no delimiter at all.
    """

    text: str
    header: str | None
    body: str


def split_front_matter(raw: str) -> SplitContent:
    """Trim *raw* and split it into header and body segments."""
    text = raw.strip()
    parts = text.split(FRONT_MATTER_DELIMITER, 2)
    if len(parts) < 2:
        return SplitContent(text=text, header=None, body=text)
    body = parts[2].strip() if len(parts) == 3 else ""
    return SplitContent(text=text, header=parts[1], body=body)


def decode_header(header: str) -> dict[str, Any]:
    """Decode a YAML front matter block into a plain dict.

    An empty block decodes to ``{}``.

    Raises:
        HeaderDecodeError: If the YAML is malformed, holds an impossible
            timestamp (``2012-13-45``), or is not a mapping.
    """
    try:
        data = _new_yaml().load(header)
    except (YAMLError, ValueError) as exc:
        msg = f"Malformed front matter: {exc}"
        raise HeaderDecodeError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise HeaderDecodeError(msg)
    return {str(key): value for key, value in data.items()}
