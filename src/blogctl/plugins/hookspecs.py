"""Pluggy hook specifications for blogctl.

Plugins supply body transforms: objects with ``parse(raw_body) -> str``
keyed by the file extension they handle (``".markdown"``, ``".md"``...).
The post parser picks the one matching ``blog.post_format``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from blogctl.infrastructure.parser import BodyTransform

hookspec = pluggy.HookspecMarker("blogctl")
hookimpl = pluggy.HookimplMarker("blogctl")


class BlogctlHookSpec:
    """Hook specifications for the blogctl plugin system."""

    @hookspec
    def register_body_transforms(self) -> dict[str, BodyTransform] | None:
        """Return extension -> BodyTransform mappings for the transform registry."""
