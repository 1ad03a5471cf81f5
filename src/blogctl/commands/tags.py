"""Command: list tags with post counts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl tags
  blogctl --json tags""",
)
@click.pass_obj
def tags(app: AppContext) -> None:
    """List every tag used by a post, with its archive path."""
    app.run("tags", lambda site: site.list_tags())
