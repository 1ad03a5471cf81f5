"""Command: list indexed posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl posts
  blogctl posts --tag python
  blogctl --json posts --drafts""",
)
@click.option("--tag", default=None, help="Only posts carrying this tag (case-insensitive).")
@click.option("--drafts", is_flag=True, help="Include unpublished posts.")
@click.pass_obj
def posts(app: AppContext, tag: str | None, drafts: bool) -> None:
    """List posts, newest first."""
    app.run("posts", lambda site: site.list_posts(tag=tag, drafts=drafts))
