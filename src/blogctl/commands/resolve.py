"""Command: show the content a request path resolves to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl resolve /2012/11/20/hello-world/index
  blogctl resolve /tag/python/index
  blogctl --json resolve /archive/index --type .json""",
)
@click.argument("path")
@click.option(
    "--type", "content_type", default=".html", show_default=True, help="Requested content type."
)
@click.pass_obj
def resolve(app: AppContext, path: str, content_type: str) -> None:
    """Resolve PATH to a post, an archive, or generic content."""
    app.run("resolve", lambda site: site.resolve(path, content_type))
