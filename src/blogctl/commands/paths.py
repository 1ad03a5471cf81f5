"""Command: list every output path the site produces."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl paths
  blogctl -q paths > sitemap.txt
  blogctl --json paths --base /docs""",
)
@click.option("--base", "base_path", default="/", show_default=True, help="Base path to list.")
@click.pass_obj
def paths(app: AppContext, base_path: str) -> None:
    """List output paths: generic content, then posts, then archives."""
    app.run("paths", lambda site: site.list_paths(base_path))
