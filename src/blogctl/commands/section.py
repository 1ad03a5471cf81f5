"""Command: check whether a path is a section."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    cls=BlogCommand,
    examples="""\
  blogctl section /2012/11/20/hello-world
  blogctl --json section /2012""",
)
@click.argument("path")
@click.pass_obj
def section(app: AppContext, path: str) -> None:
    """Report whether PATH renders as a directory with an index."""
    app.run("section", lambda site: site.check_section(path))
