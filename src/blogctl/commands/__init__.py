"""Subcommands for blogctl.

:func:`register_commands` imports command modules lazily to keep
``blogctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every subcommand to the root group."""
    from blogctl.commands.paths import paths
    from blogctl.commands.posts import posts
    from blogctl.commands.resolve import resolve
    from blogctl.commands.section import section
    from blogctl.commands.tags import tags

    cli.add_command(paths)
    cli.add_command(resolve)
    cli.add_command(posts)
    cli.add_command(tags)
    cli.add_command(section)
