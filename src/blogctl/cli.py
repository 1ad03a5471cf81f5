"""Root CLI group for blogctl with global flags and command registration."""

from __future__ import annotations

import click

from blogctl import __version__
from blogctl.commands import register_commands
from blogctl.commands._base import BlogGroup
from blogctl.commands._context import AppContext
from blogctl.config.settings import BlogSettings


@click.group(
    cls=BlogGroup,
    invoke_without_command=True,
    examples="""\
  blogctl paths
  blogctl -c site/blogctl.toml posts --tag python
  BLOGCTL_BLOG__POSTS_DIR=articles blogctl --json tags""",
)
@click.version_option(version=__version__, prog_name="blogctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error detail.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """blogctl: route, index and enumerate a date-named blog."""
    settings = BlogSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
