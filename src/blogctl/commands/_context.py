"""AppContext: state shared by every blogctl command.

Created once by the root group and handed to subcommands through
``@click.pass_obj``. The blog handler is built lazily so ``--help`` and
``--version`` never touch plugins or the posts directory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from blogctl.config.logging import configure_logging
from blogctl.domain.errors import ConfigurationError
from blogctl.output.formatters import OutputSettings, format_result
from blogctl.services.result import CONFIG_ERROR, ServiceResult

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.services.handler import BlogContentHandler
    from blogctl.services.site import SiteService

logger = logging.getLogger(__name__)


class AppContext:
    """Settings, the lazily built handler, and result emission."""

    def __init__(self, settings: BlogSettings) -> None:
        self.settings = settings
        self._handler: BlogContentHandler | None = None
        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

    @property
    def handler(self) -> BlogContentHandler:
        """The blog handler, with plugin body transforms loaded.

        Raises:
            ConfigurationError: If a configured URL template is invalid.
        """
        if self._handler is None:
            from blogctl.plugins.manager import PluginManager
            from blogctl.services.handler import BlogContentHandler

            plugins = PluginManager()
            loaded = plugins.discover_and_load(
                local_dir=self.settings.plugins_dir,
                entry_points=self.settings.plugins.entry_points,
            )
            logger.debug("Plugins loaded: %s", loaded)
            self._handler = BlogContentHandler.from_settings(
                self.settings, transforms=plugins.body_transforms()
            )
        return self._handler

    def run(self, op: str, call: Callable[[SiteService], ServiceResult]) -> None:
        """Build the site service, run *call* on it and emit the result."""
        from blogctl.services.site import SiteService

        try:
            handler = self.handler
        except ConfigurationError as exc:
            self.emit(ServiceResult.failure(op, CONFIG_ERROR, str(exc)))
            return
        self.emit(call(SiteService(handler)))

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and exit with status 1."""
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)
        click.echo(output)
