"""Unified settings: CLI flags, env vars, and blogctl.toml in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``BLOGCTL_*`` prefix, ``__`` for nesting, e.g.
                   ``BLOGCTL_BLOG__POSTS_DIR=articles``)
  3. TOML file    (``blogctl.toml``, found by walking up from the site root)
  4. Code defaults baked into :mod:`blogctl.config.models`

The config file's directory is the site root; ``blog.posts_dir`` is
resolved against it.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from blogctl.config.models import BlogConfig, PluginsConfig

CONFIG_FILENAME = "blogctl.toml"
CONFIG_ENV_VAR = "BLOGCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate blogctl.toml: ``$BLOGCTL_CONFIG`` first, then walk up from *start*.

    Returns None when there is no config file; an env var pointing at a
    missing file also yields None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for current in (directory, *directory.parents):
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading a blogctl.toml file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path chosen by from_cli(), visible to settings_customise_sources().
_tls = threading.local()


class BlogSettings(BaseSettings):
    """Resolved settings for one blogctl invocation.

    Attributes:
        site_root: Site directory (parent of ``blogctl.toml``, or CWD).
        config_path: The config file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BLOGCTL_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    blog: BlogConfig = Field(default_factory=BlogConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init kwargs, then env vars, then blogctl.toml."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> BlogSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* that does not exist is ignored, as if
        no config file were present.
        """
        toml_path: Path | None
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(site_root)

        if site_root is None:
            site_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(site_root=site_root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    @property
    def plugins_dir(self) -> Path:
        """Local single-file plugin directory, resolved against the site root."""
        return self.site_root / self.plugins.local_dir
