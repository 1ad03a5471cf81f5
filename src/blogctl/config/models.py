"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, blogctl.toml only contains
overrides. A site with the default layout needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_POST_URL = "/{year}/{month}/{date}/{title}"


class ArchiveUrlsConfig(BaseModel):
    """[blog.archive_urls] section.

    Overriding one template keeps the defaults for the others.
    """

    model_config = {"frozen": True}

    all: str = "/archive"
    year: str = "/{year}"
    year_month: str = "/{year}/{month}"
    year_month_date: str = "/{year}/{month}/{date}"
    tag: str = "/tag/{tag}"


class BlogConfig(BaseModel):
    """[blog] section."""

    model_config = {"frozen": True}

    posts_dir: str = "posts"
    post_url: str = DEFAULT_POST_URL
    post_format: str = "markdown"
    archive_urls: ArchiveUrlsConfig = Field(default_factory=ArchiveUrlsConfig)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
    local_dir: str = ".blogctl/plugins"
