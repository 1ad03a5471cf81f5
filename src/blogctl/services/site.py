"""SiteService: blog engine operations as ServiceResults for the CLI."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from blogctl.domain.posts import Post, latest_first
from blogctl.services.base import BaseService
from blogctl.services.result import ServiceResult


def _post_item(post: Post) -> dict[str, Any]:
    return {
        "permalink": post.permalink,
        "title": post.fields.get("title", ""),
        "published_date": post.published_date,
        "published": post.published,
        "tags": post.tags,
        "file_path": post.file_path,
    }


class SiteService(BaseService):
    """Read-only queries over the site: paths, content, posts, tags."""

    def list_paths(self, base_path: str = "/") -> ServiceResult:
        """Every output path under *base_path*."""

        def run() -> ServiceResult:
            paths = self._handler.get_content_paths(base_path)
            return ServiceResult(
                ok=True,
                op="paths",
                data={"base_path": base_path, "paths": paths, "count": len(paths)},
            )

        return self._guard("paths", run)

    def resolve(self, path: str, content_type: str = ".html") -> ServiceResult:
        """Negotiate the content for a request path."""

        def run() -> ServiceResult:
            negotiated = self._handler.negotiate_content(path, content_type, {})
            return ServiceResult(
                ok=True,
                op="resolve",
                data={
                    "path": path,
                    "content_type": content_type,
                    "contents": negotiated.contents,
                    "options": negotiated.options,
                    "last_modified": negotiated.last_modified,
                },
            )

        return self._guard("resolve", run)

    def list_posts(self, *, tag: str | None = None, drafts: bool = False) -> ServiceResult:
        """Indexed posts, newest first.

        Without *drafts* only published posts are listed, as archives do.
        """

        def run() -> ServiceResult:
            posts, last_modified = self._handler.get_all_posts()
            if drafts:
                ordered = sorted(
                    posts.values(), key=lambda p: p.published_date or datetime.min, reverse=True
                )
            else:
                ordered = latest_first(posts.values())
            if tag is not None:
                ordered = [p for p in ordered if p.has_tag(tag)]
            items = [_post_item(p) for p in ordered]
            return ServiceResult(
                ok=True,
                op="posts",
                data={"items": items, "count": len(items), "last_modified": last_modified},
            )

        return self._guard("posts", run)

    def list_tags(self) -> ServiceResult:
        """Tags with their post counts and archive paths."""

        def run() -> ServiceResult:
            counts = self._handler.index.tag_counts()
            tag_template = self._handler.templates.archives.get("tag")
            items = [
                {
                    "tag": tag,
                    "count": count,
                    "path": tag_template.expand_named({"tag": tag.lower()})
                    if tag_template
                    else None,
                }
                for tag, count in counts.items()
            ]
            return ServiceResult(ok=True, op="tags", data={"items": items, "count": len(items)})

        return self._guard("tags", run)

    def check_section(self, path: str) -> ServiceResult:
        """Whether *path* renders as a directory index."""
        return ServiceResult(
            ok=True,
            op="section",
            data={"path": path, "is_section": self._handler.is_section(path)},
        )
