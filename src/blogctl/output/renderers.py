"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from blogctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from blogctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: bare paths/permalinks for listings, else a status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    if "paths" in result.data:
        return "\n".join(result.data["paths"])
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("permalink") or item.get("tag", "")) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "blog.ok"), (f"  {result.op}", "blog.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    style = {"path": "blog.path", "permalink": "blog.path", "title": "blog.title"}.get(key, "")
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, default=str, separators=(",", ":"))
    console.print(Text.assemble((f"  {key}: ", "blog.key"), (str(value), style)))


def _format_date(value: Any) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d") if hasattr(value, "strftime") else str(value)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "blog.error"), (f"  {result.op}", "blog.op"), " - ", msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_paths(result: ServiceResult, console: Console) -> None:
    for path in result.data.get("paths", []):
        console.print(Text(path, style="blog.path"))
    console.print(f"\n{result.data.get('count', 0)} paths")


def _render_resolve(result: ServiceResult, console: Console) -> None:
    """Single post as a panel; archive as a table of its posts."""
    d = result.data
    contents: dict[str, Any] = d.get("contents", {})

    if "posts" in contents:
        section = contents.get("section") or "all posts"
        table = Table(title=f"{contents.get('title', 'Archive')}: {section}", pad_edge=False)
        table.add_column("Date", style="blog.date", no_wrap=True)
        table.add_column("Title", style="blog.title")
        table.add_column("Permalink", style="blog.path")
        for post in contents["posts"]:
            table.add_row(
                _format_date(post.get("published_date")),
                str(post.get("title", "")),
                str(post.get("permalink", "")),
            )
        console.print(table)
        return

    lines = [f"{key}: {value}" for key, value in contents.items() if key != "content"]
    body = str(contents.get("content", "")).strip()
    text = "\n".join(lines) + (f"\n\n{body}" if body else "")
    title = str(contents.get("title") or d.get("path", ""))
    console.print(Panel(Text(text), title=title, border_style="dim", expand=False))


def _render_posts(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Date", style="blog.date", no_wrap=True)
    table.add_column("Title", style="blog.title")
    table.add_column("Permalink", style="blog.path")
    table.add_column("Tags")
    for item in result.data.get("items", []):
        title = Text(str(item.get("title", "")))
        if not item.get("published"):
            title.append(" (draft)", style="blog.draft")
        table.add_row(
            _format_date(item.get("published_date")),
            title,
            str(item.get("permalink", "")),
            ", ".join(item.get("tags", [])),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} posts")


def _render_tags(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Tag", style="blog.title")
    table.add_column("Posts", justify="right")
    table.add_column("Archive", style="blog.path")
    for item in result.data.get("items", []):
        table.add_row(str(item["tag"]), str(item["count"]), str(item.get("path") or ""))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "paths": _render_paths,
    "resolve": _render_resolve,
    "posts": _render_posts,
    "tags": _render_tags,
    "section": _render_generic,
}
