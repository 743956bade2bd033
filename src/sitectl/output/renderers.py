"""Rich rendering of ServiceResult for humans.

Each op has a renderer that draws onto a Console writing to a StringIO,
so callers get a plain string back. Rich drops colour codes when the
console is not a terminal, which keeps CliRunner output and pipes clean.
Ops without a dedicated renderer fall back to key-value lines.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:
    from collections.abc import Callable

    from sitectl.services.result import ServiceResult


SITE_THEME = Theme(
    {
        "site.ok": "bold green",
        "site.error": "bold red",
        "site.warning": "bold yellow",
        "site.info": "cyan",
        "site.op": "bold cyan",
        "site.key": "dim",
        "site.permalink": "bold blue",
        "site.path": "dim",
        "site.title": "bold",
        "site.status.draft": "yellow",
        "site.status.published": "green",
    }
)


def _console(width: int = 120) -> Console:
    return Console(file=StringIO(), theme=SITE_THEME, highlight=False, width=width)


def _text_of(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a document status, or "" for anything else."""
    return f"site.status.{status}" if status in ("draft", "published") else ""


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal; *verbose* adds detail sections."""
    console = _console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return _text_of(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "check":
        return "healthy" if result.data.get("healthy") else f"issues: {result.data.get('count', 0)}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("permalink", "")) for item in items)

    if "permalink" in result.data:
        return str(result.data["permalink"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="site.ok"), Text(f"  {result.op}", style="site.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="site.key")
    if key == "permalink":
        v = Text(str(value), style="site.permalink")
    elif key in ("source", "root", "path"):
        v = Text(str(value), style="site.path")
    elif key == "title":
        v = Text(str(value), style="site.title")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v)


def _table(*columns: str) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for column in columns:
        table.add_column(column)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="site.error")
    op = Text(f"  {result.op}", style="site.op")
    console.print(label, op, Text(" — "), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Check ─────────────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the validation report, one section per problem kind."""
    d = result.data
    _status_line(console, result)
    _field(console, "root", d.get("root", ""))
    _field(
        console,
        "documents",
        f"{d.get('documents', 0)} ({d.get('published', 0)} published, {d.get('drafts', 0)} drafts)",
    )

    duplicates = d.get("duplicates", [])
    if duplicates:
        console.print("\n[site.error]Duplicate permalinks[/site.error]")
        table = _table("Permalink", "Sources")
        for dup in duplicates:
            table.add_row(dup["permalink"], ", ".join(dup["sources"]))
        console.print(table)

    ambiguous = d.get("ambiguous", [])
    if ambiguous:
        console.print("\n[site.error]Ambiguous revisions[/site.error]")
        table = _table("Title key", "Published permalinks")
        for group in ambiguous:
            table.add_row(group["key"], ", ".join(group["permalinks"]))
        console.print(table)

    broken = d.get("broken_links", [])
    if broken:
        console.print("\n[site.warning]Broken links[/site.warning]")
        table = _table("Source", "Target")
        for link in broken:
            table.add_row(link["source"], link["target"])
        console.print(table)

    malformed = d.get("malformed", [])
    if malformed:
        console.print("\n[site.warning]Malformed documents[/site.warning]")
        table = _table("Path", "Reason")
        for item in malformed:
            table.add_row(Text(str(item["path"])), Text(item["reason"]))
        console.print(table)

    unresolved = d.get("unresolved_drafts", [])
    if unresolved:
        console.print("\n[site.info]Unresolved drafts[/site.info]")
        for group in unresolved:
            console.print(f"  {group['key']}: {', '.join(group['permalinks'])}", markup=False)

    revisions = d.get("revisions", [])
    if verbose and revisions:
        console.print("\n[site.info]Superseded revisions[/site.info]")
        for group in revisions:
            superseded = ", ".join(group["superseded"])
            console.print(f"  {group['canonical']} supersedes {superseded}", markup=False)

    console.print()
    if d.get("healthy"):
        console.print(f"[site.ok]healthy[/site.ok]  {d.get('count', 0)} findings")
    else:
        console.print(f"[site.error]unhealthy[/site.error]  {d.get('count', 0)} findings")


# ── Query ─────────────────────────────────────────────────────────────


def _render_document(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single document as a panel."""
    d = result.data
    lines: list[str] = [f"permalink: {d.get('permalink')}"]
    for key in ("layout", "status", "source"):
        if d.get(key) is not None:
            lines.append(f"{key}: {d[key]}")

    extra = d.get("extra") or {}
    if verbose:
        for key in sorted(extra):
            if key != "layout":
                lines.append(f"{key}: {extra[key]}")

    if d.get("links"):
        lines.append(f"links: {', '.join(d['links'])}")
    if d.get("broken_links"):
        lines.append(f"broken: {', '.join(d['broken_links'])}")
    if d.get("revisions"):
        lines.append(f"revisions: {', '.join(d['revisions'])}")

    style = style_for_status(str(d.get("status", "")))
    panel = Panel(
        Text("\n".join(lines)),
        title=Text(str(d.get("title", "Untitled"))),
        border_style=style or "dim",
    )
    console.print(panel)
    if d.get("text"):
        console.print(d["text"], markup=False)


def _render_document_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render a document listing as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Permalink", style="site.permalink", no_wrap=True)
    table.add_column("Title", style="site.title")
    table.add_column("Layout")
    table.add_column("Status")
    if verbose:
        table.add_column("Source", style="site.path")

    for item in items:
        status = str(item.get("status", ""))
        row: list[Any] = [
            str(item.get("permalink", "")),
            str(item.get("title", "")),
            str(item.get("layout", "")),
            Text(status, style=style_for_status(status)),
        ]
        if verbose:
            row.append(str(item.get("source") or ""))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} documents")


# ── Generic ───────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "check": _render_check,
    "show": _render_document,
    "list": _render_document_table,
}
