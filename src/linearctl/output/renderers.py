"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from linearctl.output.console import create_console, get_output, style_for_priority

if TYPE_CHECKING:
    from rich.console import Console

    from linearctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lin.ok")
    op = Text(f"  {result.op}", style="lin.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="lin.key")
    if key == "id" or key.endswith("Id"):
        v = Text(str(value), style="lin.id")
    elif key in ("name", "title"):
        v = Text(str(value), style="lin.title")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    if span_data.get("annotations"):
        extras = [f"{ak}={av}" for ak, av in span_data["annotations"].items()]
        line += f"  ({', '.join(extras)})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _nested(data: dict[str, Any], *path: str) -> Any:
    node: Any = data
    for step in path:
        if not isinstance(node, dict):
            return None
        node = node.get(step)
    return node


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lin.error")
    op = Text(f"  {result.op}", style="lin.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Query renderers ───────────────────────────────────────────────────


def _render_issue_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render search_issues results as a table with the next-page cursor."""
    connection = result.data.get("issues") or {}
    issues = connection.get("nodes") or []

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="lin.id", no_wrap=True)
    table.add_column("Title", style="lin.title")
    table.add_column("State")
    table.add_column("Priority", justify="right")
    table.add_column("Assignee")
    if verbose:
        table.add_column("Updated", style="dim")

    for issue in issues:
        priority = issue.get("priority")
        row = [
            str(issue.get("identifier") or issue.get("id", "")),
            str(issue.get("title", "")),
            str(_nested(issue, "state", "name") or ""),
            Text(str(priority if priority is not None else ""), style=style_for_priority(priority)),
            str(_nested(issue, "assignee", "name") or ""),
        ]
        if verbose:
            row.append(str(issue.get("updatedAt", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{len(issues)} issues")

    page_info = connection.get("pageInfo") or {}
    if page_info.get("hasNextPage"):
        console.print(f"next page: --after {page_info.get('endCursor')}")
    if verbose:
        _render_meta(console, result)


def _render_user(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_current_user as a panel listing the user's teams."""
    viewer = result.data.get("viewer") or {}
    lines = [f"email: {viewer.get('email', '')}", f"id: {viewer.get('id', '')}"]
    teams = _nested(viewer, "teams", "nodes") or []
    if teams:
        lines.append("teams: " + ", ".join(f"{t.get('key')} ({t.get('name')})" for t in teams))
    console.print(Panel("\n".join(lines), title=str(viewer.get("name", "?")), expand=False))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "search_issues": _render_issue_table,
    "get_current_user": _render_user,
}
