"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cadence.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cadence.services.result import ServiceResult

Renderer = Callable[..., None]


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


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Rules and timestamps only, one per line, so the output can be piped.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "upcoming":
        return "\n".join(item["at"] for item in data.get("items", []))
    if result.op == "vocabulary":
        return "\n".join(f"{item['phrase']}\t{item['rule']}" for item in data.get("items", []))
    for key in ("next", "rule"):
        if key in data:
            return str(data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="cad.ok")
    op = Text(f"  {result.op}", style="cad.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cad.key")
    if key == "rule":
        v = Text(str(value), style="cad.rule")
    elif key in ("next", "after", "at"):
        v = Text(str(value), style="cad.time")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span_data: dict[str, Any], depth: int = 0) -> None:
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    indent = "  " * depth
    line = f"    [{style}]{duration:>8.2f}ms[/{style}]  {indent}{name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_span(console, child, depth + 1)


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text(f"  warning: {warning}", style="cad.warning"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cad.error")
    op = Text(f"  {result.op}", style="cad.op")
    console.print(label, op, Text(" — "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose:
        _render_meta(console, result)


def _render_occurrence(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render recognize, next_occurrence and plan results."""
    _status_line(console, result)
    for key in ("text", "rule", "after", "next"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_upcoming(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "rule", result.data.get("rule", ""))
    _field(console, "after", result.data.get("after", ""))
    console.print()

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("At", style="cad.time", no_wrap=True)
    for item in result.data.get("items", []):
        table.add_row(str(item["index"]), item["at"])
    console.print(table)

    _render_warnings(console, result)
    if verbose:
        _render_meta(console, result)


def _render_vocabulary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Phrase", style="cad.phrase")
    table.add_column("Rule", style="cad.rule", no_wrap=True)
    for item in result.data.get("items", []):
        table.add_row(item["phrase"], item["rule"])
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _render_warnings(console, result)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "recognize": _render_occurrence,
    "next_occurrence": _render_occurrence,
    "plan": _render_occurrence,
    "upcoming": _render_upcoming,
    "vocabulary": _render_vocabulary,
}
