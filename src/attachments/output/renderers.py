"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from attachments.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from attachments.services.result import ServiceResult

Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(name for item in items if (name := _extract_name(item)))
    if result.op == "render":
        return str(result.data.get("markup", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_name(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("name", "key"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="att.ok"), Text(f"  {result.op}", style="att.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="att.key")
    if key == "name":
        v = Text(str(value), style="att.name")
    elif key == "label":
        v = Text(str(value), style="att.label")
    elif key in ("type", "resolved_type"):
        v = Text(str(value), style=style_for_type(value))
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="att.error"),
        Text(f"  {result.op}", style="att.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Field type renderers ──────────────────────────────────────────────


def _render_field_types(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Key", style="att.type", no_wrap=True)
    table.add_column("Implementation", style="att.impl")
    for item in items:
        table.add_row(str(item.get("key", "")), str(item.get("implementation", "")))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} field types")


def _render_field(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    keys = ["name", "type", "label"]
    if verbose:
        keys += ["implementation", "resolved_type"]
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key])


# ── Instance renderers ────────────────────────────────────────────────


def _render_instance_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="att.name", no_wrap=True)
    table.add_column("Label", style="att.label")
    table.add_column("Categories")
    table.add_column("Limit", justify="right")
    table.add_column("Fields", justify="right")
    for item in items:
        limit = item.get("limit", -1)
        table.add_row(
            str(item.get("name", "")),
            str(item.get("label", "")),
            ", ".join(item.get("categories", [])),
            "unlimited" if limit == -1 else str(limit),
            str(item.get("fields", 0)),
        )
    console.print(table)
    footer = f"\n{result.data.get('count', len(items))} instances"
    if "category" in result.data:
        footer += f" for {result.data['category']}"
    console.print(footer)


def _render_instance(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    for key in ("name", "label", "categories", "limit", "button_text", "note"):
        if data.get(key) is not None:
            _field(console, key, data[key])

    fields = data.get("fields", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="att.name", no_wrap=True)
    table.add_column("Type")
    table.add_column("Label", style="att.label")
    if verbose:
        table.add_column("Input name", style="dim")
    for field in fields:
        type_key = field.get("type")
        row: list[Any] = [
            str(field.get("name", "")),
            Text(type_key or "unknown", style=style_for_type(type_key)),
            Text(str(field.get("label", ""))),
        ]
        if verbose:
            row.append(Text(str(field.get("field_name", ""))))
        table.add_row(*row)
    console.print(table)


# ── Markup renderer ───────────────────────────────────────────────────


def _render_markup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if verbose:
        _status_line(console, result)
        _field(console, "category", result.data.get("category", ""))
        _field(console, "instances", result.data.get("instances", []))
    markup = result.data.get("markup", "")
    if markup:
        console.print(Text(markup), soft_wrap=True)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "list_field_types": _render_field_types,
    "create_field": _render_field,
    "list_instances": _render_instance_table,
    "get_instance": _render_instance,
    "render": _render_markup,
}
