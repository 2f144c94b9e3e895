from __future__ import annotations

from typing import Any, Iterable

from rich import box
from rich.table import Table


def payload_rows(data: Any) -> list[dict[str, Any]]:
    """Flatten a list payload into rows.

    List endpoints return either a JSON array or an object keyed by the
    provider-assigned ID; both become a list of row dicts.
    """
    if isinstance(data, dict):
        values = list(data.values())
    elif isinstance(data, list):
        values = data
    else:
        return []
    return [v for v in values if isinstance(v, dict)]


def format_value(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value) or "-"
    return str(value)


def format_bytes(value: Any) -> str:
    try:
        size = float(value)
    except (TypeError, ValueError):
        return format_value(value)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if abs(size) < 1024:
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}TiB"


def build_table(title: str, rows: Iterable[dict[str, Any]], columns: list[str]) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    for i, col in enumerate(columns):
        table.add_column(col, style="bold" if i == 0 else None, no_wrap=i == 0)
    for row in rows:
        table.add_row(*(format_value(row.get(col)) for col in columns))
    return table
