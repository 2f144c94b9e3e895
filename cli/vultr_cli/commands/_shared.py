from __future__ import annotations

from typing import Any, NoReturn

import typer
from vultr_client import (
    AuthError,
    ConfigError,
    NetworkError,
    RateLimitedError,
    VultrClient,
    VultrClientError,
)

from .. import console
from ..config import load_config
from ..formatting import build_table, payload_rows
from ..http import make_client


def open_client(base_url: str | None) -> VultrClient:
    try:
        return make_client(load_config(), base_url_override=base_url)
    except ConfigError as exc:
        console.err(str(exc))
        raise typer.Exit(code=2)


def fail(action: str, exc: VultrClientError) -> NoReturn:
    if isinstance(exc, AuthError):
        console.err("Unauthorized. Check your API key.")
    elif isinstance(exc, RateLimitedError):
        console.err(f"Failed to {action}: rate limited, try again later.")
    elif isinstance(exc, NetworkError):
        console.err(f"Failed to {action}: network error ({exc})")
    else:
        console.err(f"Failed to {action}: {exc}")
    raise typer.Exit(code=2)


def show_listing(data: Any, *, title: str, columns: list[str], json_out: bool) -> None:
    if json_out:
        console.print_json(data)
        return
    rows = payload_rows(data)
    if not rows:
        console.info(f"No {title.lower()}.")
        return
    console.print(build_table(title, rows, columns))


def report_status(action: str, status: int) -> None:
    if 200 <= status < 300:
        console.ok(f"{action} (HTTP {status})")
        return
    console.err(f"{action} failed (HTTP {status})")
    raise typer.Exit(code=2)
