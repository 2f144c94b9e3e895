from __future__ import annotations

from pathlib import Path

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client, report_status, show_listing

app = typer.Typer(help="Startup script commands.")


def _read_script(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        console.err(f"Cannot read script file {path}: {exc}")
        raise typer.Exit(code=2)


@app.command("list")
def list_scripts(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.startupscript_list()
    except VultrClientError as e:
        fail("list startup scripts", e)
    finally:
        client.close()
    show_listing(
        data,
        title="Startup scripts",
        columns=["SCRIPTID", "name", "type", "date_modified"],
        json_out=json_out,
    )


@app.command("create")
def create_script(
        name: str = typer.Argument(..., help="Script name."),
        file: Path = typer.Argument(..., help="File with the script contents."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    script = _read_script(file)
    client = open_client(base_url)
    try:
        script_id = client.startupscript_create(name, script)
    except VultrClientError as e:
        fail("create startup script", e)
    finally:
        client.close()
    console.ok(f"Startup script created: SCRIPTID={script_id}")


@app.command("update")
def update_script(
        script_id: int = typer.Argument(..., help="Script ID."),
        name: str = typer.Argument(..., help="Script name."),
        file: Path = typer.Argument(..., help="File with the script contents."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    script = _read_script(file)
    client = open_client(base_url)
    try:
        status = client.startupscript_update(script_id, name, script)
    except VultrClientError as e:
        fail("update startup script", e)
    finally:
        client.close()
    report_status(f"Startup script {script_id} updated", status)


@app.command("destroy")
def destroy_script(
        script_id: int = typer.Argument(..., help="Script ID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.startupscript_destroy(script_id)
    except VultrClientError as e:
        fail("destroy startup script", e)
    finally:
        client.close()
    report_status(f"Startup script {script_id} destroyed", status)
