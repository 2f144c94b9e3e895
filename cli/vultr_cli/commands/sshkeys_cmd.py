from __future__ import annotations

from pathlib import Path

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client, report_status, show_listing

app = typer.Typer(help="SSH key commands.")


def _read_public_key(path: Path) -> str:
    try:
        key = path.expanduser().read_text(encoding="utf-8").strip()
    except OSError as exc:
        console.err(f"Cannot read public key {path}: {exc}")
        raise typer.Exit(code=2)
    if not key.startswith(("ssh-", "ecdsa-")):
        console.err(f"{path} does not look like an OpenSSH public key.")
        raise typer.Exit(code=2)
    return key


@app.command("list")
def list_keys(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.sshkey_list()
    except VultrClientError as e:
        fail("list SSH keys", e)
    finally:
        client.close()
    show_listing(data, title="SSH keys", columns=["SSHKEYID", "name", "date_created"], json_out=json_out)


@app.command("create")
def create_key(
        name: str = typer.Argument(..., help="Key name."),
        key_file: Path = typer.Argument(..., help="OpenSSH public key file."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    key = _read_public_key(key_file)
    client = open_client(base_url)
    try:
        data = client.sshkey_create(name, key)
    except VultrClientError as e:
        fail("create SSH key", e)
    finally:
        client.close()
    if json_out:
        console.print_json(data)
        return
    key_id = data.get("SSHKEYID") if isinstance(data, dict) else None
    console.ok(f"SSH key created: SSHKEYID={key_id or '-'}")


@app.command("update")
def update_key(
        key_id: str = typer.Argument(..., help="SSH key ID."),
        name: str = typer.Argument(..., help="Key name."),
        key_file: Path = typer.Argument(..., help="OpenSSH public key file."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    key = _read_public_key(key_file)
    client = open_client(base_url)
    try:
        status = client.sshkey_update(key_id, name, key)
    except VultrClientError as e:
        fail("update SSH key", e)
    finally:
        client.close()
    report_status(f"SSH key {key_id} updated", status)


@app.command("destroy")
def destroy_key(
        key_id: str = typer.Argument(..., help="SSH key ID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.sshkey_destroy(key_id)
    except VultrClientError as e:
        fail("destroy SSH key", e)
    finally:
        client.close()
    report_status(f"SSH key {key_id} destroyed", status)
