from __future__ import annotations

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client, show_listing

os_app = typer.Typer(help="Operating system images.")
iso_app = typer.Typer(help="ISO images.")


@os_app.command("list")
def list_os(
        family: str | None = typer.Option(None, "--family", help="Keep only this family (e.g. ubuntu)."),
        arch: int | None = typer.Option(None, "--arch", help="Keep only 32 or 64 bit images."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    if arch is not None and arch not in (32, 64):
        console.err("--arch must be 32 or 64.")
        raise typer.Exit(code=2)
    client = open_client(base_url)
    try:
        data = client.os_list(family=family, arch=arch)
    except VultrClientError as e:
        fail("list operating systems", e)
    finally:
        client.close()
    show_listing(data, title="Operating systems", columns=["OSID", "name", "arch", "family"], json_out=json_out)


@iso_app.command("list")
def list_iso(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.iso_list()
    except VultrClientError as e:
        fail("list ISO images", e)
    finally:
        client.close()
    show_listing(data, title="ISO images", columns=["ISOID", "filename", "size", "date_created"], json_out=json_out)
