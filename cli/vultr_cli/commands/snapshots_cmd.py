from __future__ import annotations

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client, report_status, show_listing

app = typer.Typer(help="Snapshot commands.")


@app.command("list")
def list_snapshots(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.snapshot_list()
    except VultrClientError as e:
        fail("list snapshots", e)
    finally:
        client.close()
    show_listing(
        data,
        title="Snapshots",
        columns=["SNAPSHOTID", "description", "size", "status", "date_created"],
        json_out=json_out,
    )


@app.command("create")
def create_snapshot(
        server_id: int = typer.Argument(..., help="Server SUBID to snapshot."),
        description: str | None = typer.Option(None, "--description", help="Snapshot description."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.snapshot_create(server_id, description=description)
    except VultrClientError as e:
        fail("create snapshot", e)
    finally:
        client.close()
    if json_out:
        console.print_json(data)
        return
    snapshot_id = data.get("SNAPSHOTID") if isinstance(data, dict) else None
    console.ok(f"Snapshot created: SNAPSHOTID={snapshot_id or '-'}")


@app.command("destroy")
def destroy_snapshot(
        snapshot_id: str = typer.Argument(..., help="Snapshot ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not typer.confirm(f"Destroy snapshot {snapshot_id}?", default=False):
        console.info("Aborted.")
        raise typer.Exit(code=0)
    client = open_client(base_url)
    try:
        status = client.snapshot_destroy(snapshot_id)
    except VultrClientError as e:
        fail("destroy snapshot", e)
    finally:
        client.close()
    report_status(f"Snapshot {snapshot_id} destroyed", status)
