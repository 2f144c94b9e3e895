from __future__ import annotations

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client, show_listing

app = typer.Typer(help="Region commands.")


@app.command("list")
def list_regions(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.regions_list()
    except VultrClientError as e:
        fail("list regions", e)
    finally:
        client.close()
    show_listing(
        data,
        title="Regions",
        columns=["DCID", "name", "country", "continent", "regioncode"],
        json_out=json_out,
    )


@app.command("availability")
def region_availability(
        region_id: int = typer.Argument(..., help="Region (DCID)."),
        plan_type: str = typer.Option("all", "--type", help="Plan family: all, vc2 or vdc2."),
        plan_id: int | None = typer.Option(None, "--plan", help="Only check whether this plan is offered."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    kind = plan_type.strip().lower()
    if kind not in {"all", "vc2", "vdc2"}:
        console.err("--type must be one of: all, vc2, vdc2.")
        raise typer.Exit(code=2)
    client = open_client(base_url)
    try:
        plans = client.regions_availability(region_id, plan_type="" if kind == "all" else kind)
    except VultrClientError as e:
        fail("fetch region availability", e)
    finally:
        client.close()

    if json_out:
        console.print_json(plans)
        return
    if plan_id is not None:
        if plan_id in {int(p) for p in plans or []}:
            console.ok(f"Plan {plan_id} is available in region {region_id}.")
            return
        console.err(f"Plan {plan_id} is not available in region {region_id}.")
        raise typer.Exit(code=1)
    if not plans:
        console.info(f"No plans available in region {region_id}.")
        return
    console.console.print(", ".join(str(p) for p in plans))
