from __future__ import annotations

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client, show_listing

app = typer.Typer(help="Plan commands.")

PLAN_COLUMNS = ["VPSPLANID", "name", "vcpu_count", "ram", "disk", "bandwidth", "price_per_month"]


@app.command("list")
def list_plans(
        plan_type: str = typer.Option("all", "--type", help="Plan family: all, vc2 or vdc2."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    kind = plan_type.strip().lower()
    if kind not in {"all", "vc2", "vdc2"}:
        console.err("--type must be one of: all, vc2, vdc2.")
        raise typer.Exit(code=2)
    client = open_client(base_url)
    try:
        if kind == "vc2":
            data = client.plans_list_vc2()
        elif kind == "vdc2":
            data = client.plans_list_vdc2()
        else:
            data = client.plans_list()
    except VultrClientError as e:
        fail("list plans", e)
    finally:
        client.close()
    show_listing(data, title="Plans", columns=PLAN_COLUMNS, json_out=json_out)
