from __future__ import annotations

import typer
from vultr_client import VultrClientError

from .. import console
from ._shared import fail, open_client

app = typer.Typer(help="Account commands.")


@app.command("info")
def account_info(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        account = client.account_info()
        auth = client.auth_info()
    except VultrClientError as e:
        fail("fetch account info", e)
    finally:
        client.close()

    if json_out:
        console.print_json({"account": account, "auth": auth})
        return

    console.console.print(f"name: {auth.get('name') or '-'}")
    console.console.print(f"email: {auth.get('email') or '-'}")
    console.console.print(f"acls: {', '.join(auth.get('acls') or []) or '-'}")
    console.console.print(f"balance: {account.get('balance', '-')}")
    console.console.print(f"pending_charges: {account.get('pending_charges', '-')}")
    console.console.print(
        f"last_payment: {account.get('last_payment_amount', '-')} on {account.get('last_payment_date') or '-'}"
    )


@app.command("check")
def account_check(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        connected = client.is_connected()
    except VultrClientError as e:
        fail("check API key", e)
    finally:
        client.close()

    if not connected:
        console.err("Invalid API key.")
        raise typer.Exit(code=1)
    console.ok("API key accepted.")
