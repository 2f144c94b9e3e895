from __future__ import annotations

from typing import Any

import typer
from rich import box
from rich.table import Table
from vultr_client import AvailabilityError, MissingParameterError, VultrClientError

from .. import console
from ..formatting import format_bytes
from ._shared import fail, open_client, report_status, show_listing

SERVERS_USAGE = """\
Usage:
  vultr servers list
  vultr servers create --region DCID --plan VPSPLANID --os OSID [--label L] [--hostname H] [--script ID] [--sshkey ID]
  vultr servers reboot|halt|start <SUBID>
  vultr servers destroy|reinstall <SUBID> [--yes]
  vultr servers ipv4 list|add|remove|reverse|reverse-default ...
  vultr servers ipv6 list|reverse|reverse-delete ...
"""

app = typer.Typer(help="Server commands.\n\n" + SERVERS_USAGE)
ipv4_app = typer.Typer(help="IPv4 addresses of a server.")
ipv6_app = typer.Typer(help="IPv6 addresses of a server.")
app.add_typer(ipv4_app, name="ipv4")
app.add_typer(ipv6_app, name="ipv6")

SERVER_COLUMNS = ["SUBID", "label", "main_ip", "location", "status", "power_status", "os"]


def _confirm_or_exit(prompt: str, yes: bool) -> None:
    if yes:
        return
    if not typer.confirm(prompt, default=False):
        console.info("Aborted.")
        raise typer.Exit(code=0)


@app.command("list")
def list_servers(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.server_list()
    except VultrClientError as e:
        fail("list servers", e)
    finally:
        client.close()
    show_listing(data, title="Servers", columns=SERVER_COLUMNS, json_out=json_out)


@app.command("create")
def create_server(
        region_id: int = typer.Option(..., "--region", help="Region (DCID)."),
        plan_id: int = typer.Option(..., "--plan", help="Plan (VPSPLANID)."),
        os_id: int = typer.Option(..., "--os", help="Operating system (OSID)."),
        label: str | None = typer.Option(None, "--label", help="Server label."),
        hostname: str | None = typer.Option(None, "--hostname", help="Server hostname."),
        script_id: int | None = typer.Option(None, "--script", help="Startup script ID (SCRIPTID)."),
        sshkey_id: str | None = typer.Option(None, "--sshkey", help="SSH key ID (SSHKEYID)."),
        snapshot_id: str | None = typer.Option(None, "--snapshot", help="Snapshot ID when OS is 'snapshot'."),
        enable_ipv6: bool = typer.Option(False, "--ipv6", help="Enable IPv6."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    config: dict[str, Any] = {"DCID": region_id, "VPSPLANID": plan_id, "OSID": os_id}
    if label:
        config["label"] = label
    if hostname:
        config["hostname"] = hostname
    if script_id is not None:
        config["SCRIPTID"] = script_id
    if sshkey_id:
        config["SSHKEYID"] = sshkey_id
    if snapshot_id:
        config["SNAPSHOTID"] = snapshot_id
    if enable_ipv6:
        config["enable_ipv6"] = "yes"

    client = open_client(base_url)
    try:
        server_id = client.server_create(config)
    except (AvailabilityError, MissingParameterError) as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    except VultrClientError as e:
        fail("create server", e)
    finally:
        client.close()

    if json_out:
        console.print_json({"SUBID": server_id})
        return
    console.ok(f"Server created: SUBID={server_id}")


def _power_action(action: str, server_id: int, base_url: str | None) -> None:
    client = open_client(base_url)
    try:
        status = getattr(client, f"server_{action}")(server_id)
    except VultrClientError as e:
        fail(f"{action} server {server_id}", e)
    finally:
        client.close()
    report_status(f"Server {server_id}: {action}", status)


@app.command("reboot")
def reboot_server(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _power_action("reboot", server_id, base_url)


@app.command("halt")
def halt_server(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _power_action("halt", server_id, base_url)


@app.command("start")
def start_server(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _power_action("start", server_id, base_url)


@app.command("destroy")
def destroy_server(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _confirm_or_exit(f"Destroy server {server_id}? All data will be lost.", yes)
    _power_action("destroy", server_id, base_url)


@app.command("reinstall")
def reinstall_server(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _confirm_or_exit(f"Reinstall server {server_id}? All data will be lost.", yes)
    _power_action("reinstall", server_id, base_url)


@app.command("label")
def set_label(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        label: str = typer.Argument(..., help="New label."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_label_set(server_id, label)
    except VultrClientError as e:
        fail("set server label", e)
    finally:
        client.close()
    report_status(f"Server {server_id}: label set", status)


@app.command("bandwidth")
def server_bandwidth(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.server_bandwidth(server_id)
    except VultrClientError as e:
        fail("fetch bandwidth history", e)
    finally:
        client.close()

    if json_out or not isinstance(data, dict):
        console.print_json(data)
        return

    days: dict[str, dict[str, Any]] = {}
    for direction in ("incoming_bytes", "outgoing_bytes"):
        for entry in data.get(direction) or []:
            if isinstance(entry, (list, tuple)) and len(entry) == 2:
                days.setdefault(str(entry[0]), {})[direction] = entry[1]

    table = Table(title=f"Server {server_id} bandwidth", box=box.SIMPLE)
    table.add_column("date", style="bold", no_wrap=True)
    table.add_column("incoming", justify="right")
    table.add_column("outgoing", justify="right")
    for day in sorted(days):
        table.add_row(day, format_bytes(days[day].get("incoming_bytes")), format_bytes(days[day].get("outgoing_bytes")))
    console.print(table)


@app.command("restore-snapshot")
def restore_snapshot(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        snapshot_id: str = typer.Argument(..., help="Snapshot ID (hex)."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _confirm_or_exit(f"Restore snapshot {snapshot_id} onto server {server_id}?", yes)
    client = open_client(base_url)
    try:
        status = client.server_restore_snapshot(server_id, snapshot_id)
    except VultrClientError as e:
        fail("restore snapshot", e)
    finally:
        client.close()
    report_status(f"Server {server_id}: snapshot restore", status)


@app.command("restore-backup")
def restore_backup(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        backup_id: str = typer.Argument(..., help="Backup ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    _confirm_or_exit(f"Restore backup {backup_id} onto server {server_id}?", yes)
    client = open_client(base_url)
    try:
        status = client.server_restore_backup(server_id, backup_id)
    except VultrClientError as e:
        fail("restore backup", e)
    finally:
        client.close()
    report_status(f"Server {server_id}: backup restore", status)


@ipv4_app.command("list")
def list_ipv4(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.server_ipv4_list(server_id)
    except VultrClientError as e:
        fail("list IPv4 addresses", e)
    finally:
        client.close()
    if data is None:
        console.err(f"No IPv4 information for server {server_id}.")
        raise typer.Exit(code=2)
    show_listing(
        data,
        title=f"Server {server_id} IPv4",
        columns=["ip", "netmask", "gateway", "type", "reverse"],
        json_out=json_out,
    )


@ipv4_app.command("add")
def add_ipv4(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        no_reboot: bool = typer.Option(False, "--no-reboot", help="Do not reboot the server after adding."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_ipv4_create(server_id, reboot=not no_reboot)
    except VultrClientError as e:
        fail("add IPv4 address", e)
    finally:
        client.close()
    report_status(f"Server {server_id}: IPv4 added", status)


@ipv4_app.command("remove")
def remove_ipv4(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        ip: str = typer.Argument(..., help="IPv4 address."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_ipv4_destroy(server_id, ip)
    except VultrClientError as e:
        fail("remove IPv4 address", e)
    finally:
        client.close()
    report_status(f"Server {server_id}: IPv4 {ip} removed", status)


@ipv4_app.command("reverse")
def reverse_ipv4(
        ip: str = typer.Argument(..., help="IPv4 address."),
        entry: str = typer.Argument(..., help="Reverse DNS hostname."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_reverse_ipv4_set(ip, entry)
    except VultrClientError as e:
        fail("set IPv4 reverse DNS", e)
    finally:
        client.close()
    report_status(f"{ip}: reverse DNS set to {entry}", status)


@ipv4_app.command("reverse-default")
def reverse_ipv4_default(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        ip: str = typer.Argument(..., help="IPv4 address."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_reverse_ipv4_default(server_id, ip)
    except VultrClientError as e:
        fail("reset IPv4 reverse DNS", e)
    finally:
        client.close()
    report_status(f"{ip}: reverse DNS reset", status)


@ipv6_app.command("list")
def list_ipv6(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = open_client(base_url)
    try:
        data = client.server_ipv6_list(server_id)
    except VultrClientError as e:
        fail("list IPv6 addresses", e)
    finally:
        client.close()
    if data is None:
        console.err(f"No IPv6 information for server {server_id}.")
        raise typer.Exit(code=2)
    show_listing(
        data,
        title=f"Server {server_id} IPv6",
        columns=["ip", "network", "network_size", "type"],
        json_out=json_out,
    )


@ipv6_app.command("reverse")
def reverse_ipv6(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        ip: str = typer.Argument(..., help="IPv6 address."),
        entry: str = typer.Argument(..., help="Reverse DNS hostname."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_reverse_ipv6_set(server_id, ip, entry)
    except VultrClientError as e:
        fail("set IPv6 reverse DNS", e)
    finally:
        client.close()
    report_status(f"{ip}: reverse DNS set to {entry}", status)


@ipv6_app.command("reverse-delete")
def reverse_ipv6_delete(
        server_id: int = typer.Argument(..., help="Server SUBID."),
        ip: str = typer.Argument(..., help="IPv6 address."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    client = open_client(base_url)
    try:
        status = client.server_reverse_ipv6_delete(server_id, ip)
    except VultrClientError as e:
        fail("delete IPv6 reverse DNS", e)
    finally:
        client.close()
    report_status(f"{ip}: reverse DNS deleted", status)
