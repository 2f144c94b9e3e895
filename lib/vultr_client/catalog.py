from __future__ import annotations

from dataclasses import dataclass

from .transport import ResultShape


@dataclass(frozen=True)
class Operation:
    method: str
    path: str
    shape: ResultShape = ResultShape.PAYLOAD


def _get(path: str) -> Operation:
    return Operation("GET", path)


def _post(path: str) -> Operation:
    return Operation("POST", path)


def _code(path: str) -> Operation:
    return Operation("POST", path, ResultShape.STATUS_CODE)


OPERATIONS: dict[str, Operation] = {
    # account
    "account_info": _get("account/info"),
    "auth_info": _get("auth/info"),
    # images
    "os_list": _get("os/list"),
    "iso_list": _get("iso/list"),
    "snapshot_list": _get("snapshot/list"),
    "snapshot_create": _post("snapshot/create"),
    "snapshot_destroy": _code("snapshot/destroy"),
    # plans / regions
    "plans_list": _get("plans/list"),
    "plans_list_vc2": _get("plans/list_vc2"),
    "plans_list_vdc2": _get("plans/list_vdc2"),
    "regions_list": _get("regions/list"),
    "regions_availability": _get("regions/availability"),
    "regions_availability_vc2": _get("regions/availability_vc2"),
    "regions_availability_vdc2": _get("regions/availability_vdc2"),
    # startup scripts
    "startupscript_list": _get("startupscript/list"),
    "startupscript_create": _post("startupscript/create"),
    "startupscript_update": _code("startupscript/update"),
    "startupscript_destroy": _code("startupscript/destroy"),
    # servers
    "server_list": _get("server/list"),
    "server_create": _post("server/create"),
    "server_destroy": _code("server/destroy"),
    "server_reboot": _code("server/reboot"),
    "server_halt": _code("server/halt"),
    "server_start": _code("server/start"),
    "server_reinstall": _code("server/reinstall"),
    "server_label_set": _code("server/label_set"),
    "server_bandwidth": _get("server/bandwidth"),
    "server_restore_snapshot": _code("server/restore_snapshot"),
    "server_restore_backup": _code("server/restore_backup"),
    "server_list_ipv4": _get("server/list_ipv4"),
    "server_create_ipv4": _code("server/create_ipv4"),
    "server_destroy_ipv4": _code("server/destroy_ipv4"),
    "server_reverse_set_ipv4": _code("server/reverse_set_ipv4"),
    "server_reverse_default_ipv4": _code("server/reverse_default_ipv4"),
    "server_list_ipv6": _get("server/list_ipv6"),
    "server_reverse_set_ipv6": _code("server/reverse_set_ipv6"),
    "server_reverse_delete_ipv6": _code("server/reverse_delete_ipv6"),
    # ssh keys
    "sshkey_list": _get("sshkey/list"),
    "sshkey_create": _post("sshkey/create"),
    "sshkey_update": _code("sshkey/update"),
    "sshkey_destroy": _code("sshkey/destroy"),
}
