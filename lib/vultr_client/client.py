from __future__ import annotations

import re
from typing import Any, Mapping

from .catalog import OPERATIONS
from .config_types import ClientConfig
from .errors import ApiError, AuthError, AvailabilityError, MissingParameterError
from .oslist import filter_os_list
from .transport import Params, Transport

SERVER_CREATE_REQUIRED = ("DCID", "VPSPLANID", "OSID")

_AVAILABILITY_OPS = {
    "": "regions_availability",
    "vc2": "regions_availability_vc2",
    "vdc2": "regions_availability_vdc2",
}


def sanitize_restore_id(value: str) -> str:
    return re.sub(r"[^a-f0-9]", "", str(value))


def _extract_id(data: Any, key: str, what: str) -> int:
    if not isinstance(data, dict) or data.get(key) in (None, ""):
        raise ApiError(500, f"{what} returned no {key}", None)
    try:
        return int(data[key])
    except (TypeError, ValueError):
        raise ApiError(500, f"{what} returned a non-numeric {key}", str(data[key])) from None


def _by_server(data: Any, server_id: int) -> Any | None:
    if not isinstance(data, dict):
        return None
    if str(server_id) in data:
        return data[str(server_id)]
    return data.get(server_id)


class VultrClient:
    def __init__(self, cfg: ClientConfig):
        self._t = Transport(cfg)

    def __enter__(self) -> "VultrClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        # Connections are opened and closed per request.
        return None

    def call(self, name: str, params: Params | None = None) -> Any:
        """Run a catalog operation by name."""
        op = OPERATIONS[name]
        return self._t.dispatch(op.method, op.path, params, shape=op.shape)

    # --- account ---
    def account_info(self) -> dict[str, Any]:
        return self.call("account_info")

    def auth_info(self) -> dict[str, Any]:
        return self.call("auth_info")

    def is_connected(self) -> bool:
        try:
            self.auth_info()
        except AuthError:
            return False
        return True

    # --- images ---
    def os_list(self, *, family: str | None = None, arch: int | None = None) -> Any:
        return filter_os_list(self.call("os_list"), family=family, arch=arch)

    def iso_list(self) -> Any:
        return self.call("iso_list")

    def snapshot_list(self) -> Any:
        return self.call("snapshot_list")

    def snapshot_create(self, server_id: int, *, description: str | None = None) -> Any:
        return self.call("snapshot_create", {"SUBID": int(server_id), "description": description})

    def snapshot_destroy(self, snapshot_id: str) -> int:
        return self.call("snapshot_destroy", {"SNAPSHOTID": snapshot_id})

    # --- plans / regions ---
    def plans_list(self) -> Any:
        return self.call("plans_list")

    def plans_list_vc2(self) -> Any:
        return self.call("plans_list_vc2")

    def plans_list_vdc2(self) -> Any:
        return self.call("plans_list_vdc2")

    def regions_list(self) -> Any:
        return self.call("regions_list")

    def regions_availability(self, region_id: int, *, plan_type: str = "") -> list[int]:
        """Plan IDs offered in a region; plan_type is "", "vc2" or "vdc2"."""
        try:
            name = _AVAILABILITY_OPS[plan_type]
        except KeyError:
            raise ValueError(f"Unknown plan type: {plan_type!r}") from None
        return self.call(name, {"DCID": int(region_id)})

    def regions_availability_vc2(self, region_id: int) -> list[int]:
        return self.regions_availability(region_id, plan_type="vc2")

    def regions_availability_vdc2(self, region_id: int) -> list[int]:
        return self.regions_availability(region_id, plan_type="vdc2")

    def server_available(self, region_id: int, plan_id: int) -> bool:
        availability = self.regions_availability(int(region_id)) or []
        if int(plan_id) not in {int(p) for p in availability}:
            raise AvailabilityError(int(region_id), int(plan_id))
        return True

    # --- startup scripts ---
    def startupscript_list(self) -> Any:
        return self.call("startupscript_list")

    def startupscript_create(self, name: str, script: str) -> int:
        data = self.call("startupscript_create", {"name": name, "script": script})
        return _extract_id(data, "SCRIPTID", "startup script create")

    def startupscript_update(self, script_id: int, name: str, script: str) -> int:
        return self.call(
            "startupscript_update",
            {"SCRIPTID": int(script_id), "name": name, "script": script},
        )

    def startupscript_destroy(self, script_id: int) -> int:
        return self.call("startupscript_destroy", {"SCRIPTID": int(script_id)})

    # --- servers ---
    def server_list(self) -> Any:
        return self.call("server_list")

    def server_create(self, config: Mapping[str, Any]) -> int:
        missing = [key for key in SERVER_CREATE_REQUIRED if config.get(key) in (None, "")]
        if missing:
            raise MissingParameterError(f"server create requires {', '.join(missing)}")
        self.server_available(int(config["DCID"]), int(config["VPSPLANID"]))
        data = self.call("server_create", dict(config))
        return _extract_id(data, "SUBID", "server create")

    def server_destroy(self, server_id: int) -> int:
        return self.call("server_destroy", {"SUBID": int(server_id)})

    def server_reboot(self, server_id: int) -> int:
        return self.call("server_reboot", {"SUBID": int(server_id)})

    def server_halt(self, server_id: int) -> int:
        return self.call("server_halt", {"SUBID": int(server_id)})

    def server_start(self, server_id: int) -> int:
        return self.call("server_start", {"SUBID": int(server_id)})

    def server_reinstall(self, server_id: int) -> int:
        return self.call("server_reinstall", {"SUBID": int(server_id)})

    def server_label_set(self, server_id: int, label: str) -> int:
        return self.call("server_label_set", {"SUBID": int(server_id), "label": label})

    def server_bandwidth(self, server_id: int) -> Any:
        return self.call("server_bandwidth", {"SUBID": int(server_id)})

    def server_restore_snapshot(self, server_id: int, snapshot_id: str) -> int:
        return self.call(
            "server_restore_snapshot",
            {"SUBID": int(server_id), "SNAPSHOTID": sanitize_restore_id(snapshot_id)},
        )

    def server_restore_backup(self, server_id: int, backup_id: str) -> int:
        return self.call("server_restore_backup", {"SUBID": int(server_id), "BACKUPID": backup_id})

    def server_ipv4_list(self, server_id: int) -> Any | None:
        data = self.call("server_list_ipv4", {"SUBID": int(server_id)})
        return _by_server(data, int(server_id))

    def server_ipv4_create(self, server_id: int, *, reboot: bool = True) -> int:
        return self.call(
            "server_create_ipv4",
            {"SUBID": int(server_id), "reboot": "yes" if reboot else "no"},
        )

    def server_ipv4_destroy(self, server_id: int, ip: str) -> int:
        return self.call("server_destroy_ipv4", {"SUBID": int(server_id), "ip": ip})

    def server_reverse_ipv4_set(self, ip: str, entry: str) -> int:
        return self.call("server_reverse_set_ipv4", {"ip": ip, "entry": entry})

    def server_reverse_ipv4_default(self, server_id: int, ip: str) -> int:
        return self.call("server_reverse_default_ipv4", {"SUBID": int(server_id), "ip": ip})

    def server_ipv6_list(self, server_id: int) -> Any | None:
        data = self.call("server_list_ipv6", {"SUBID": int(server_id)})
        return _by_server(data, int(server_id))

    def server_reverse_ipv6_set(self, server_id: int, ip: str, entry: str) -> int:
        return self.call(
            "server_reverse_set_ipv6",
            {"SUBID": int(server_id), "ip": ip, "entry": entry},
        )

    def server_reverse_ipv6_delete(self, server_id: int, ip: str) -> int:
        return self.call("server_reverse_delete_ipv6", {"SUBID": int(server_id), "ip": ip})

    # --- ssh keys ---
    def sshkey_list(self) -> Any:
        return self.call("sshkey_list")

    def sshkey_create(self, name: str, ssh_key: str) -> Any:
        return self.call("sshkey_create", {"name": name, "ssh_key": ssh_key})

    def sshkey_update(self, key_id: str, name: str, ssh_key: str) -> int:
        return self.call("sshkey_update", {"SSHKEYID": key_id, "name": name, "ssh_key": ssh_key})

    def sshkey_destroy(self, key_id: str) -> int:
        return self.call("sshkey_destroy", {"SSHKEYID": key_id})
