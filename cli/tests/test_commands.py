from __future__ import annotations

import typer
from typer.testing import CliRunner
from vultr_client import AvailabilityError, ConfigError

from vultr_cli import config, main
from vultr_cli.commands import _shared

runner = CliRunner()


class _FakeClient:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.status = 200
        self.connected = True

    def server_list(self) -> dict:
        return {"576965": {"SUBID": "576965", "label": "web", "main_ip": "203.0.113.10", "status": "active"}}

    def server_create(self, cfg: dict) -> int:
        self.calls.append(("create", cfg))
        if cfg["VPSPLANID"] == 999:
            raise AvailabilityError(cfg["DCID"], cfg["VPSPLANID"])
        return 1312965

    def server_reboot(self, server_id: int) -> int:
        self.calls.append(("reboot", server_id))
        return self.status

    def server_destroy(self, server_id: int) -> int:
        self.calls.append(("destroy", server_id))
        return self.status

    def os_list(self, *, family=None, arch=None) -> dict:
        self.calls.append(("os_list", family, arch))
        return {"215": {"OSID": 215, "name": "Ubuntu", "arch": "x64", "family": "ubuntu"}}

    def is_connected(self) -> bool:
        return self.connected

    def close(self) -> None:
        return None


def _patch_client(monkeypatch, client: _FakeClient) -> None:
    monkeypatch.setattr(_shared, "make_client", lambda *_args, **_kwargs: client)


def test_help_lists_command_groups() -> None:
    result = runner.invoke(main._build_app(), ["--help"])
    assert result.exit_code == 0
    for group in ("servers", "snapshots", "sshkeys", "scripts", "regions", "plans", "settings"):
        assert group in result.output


def test_servers_list_table(monkeypatch) -> None:
    _patch_client(monkeypatch, _FakeClient())

    result = runner.invoke(main.app, ["servers", "list"])

    assert result.exit_code == 0
    assert "576965" in result.output
    assert "web" in result.output


def test_servers_list_json(monkeypatch) -> None:
    _patch_client(monkeypatch, _FakeClient())

    result = runner.invoke(main.app, ["servers", "list", "--json"])

    assert result.exit_code == 0
    assert '"main_ip": "203.0.113.10"' in result.output


def test_servers_create_builds_config(monkeypatch) -> None:
    client = _FakeClient()
    _patch_client(monkeypatch, client)

    result = runner.invoke(
        main.app,
        ["servers", "create", "--region", "1", "--plan", "201", "--os", "127", "--label", "web", "--ipv6"],
    )

    assert result.exit_code == 0
    assert "1312965" in result.output
    assert client.calls == [
        ("create", {"DCID": 1, "VPSPLANID": 201, "OSID": 127, "label": "web", "enable_ipv6": "yes"}),
    ]


def test_servers_create_unavailable_plan(monkeypatch) -> None:
    _patch_client(monkeypatch, _FakeClient())

    result = runner.invoke(main.app, ["servers", "create", "--region", "1", "--plan", "999", "--os", "127"])

    assert result.exit_code == 2
    assert "not available" in result.output


def test_reboot_reports_error_status(monkeypatch) -> None:
    client = _FakeClient()
    client.status = 503
    _patch_client(monkeypatch, client)

    result = runner.invoke(main.app, ["servers", "reboot", "42"])

    assert result.exit_code == 2
    assert "HTTP 503" in result.output
    assert client.calls == [("reboot", 42)]


def test_destroy_requires_confirmation(monkeypatch) -> None:
    client = _FakeClient()
    _patch_client(monkeypatch, client)
    monkeypatch.setattr(typer, "confirm", lambda *_args, **_kwargs: False)

    result = runner.invoke(main.app, ["servers", "destroy", "42"])

    assert result.exit_code == 0
    assert client.calls == []


def test_destroy_skips_prompt_with_yes(monkeypatch) -> None:
    client = _FakeClient()
    _patch_client(monkeypatch, client)
    monkeypatch.setattr(typer, "confirm", lambda *_args, **_kwargs: (_ for _ in ()).throw(RuntimeError("prompted")))

    result = runner.invoke(main.app, ["servers", "destroy", "42", "--yes"])

    assert result.exit_code == 0
    assert client.calls == [("destroy", 42)]


def test_os_list_passes_filters(monkeypatch) -> None:
    client = _FakeClient()
    _patch_client(monkeypatch, client)

    result = runner.invoke(main.app, ["os", "list", "--family", "ubuntu", "--arch", "64"])

    assert result.exit_code == 0
    assert client.calls == [("os_list", "ubuntu", 64)]


def test_os_list_rejects_bad_arch(monkeypatch) -> None:
    client = _FakeClient()
    _patch_client(monkeypatch, client)

    result = runner.invoke(main.app, ["os", "list", "--arch", "16"])

    assert result.exit_code == 2
    assert client.calls == []


def test_account_check_invalid_key(monkeypatch) -> None:
    client = _FakeClient()
    client.connected = False
    _patch_client(monkeypatch, client)

    result = runner.invoke(main.app, ["account", "check"])

    assert result.exit_code == 1
    assert "Invalid API key" in result.output


def test_missing_token_exits(monkeypatch) -> None:
    def _no_token(*_args, **_kwargs):
        raise ConfigError("API key is not set.")

    monkeypatch.setattr(_shared, "make_client", _no_token)

    result = runner.invoke(main.app, ["servers", "list"])

    assert result.exit_code == 2
    assert "API key is not set" in result.output


def test_settings_set_insecure(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _name: str(tmp_path))

    result = runner.invoke(main.app, ["settings", "set", "--insecure", "--timeout", "12"])

    assert result.exit_code == 0
    stored = config.load_stored_config()
    assert stored.verify_tls is False
    assert stored.timeout_s == 12.0
