from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir
from vultr_client.config_types import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S

APP_NAME = "vultr"
CONFIG_FILENAME = "config.toml"
ENV_API_KEY = "VULTR_API_KEY"
ENV_BASE_URL = "VULTR_BASE_URL"


@dataclass
class AuthConfig:
    token: str = ""


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig
    timeout_s: float = DEFAULT_TIMEOUT_S
    verify_tls: bool = True


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(base_url=DEFAULT_BASE_URL, auth=AuthConfig(token=""))


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    lowered = value.lower()
    if not (lowered.startswith("http://") or lowered.startswith("https://")):
        host = value.split("/", 1)[0].split(":", 1)[0].lower()
        scheme = "http://" if host in {"localhost", "127.0.0.1", "0.0.0.0"} else "https://"
        value = f"{scheme}{value}"
    # API paths are appended directly to the base URL.
    return value.rstrip("/") + "/"


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "timeout_s": float(cfg.timeout_s),
        "verify_tls": bool(cfg.verify_tls),
        "auth": {"token": cfg.auth.token},
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""))
    if base_url:
        cfg.base_url = base_url
    timeout = data.get("timeout_s")
    if timeout is not None:
        try:
            cfg.timeout_s = float(timeout)
        except (TypeError, ValueError):
            pass
    verify = data.get("verify_tls")
    if isinstance(verify, bool):
        cfg.verify_tls = verify
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth.token = str(auth_raw.get("token") or "")
    return cfg


def apply_env(cfg: AppConfig) -> AppConfig:
    token = os.getenv(ENV_API_KEY, "").strip()
    base_url = normalize_base_url(os.getenv(ENV_BASE_URL, ""))
    return AppConfig(
        base_url=base_url or cfg.base_url,
        auth=AuthConfig(token=token or cfg.auth.token),
        timeout_s=cfg.timeout_s,
        verify_tls=cfg.verify_tls,
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        cfg = from_toml(data)
    except FileNotFoundError:
        cfg = default_config()
    return apply_env(cfg)


def load_stored_config() -> AppConfig:
    """Config file contents without environment overrides."""
    try:
        with open(config_path(), "rb") as f:
            return from_toml(tomllib.load(f))
    except FileNotFoundError:
        return default_config()


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
