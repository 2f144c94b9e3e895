from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_stored_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/vultr/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        token: str = typer.Option(..., "--token", prompt="API key", hide_input=True, help="Vultr API key."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override API base URL."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.auth.token = token.strip()
    if not cfg.auth.token:
        console.err("API key cannot be empty.")
        raise typer.Exit(code=2)
    if base_url:
        cfg.base_url = normalize_base_url(base_url)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_stored_config()
    token_state = "(set)" if (cfg.auth.token or "").strip() else "(empty)"
    console.console.print(
        f"base_url={cfg.base_url} timeout_s={cfg.timeout_s} verify_tls={cfg.verify_tls} token={token_state}"
    )


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        token: str | None = typer.Option(None, "--token", help="Set API key."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds."),
        insecure: bool | None = typer.Option(
            None,
            "--insecure/--secure",
            help="Disable TLS certificate verification (test endpoints only).",
        ),
):
    cfg = load_stored_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url) or cfg.base_url
    if token is not None:
        cfg.auth.token = token.strip()
    if timeout_s is not None:
        if timeout_s <= 0:
            console.err("--timeout must be > 0.")
            raise typer.Exit(code=2)
        cfg.timeout_s = timeout_s
    if insecure is not None:
        cfg.verify_tls = not insecure
        if insecure:
            console.warn("TLS certificate verification disabled.")
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
