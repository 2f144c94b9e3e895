from __future__ import annotations

import typer

from .commands import (
    account_cmd,
    images_cmd,
    plans_cmd,
    regions_cmd,
    scripts_cmd,
    servers_cmd,
    settings_cmd,
    snapshots_cmd,
    sshkeys_cmd,
)
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="vultr",
        help="Vultr API command line client",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.add_typer(account_cmd.app, name="account")
    app.add_typer(images_cmd.os_app, name="os")
    app.add_typer(images_cmd.iso_app, name="iso")
    app.add_typer(plans_cmd.app, name="plans")
    app.add_typer(regions_cmd.app, name="regions")
    app.add_typer(servers_cmd.app, name="servers")
    app.add_typer(snapshots_cmd.app, name="snapshots")
    app.add_typer(scripts_cmd.app, name="scripts")
    app.add_typer(sshkeys_cmd.app, name="sshkeys")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
