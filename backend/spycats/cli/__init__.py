"""Flask CLI groups shipped with the API."""

from __future__ import annotations

from flask import Flask

from spycats.cli.seed import seed_cli

COMMAND_GROUPS = (seed_cli,)


def init_app(app: Flask) -> None:
    for group in COMMAND_GROUPS:
        app.cli.add_command(group)
