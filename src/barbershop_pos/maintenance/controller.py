from __future__ import annotations

import click
from flask import Flask

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.cli.command("run-maintenance")
    def run_maintenance():
        """Close yesterday's open shifts and clear away/suspended flags."""
        report = container.maintenance_service.run_daily()
        click.echo(
            f"OK: {report.swept_date.isoformat()} -> "
            f"{report.shifts_closed} shift(s) closed, {report.users_reset} user(s) reset"
        )
