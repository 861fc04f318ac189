"""``flask seed``: load development fixtures into the agency database."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from spycats.core.extensions import db
from spycats.seeds import seed_data

log = logging.getLogger(__name__)


def _print_report(report: seed_data.SeedReport) -> None:
    click.echo("Seed summary:")
    rows = report.rows()
    if not rows:
        click.echo("  (nothing to do)")
        return
    width = max(len(table) for table, _, _ in rows)
    for table, created, existing in rows:
        click.echo(f"  {table:<{width}}  created={created:>2}  existing={existing:>2}")


def _seed(only: str | None) -> seed_data.SeedReport:
    """Run the pipeline (or one seeder) and roll back on database errors."""
    session = db.session
    try:
        if only is None:
            return seed_data.run_all(session)
        report = seed_data.SeedReport()
        dict(seed_data.SEEDERS)[only](session, report)
        session.commit()
        return report
    except SQLAlchemyError as exc:
        session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    except RuntimeError as exc:
        session.rollback()
        raise click.ClickException(str(exc)) from exc


@click.group("seed")
@click.option("-v", "--verbose", is_flag=True, help="Log each seeder as it runs.")
def seed_cli(verbose: bool) -> None:
    """Development fixtures: users, cats and missions."""
    logging.getLogger(seed_data.__name__).setLevel(logging.DEBUG if verbose else logging.INFO)


@seed_cli.command("run")
@click.option(
    "--only",
    type=click.Choice([name for name, _ in seed_data.SEEDERS]),
    default=None,
    help="Seed a single table group instead of all of them.",
)
@with_appcontext
def run_command(only: str | None) -> None:
    """Insert missing fixtures; rows that already exist are left alone."""
    _print_report(_seed(only))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping tables.")
@with_appcontext
def fresh_command(yes: bool) -> None:
    """Drop every table, recreate the schema and seed it."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError("'flask seed fresh' only runs in development or tests.")
    if not yes:
        click.confirm("Drop all spy-cats tables and reseed?", abort=True)

    db.session.remove()
    log.info("dropping and recreating schema")
    db.drop_all()
    db.create_all()
    _print_report(_seed(None))
