"""Flask CLI commands for the finance tracker."""

from __future__ import annotations

import click
from flask import current_app


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("finance-init-db")
    def finance_init_db() -> None:
        """Create database tables if they do not exist."""

        from .infra.database import init_database

        init_database(current_app.extensions["finance_tracker"]["engine"])
        click.echo("Database schema is up to date.")

    @app.cli.command("finance-seed-defaults")
    def finance_seed_defaults() -> None:
        """Insert any missing default categories."""

        from .extensions import get_store
        from .services.categories import seed_default_categories

        inserted = seed_default_categories(get_store())
        click.echo(f"Inserted {len(inserted)} default categories.")
        for category in inserted:
            click.echo(f"  - {category.name}")
