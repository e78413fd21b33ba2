"""Flask CLI commands for FinanceTracker."""

from __future__ import annotations

from pathlib import Path

import click

from .errors import ValidationError, user_message


def _owner_id_for(email: str) -> str:
    from .extensions import get_context
    from .services.auth import get_user_by_email

    user = get_user_by_email(email, get_context().session_factory)
    if user is None:
        raise click.ClickException(f"No account found for {email}")
    return user.id


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("financetracker-export")
    @click.option("--email", required=True, help="Account whose transactions are exported")
    @click.option(
        "--output",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Destination CSV file (defaults to transactions_<date>.csv in the data dir)",
    )
    def financetracker_export(email: str, output: Path | None) -> None:
        """Export an account's transactions to CSV."""

        from .extensions import get_context
        from .services.export_csv import export_filename, export_transactions_csv

        context = get_context()
        owner_id = _owner_id_for(email)
        result = context.transactions.list(owner_id)
        if not result.ok:
            raise click.ClickException(user_message(result.kind, "fetch", result.code))
        target = output or Path(context.config.DATA_DIR) / export_filename()
        path = export_transactions_csv(transactions=result.value or [], output_path=target)
        click.echo(f"Exported {len(result.value or [])} transactions to {path}")

    @app.cli.command("financetracker-import")
    @click.option("--email", required=True, help="Account that receives the transactions")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def financetracker_import(email: str, path: Path) -> None:
        """Import transactions from a CSV file."""

        from .extensions import get_context
        from .services.import_csv import import_csv_file

        context = get_context()
        owner_id = _owner_id_for(email)
        rejected: list[list[str]] = []
        try:
            records = import_csv_file(path, rejected=rejected)
        except ValidationError as exc:
            messages = [message for errors in exc.errors.values() for message in errors]
            raise click.ClickException(" ".join(messages) or exc.message) from exc
        result = context.transactions.import_records(owner_id, records, malformed=rejected)
        if not result.ok:
            raise click.ClickException(user_message(result.kind, "add", result.code))
        summary = result.value
        click.echo(f"Imported {summary.created} transactions ({summary.skipped} skipped)")
