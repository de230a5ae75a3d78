"""
cli.py — Click CLI for participation stats and report exports.

Usage:
    dbe-reports stats --input contracts.json
    dbe-reports report --category Supplier --certified yes --output out/report.csv
    dbe-reports dump --output contracts.json

Without --input, contracts are fetched from Supabase.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import click
import structlog

from dbe_shared.config import settings
from dbe_shared.errors import InvalidArgument, ReportError
from dbe_shared.models import Contract, FilterCriteria, parse_contracts

from dbe_reports.exporters.tabular import FileSink, export_rows
from dbe_reports.reports.generator import DEFAULT_FILENAME, generate_report
from dbe_reports.reports.stats import build_participation_stats
from dbe_reports.sources.contracts import fetch_contracts
from dbe_reports.utils.logging import configure_logging

log = structlog.get_logger(__name__)


def load_contracts(input_path: Path | None) -> list[Contract]:
    """
    Read contracts from a JSON dump, or from Supabase when no path is given.

    The dump is either a list of contract rows or a {"data": [...]} wrapper
    around one, as saved from a Supabase response.
    """
    if input_path is None:
        return asyncio.run(fetch_contracts())

    try:
        payload: Any = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"{input_path} is not valid JSON: {exc}") from exc

    rows = payload.get("data") if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        raise InvalidArgument(f"{input_path} must contain a list of contracts")
    return parse_contracts(rows)


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
@click.option(
    "--log-format",
    default=settings.log_format,
    type=click.Choice(["json", "console"]),
    help="Log output format",
)
def main(log_level: str, log_format: str) -> None:
    """DBE participation statistics and contract reports."""
    configure_logging(log_level, log_format)


_input_option = click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON dump of contracts with subgrants (default: fetch from Supabase)",
)


@main.command()
@click.option(
    "--output",
    default="contracts.json",
    type=click.Path(dir_okay=False, path_type=Path),
    show_default=True,
)
def dump(output: Path) -> None:
    """Snapshot contracts from Supabase into a JSON file usable as --input."""
    try:
        contracts = asyncio.run(fetch_contracts())
    except ReportError as exc:
        raise click.ClickException(str(exc)) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps([c.to_db_row() for c in contracts], indent=2),
        encoding="utf-8",
    )
    click.echo(f"Wrote {len(contracts)} contracts to {output}")


@main.command()
@_input_option
def stats(input_path: Path | None) -> None:
    """Print participation statistics as JSON."""
    try:
        contracts = load_contracts(input_path)
    except ReportError as exc:
        raise click.ClickException(str(exc)) from exc

    result = build_participation_stats(contracts)
    click.echo(result.model_dump_json(indent=2))


@main.command()
@_input_option
@click.option("--start-date", default="", help="Earliest award date (YYYY-MM-DD)")
@click.option("--end-date", default="", help="Latest award date (YYYY-MM-DD)")
@click.option("--category", default="", help="Subgrant category, e.g. Supplier")
@click.option(
    "--certified",
    default="",
    type=click.Choice(["", "yes", "no"], case_sensitive=False),
    help="Require a certified (yes) or non-certified (no) subgrant",
)
@click.option(
    "--output",
    default=DEFAULT_FILENAME,
    type=click.Path(dir_okay=False, path_type=Path),
    show_default=True,
)
@click.option(
    "--quote-style",
    default=settings.export_quote_style,
    type=click.Choice(["necessary", "never", "always"]),
    help="'never' reproduces the legacy unquoted CSV",
)
def report(
    input_path: Path | None,
    start_date: str,
    end_date: str,
    category: str,
    certified: str,
    output: Path,
    quote_style: str,
) -> None:
    """Filter contracts and export the report as CSV."""
    try:
        # Validate filters before touching the contract store
        criteria = FilterCriteria.from_form(
            start_date=start_date,
            end_date=end_date,
            category=category,
            certified=certified,
        )
        contracts = load_contracts(input_path)
        rows = generate_report(contracts, criteria)
        export_rows(
            rows,
            output.name,
            sink=FileSink(output.parent),
            quote_style=quote_style,  # type: ignore[arg-type]
        )
    except ReportError as exc:
        raise click.ClickException(str(exc)) from exc

    log.info("report_exported", path=str(output), rows=len(rows))
    click.echo(f"Wrote {len(rows)} rows to {output}")


if __name__ == "__main__":
    main()
