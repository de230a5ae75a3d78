"""
reports/generator.py — Filtered contract report and its CSV export.

Each report row is a projection of one contract onto six display columns:

    TAD Project # | Contract # | Prime Contractor | Amount | DBE % | Award Date

Usage:
    from dbe_reports.reports.generator import generate_report, export_report

    rows = generate_report(contracts, {"category": "Supplier", "certified": "yes"})
    export_report(contracts, {"start_date": "2024-01-01"}, "report.csv")
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dbe_shared.formatting import format_currency, format_date, format_percentage
from dbe_shared.models import Contract, FilterCriteria

from dbe_reports.exporters.tabular import BlobSink, export_rows
from dbe_reports.transforms.filtering import filter_contracts
from dbe_reports.utils.logging import get_logger

log = get_logger(__name__, report="contracts")

REPORT_COLUMNS: tuple[str, ...] = (
    "TAD Project #",
    "Contract #",
    "Prime Contractor",
    "Amount",
    "DBE %",
    "Award Date",
)

DEFAULT_FILENAME = "report.csv"


def contract_to_row(contract: Contract) -> dict[str, str | None]:
    values = (
        contract.tad_project_number,
        contract.contract_number,
        contract.prime_contractor,
        format_currency(contract.original_amount),
        format_percentage(contract.dbe_percentage),
        format_date(contract.award_date),
    )
    return dict(zip(REPORT_COLUMNS, values))


def build_report_rows(contracts: Iterable[Contract]) -> list[dict[str, str | None]]:
    return [contract_to_row(c) for c in contracts]


def generate_report(
    contracts: Iterable[Contract],
    criteria: FilterCriteria | Mapping[str, Any] | None = None,
) -> list[dict[str, str | None]]:
    """Filter contracts and project the matches into report rows."""
    rows = build_report_rows(filter_contracts(contracts, criteria))
    log.info("report_generated", rows=len(rows))
    return rows


def export_report(
    contracts: Iterable[Contract],
    criteria: FilterCriteria | Mapping[str, Any] | None = None,
    filename: str = DEFAULT_FILENAME,
    *,
    sink: BlobSink | None = None,
) -> None:
    """
    Generate the filtered report and save it as delimited text.

    Raises:
        InvalidArgument: malformed criteria.
        ExportFailure:   nothing matched, or the sink rejected the payload.
    """
    export_rows(generate_report(contracts, criteria), filename, sink=sink)
