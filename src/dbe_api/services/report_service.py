"""Report data service: fetch once per request, then run the engine."""

from __future__ import annotations

from typing import Any

from dbe_shared.models import FilterCriteria

from dbe_reports.exporters.tabular import MemorySink
from dbe_reports.reports.generator import export_report, generate_report
from dbe_reports.reports.stats import build_participation_stats
from dbe_reports.sources.contracts import fetch_contracts


async def get_participation_stats() -> dict[str, Any]:
    contracts = await fetch_contracts()
    return build_participation_stats(contracts).model_dump()


async def get_report_rows(criteria: FilterCriteria) -> list[dict[str, Any]]:
    contracts = await fetch_contracts()
    return generate_report(contracts, criteria)


async def export_report_csv(criteria: FilterCriteria, filename: str) -> bytes:
    """Return the exported CSV payload; raises ExportFailure if nothing matched."""
    contracts = await fetch_contracts()
    sink = MemorySink()
    export_report(contracts, criteria, filename, sink=sink)
    return sink.files[filename]
