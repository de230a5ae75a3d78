"""DBE participation report endpoints."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from dbe_shared.models import FilterCriteria

from dbe_api.responses import wrap_response
from dbe_api.services import report_service

router = APIRouter(prefix="/reports", tags=["reports"])

SOURCE = "Supabase"


def report_criteria(
    start_date: str = Query("", description="Earliest award date (YYYY-MM-DD)"),
    end_date: str = Query("", description="Latest award date (YYYY-MM-DD)"),
    category: str = Query("", description="Subgrant category, e.g. Supplier"),
    certified: str = Query("", description="yes | no"),
) -> FilterCriteria:
    """Empty parameters are unset; invalid ones raise InvalidArgument (422)."""
    return FilterCriteria.from_form(
        start_date=start_date,
        end_date=end_date,
        category=category,
        certified=certified,
    )


@router.get("/stats")
async def participation_stats():
    data = await report_service.get_participation_stats()
    return wrap_response(data, source=SOURCE)


@router.get("/contracts")
async def report_contracts(criteria: FilterCriteria = Depends(report_criteria)):
    rows = await report_service.get_report_rows(criteria)
    return wrap_response(
        rows,
        total_count=len(rows),
        source=SOURCE,
        filters=criteria.model_dump(mode="json", exclude_none=True),
    )


@router.get("/contracts/export")
async def export_contracts(
    criteria: FilterCriteria = Depends(report_criteria),
    filename: str = Query("report.csv"),
):
    name = Path(filename).name
    payload = await report_service.export_report_csv(criteria, name)
    return StreamingResponse(
        iter([payload]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )
