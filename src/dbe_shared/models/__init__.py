"""
dbe_shared.models — Pydantic models for contracts, subgrants and report values.

These models are used by:
- dbe_reports: validate fetched rows and carry aggregation results
- dbe_api: serialize stats and report rows into API responses
"""

from dbe_shared.models.contracts import Contract, Subgrant, parse_contracts
from dbe_shared.models.reports import (
    AggregateResult,
    CertificationStatus,
    ChartSlice,
    FilterCriteria,
    ParticipationStats,
    TrendPoint,
)

__all__ = [
    "Contract",
    "Subgrant",
    "parse_contracts",
    "AggregateResult",
    "CertificationStatus",
    "ChartSlice",
    "FilterCriteria",
    "ParticipationStats",
    "TrendPoint",
]
