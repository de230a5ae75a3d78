"""
reports/stats.py — Chart-ready DBE participation statistics.

Produces three series from one aggregation pass:
  participation          — two slices, certified vs. non-certified amount
  category_distribution  — subgrant count per category
  trends                 — summed amount per award year, ascending
"""

from __future__ import annotations

from collections.abc import Iterable

from dbe_shared.models import ChartSlice, Contract, ParticipationStats, TrendPoint

from dbe_reports.transforms.aggregation import aggregate

CERTIFIED_LABEL = "DBE Participation"
NON_CERTIFIED_LABEL = "Non-DBE Participation"


def build_participation_stats(contracts: Iterable[Contract]) -> ParticipationStats:
    result = aggregate(contracts)
    return ParticipationStats(
        participation=[
            ChartSlice(name=CERTIFIED_LABEL, value=result.certified_amount),
            ChartSlice(name=NON_CERTIFIED_LABEL, value=result.non_certified_amount),
        ],
        category_distribution=[
            ChartSlice(name=name, value=count)
            for name, count in result.category_counts.items()
        ],
        trends=[
            TrendPoint(year=year, amount=amount)
            for year, amount in result.yearly_totals.items()
        ],
        certified_percentage=result.certified_percentage,
    )
