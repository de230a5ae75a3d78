"""
transforms/aggregation.py — DBE participation totals for a contract collection.

Two deliberately separate group-bys live here and in grouping.py:

  count_by_category()  — histogram: number of subgrants per category
  sum_by_key()         — (grouping.py) summed amounts per year or category

Usage:
    from dbe_reports.transforms.aggregation import aggregate

    result = aggregate(contracts)
    result.total_amount, result.certified_percentage, result.yearly_totals
"""

from __future__ import annotations

from collections.abc import Iterable

import polars as pl
import structlog

from dbe_shared.models import AggregateResult, Contract

from dbe_reports.transforms.grouping import subgrant_frame

log = structlog.get_logger(__name__)


def certified_percentage(certified_amount: float, total_amount: float) -> float:
    """
    Certified share of the total, as a percentage.

    Returns exactly 0 when total_amount is 0.
    """
    if total_amount == 0:
        return 0.0
    return certified_amount / total_amount * 100


def _category_counts(df: pl.DataFrame) -> dict[str, int]:
    # Subgrants without a category are left out of the histogram
    counts = (
        df.filter(pl.col("category").is_not_null() & (pl.col("category") != ""))
        .group_by("category", maintain_order=True)
        .agg(pl.len().alias("count"))
    )
    return dict(zip(counts["category"].to_list(), counts["count"].to_list()))


def _yearly_totals(df: pl.DataFrame) -> dict[str, float]:
    trend = (
        df.group_by(pl.col("award_date").dt.year().alias("year"))
        .agg(pl.col("amount").sum())
        .sort("year")
    )
    return {
        f"{year:04d}": amount
        for year, amount in zip(trend["year"].to_list(), trend["amount"].to_list())
    }


def count_by_category(contracts: Iterable[Contract]) -> dict[str, int]:
    """Number of subgrants per category, skipping subgrants with no category."""
    return _category_counts(subgrant_frame(contracts))


def aggregate(contracts: Iterable[Contract]) -> AggregateResult:
    """
    Compute participation totals over every subgrant of every contract.

    Args:
        contracts: Contract snapshot; not mutated.

    Returns:
        A new AggregateResult. yearly_totals is ordered ascending by year.
    """
    df = subgrant_frame(contracts)

    sums = df.select(
        pl.col("amount").sum().alias("total"),
        pl.col("amount").filter(pl.col("certified_dbe")).sum().alias("certified"),
    )
    total = float(sums["total"][0] or 0.0)
    certified = float(sums["certified"][0] or 0.0)

    result = AggregateResult(
        total_amount=total,
        certified_amount=certified,
        non_certified_amount=total - certified,
        certified_percentage=certified_percentage(certified, total),
        category_counts=_category_counts(df),
        yearly_totals=_yearly_totals(df),
    )
    log.debug(
        "participation_aggregated",
        subgrants=len(df),
        total_amount=total,
        certified_amount=certified,
    )
    return result
