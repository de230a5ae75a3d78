"""
transforms/grouping.py — Sum subgrant amounts by award year or category.

Works on a flat polars frame of subgrants built from the contract collection,
one row per subgrant:

    amount (Float64) | certified_dbe (Boolean) | category (String) | award_date (Date)

Usage:
    from dbe_reports.transforms.grouping import sum_by_key

    sum_by_key(contracts, "year")      # {"2022": 100.0, "2023": 50.0}
    sum_by_key(contracts, "category")  # {"Supplier": 100.0, "Unknown": 50.0}
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Literal

import polars as pl
import structlog

from dbe_shared.errors import InvalidArgument
from dbe_shared.models import Contract

log = structlog.get_logger(__name__)

GroupKey = Literal["year", "category"]

UNKNOWN_CATEGORY = "Unknown"

SUBGRANT_SCHEMA: dict[str, pl.DataType] = {
    "amount": pl.Float64,
    "certified_dbe": pl.Boolean,
    "category": pl.String,
    "award_date": pl.Date,
}


def subgrant_frame(contracts: Iterable[Contract]) -> pl.DataFrame:
    """Flatten every subgrant of every contract into one DataFrame."""
    subgrants = [s for contract in contracts for s in contract.subgrants]
    return pl.DataFrame(
        {
            "amount": [float(s.amount) for s in subgrants],
            "certified_dbe": [s.certified_dbe for s in subgrants],
            "category": [s.category for s in subgrants],
            "award_date": [s.award_date for s in subgrants],
        },
        schema=SUBGRANT_SCHEMA,
    )


def year_label() -> pl.Expr:
    return pl.col("award_date").dt.strftime("%Y")


def category_label() -> pl.Expr:
    category = pl.col("category")
    return (
        pl.when(category.is_null() | (category == ""))
        .then(pl.lit(UNKNOWN_CATEGORY))
        .otherwise(category)
    )


_LABELS: dict[str, Callable[[], pl.Expr]] = {
    "year": year_label,
    "category": category_label,
}


def sum_by_key(contracts: Iterable[Contract], key: GroupKey) -> dict[str, float]:
    """
    Sum subgrant amounts grouped by award year or category.

    Args:
        contracts: Contracts whose subgrants are grouped.
        key:       "year" (4-digit award year) or "category" (missing
                   categories are labelled "Unknown").

    Returns:
        Mapping of group label to summed amount, in first-seen order.

    Raises:
        InvalidArgument: for any other key.
    """
    if not isinstance(key, str) or key not in _LABELS:
        raise InvalidArgument(
            f"Unsupported grouping key: {key!r} — expected one of {sorted(_LABELS)}"
        )

    df = subgrant_frame(contracts)
    grouped = df.group_by(_LABELS[key]().alias("label"), maintain_order=True).agg(
        pl.col("amount").sum()
    )
    log.debug("amounts_grouped", key=key, subgrants=len(df), groups=len(grouped))
    return dict(zip(grouped["label"].to_list(), grouped["amount"].to_list()))
