"""
transforms/filtering.py — Select contracts matching report filter criteria.

All clauses are ANDed:
  - award date within [start_date, end_date] (either bound may be unset)
  - category: some subgrant has exactly that category
  - certified: some subgrant is certified ("yes") / not certified ("no")

Usage:
    from dbe_reports.transforms.filtering import filter_contracts

    filter_contracts(contracts, {"start_date": "2024-01-01", "certified": "yes"})
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from dbe_shared.models import CertificationStatus, Contract, FilterCriteria

log = structlog.get_logger(__name__)


def coerce_criteria(
    criteria: FilterCriteria | Mapping[str, Any] | None,
) -> FilterCriteria:
    """Accept a FilterCriteria or raw form values; raises InvalidArgument."""
    if criteria is None:
        return FilterCriteria()
    if isinstance(criteria, FilterCriteria):
        return criteria
    return FilterCriteria.from_form(**criteria)


def _matches_date(contract: Contract, criteria: FilterCriteria) -> bool:
    if criteria.start_date and contract.award_date < criteria.start_date:
        return False
    if criteria.end_date and contract.award_date > criteria.end_date:
        return False
    return True


def _matches_category(contract: Contract, criteria: FilterCriteria) -> bool:
    if criteria.category is None:
        return True
    return any(s.category == criteria.category for s in contract.subgrants)


def _matches_certification(contract: Contract, criteria: FilterCriteria) -> bool:
    if criteria.certified is None:
        return True
    wanted = criteria.certified is CertificationStatus.YES
    return any(s.certified_dbe == wanted for s in contract.subgrants)


def matches(contract: Contract, criteria: FilterCriteria) -> bool:
    return (
        _matches_date(contract, criteria)
        and _matches_category(contract, criteria)
        and _matches_certification(contract, criteria)
    )


def filter_contracts(
    contracts: Iterable[Contract],
    criteria: FilterCriteria | Mapping[str, Any] | None = None,
) -> list[Contract]:
    """
    Return the contracts matching criteria, in their original order.

    Criteria are validated before any contract is inspected, so a malformed
    date bound raises InvalidArgument without partial results. Matching
    contracts are returned as-is (not copied).
    """
    parsed = coerce_criteria(criteria)
    contracts = list(contracts)

    if parsed.is_unset:
        return contracts

    matched = [c for c in contracts if matches(c, parsed)]
    log.debug(
        "contracts_filtered",
        before=len(contracts),
        after=len(matched),
        criteria=parsed.model_dump(mode="json", exclude_none=True),
    )
    return matched
