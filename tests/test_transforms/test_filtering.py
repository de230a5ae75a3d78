"""
tests/test_transforms/test_filtering.py — Composite contract filter.

Tests cover:
  - Date bounds (inclusive, day granularity)
  - Category and certification EXISTS clauses
  - Contracts with no subgrants
  - Identity and idempotence
  - Fail-fast validation of raw criteria
"""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from dbe_shared.errors import InvalidArgument
from dbe_shared.models import CertificationStatus, FilterCriteria
from dbe_reports.transforms.filtering import filter_contracts


def _ids(contracts):
    return [c.id for c in contracts]


class TestDateClause:
    def test_bounds_are_inclusive(self, mixed_contracts):
        criteria = FilterCriteria(start_date=date(2021, 3, 15), end_date=date(2022, 7, 4))
        assert _ids(filter_contracts(mixed_contracts, criteria)) == ["a", "b"]

    def test_start_only(self, mixed_contracts):
        assert _ids(filter_contracts(mixed_contracts, {"start_date": "2022-01-01"})) == ["b", "c"]

    def test_end_only(self, mixed_contracts):
        assert _ids(filter_contracts(mixed_contracts, {"end_date": "2021-12-31"})) == ["a"]

    def test_uses_contract_award_date(self, mixed_contracts):
        # Contract "c" (2023) has a subgrant awarded in 2024; it must not match
        assert _ids(filter_contracts(mixed_contracts, {"start_date": "2024-01-01"})) == []


class TestCategoryClause:
    def test_scenario_supplier(self, scenario_contracts):
        assert _ids(filter_contracts(scenario_contracts, {"category": "Supplier"})) == ["c-1"]

    def test_any_subgrant_matches(self, mixed_contracts):
        assert _ids(filter_contracts(mixed_contracts, {"category": "Supplier"})) == ["a", "c"]

    def test_exact_match_only(self, mixed_contracts):
        assert filter_contracts(mixed_contracts, {"category": "supplier"}) == []

    def test_no_subgrants_fails_set_clause(self, mixed_contracts):
        assert "b" not in _ids(filter_contracts(mixed_contracts, {"category": "Subcontract"}))


class TestCertificationClause:
    def test_yes_requires_a_certified_subgrant(self, scenario_contracts):
        assert _ids(filter_contracts(scenario_contracts, {"certified": "yes"})) == ["c-1"]

    def test_no_requires_a_non_certified_subgrant(self, scenario_contracts):
        assert _ids(filter_contracts(scenario_contracts, {"certified": "no"})) == ["c-2"]

    def test_mixed_contract_matches_both(self, mixed_contracts):
        yes = filter_contracts(mixed_contracts, FilterCriteria(certified=CertificationStatus.YES))
        no = filter_contracts(mixed_contracts, FilterCriteria(certified=CertificationStatus.NO))
        assert _ids(yes) == ["a", "c"]
        assert _ids(no) == ["a"]

    def test_empty_contract_fails_either_status(self, mixed_contracts):
        for status in ("yes", "no"):
            assert "b" not in _ids(filter_contracts(mixed_contracts, {"certified": status}))


class TestCombined:
    def test_clauses_are_anded(self, mixed_contracts):
        criteria = {"start_date": "2023-01-01", "category": "Supplier", "certified": "yes"}
        assert _ids(filter_contracts(mixed_contracts, criteria)) == ["c"]

    def test_unset_criteria_is_identity(self, mixed_contracts):
        assert filter_contracts(mixed_contracts, FilterCriteria()) == mixed_contracts
        assert filter_contracts(mixed_contracts) == mixed_contracts
        assert filter_contracts(mixed_contracts, {"start_date": "", "category": ""}) == mixed_contracts

    def test_idempotent(self, mixed_contracts):
        criteria = {"category": "Supplier", "certified": "no"}
        once = filter_contracts(mixed_contracts, criteria)
        assert filter_contracts(once, criteria) == once

    def test_shares_elements_and_keeps_input(self, mixed_contracts):
        original = list(mixed_contracts)
        result = filter_contracts(mixed_contracts, {"category": "Supplier"})
        assert result[0] is mixed_contracts[0]
        assert result is not mixed_contracts
        assert mixed_contracts == original

    def test_empty_collection(self):
        assert filter_contracts([], {"category": "Supplier", "certified": "yes"}) == []


class TestValidation:
    def test_malformed_date_raises_before_filtering(self, mixed_contracts):
        with patch("dbe_reports.transforms.filtering.matches") as matches:
            with pytest.raises(InvalidArgument):
                filter_contracts(mixed_contracts, {"start_date": "01/02/2024"})
        matches.assert_not_called()

    def test_unknown_key_raises(self, scenario_contracts):
        with pytest.raises(InvalidArgument, match="startDate"):
            filter_contracts(scenario_contracts, {"startDate": "2030-01-01"})

    def test_inverted_range_raises(self, mixed_contracts):
        with pytest.raises(InvalidArgument):
            filter_contracts(mixed_contracts, {"start_date": "2024-01-01", "end_date": "2023-01-01"})
