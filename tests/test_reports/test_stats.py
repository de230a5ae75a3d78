"""
tests/test_reports/test_stats.py — Chart-ready participation series.
"""

from __future__ import annotations

import pytest

from dbe_reports.reports.stats import (
    CERTIFIED_LABEL,
    NON_CERTIFIED_LABEL,
    build_participation_stats,
)


def test_scenario_series(scenario_contracts):
    stats = build_participation_stats(scenario_contracts)

    assert [(s.name, s.value) for s in stats.participation] == [
        (CERTIFIED_LABEL, 100.0),
        (NON_CERTIFIED_LABEL, 50.0),
    ]
    assert {s.name: s.value for s in stats.category_distribution} == {
        "Supplier": 1,
        "Manufacturer": 1,
    }
    assert [(p.year, p.amount) for p in stats.trends] == [("2022", 100.0), ("2023", 50.0)]
    assert stats.certified_percentage == pytest.approx(66.67, abs=0.01)


def test_trends_ascending(mixed_contracts):
    years = [p.year for p in build_participation_stats(mixed_contracts).trends]
    assert years == sorted(years, key=int)


def test_empty_collection_is_zero_state():
    stats = build_participation_stats([])
    assert [s.value for s in stats.participation] == [0.0, 0.0]
    assert stats.category_distribution == []
    assert stats.trends == []
    assert stats.certified_percentage == 0
