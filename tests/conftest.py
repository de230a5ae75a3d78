"""
tests/conftest.py — Shared fixtures and record builders.

Provides:
  make_subgrant() / make_contract_row()  — raw rows shaped like Supabase output
  make_supabase()                        — chainable MagicMock Supabase client
  scenario_contracts                     — two-contract reference collection
  api_client                             — FastAPI TestClient
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from dbe_shared.models import Contract, parse_contracts


# ---------------------------------------------------------------------------
# Row builders
# ---------------------------------------------------------------------------

def make_subgrant(
    amount: float = 100,
    certified: bool = True,
    category: str | None = "Supplier",
    award_date: str = "2022-05-01",
    **extra: Any,
) -> dict[str, Any]:
    row = {
        "id": extra.pop("id", None),
        "dbe_firm_name": "Volunteer Paving LLC",
        "naics_code": "237310",
        "amount": amount,
        "certified_dbe": certified,
        "contract_type": category,
        "award_date": award_date,
    }
    row.update(extra)
    return row


def make_contract_row(
    award_date: str = "2022-05-01",
    subgrants: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    row = {
        "id": extra.pop("id", "c-1"),
        "tad_project_number": "TAD-100",
        "contract_number": "CNT-001",
        "prime_contractor": "Acme Construction",
        "original_amount": 250000,
        "award_date": award_date,
        "dbe_percentage": 12.5,
        "subgrants": subgrants if subgrants is not None else [],
    }
    row.update(extra)
    return row


def make_contracts(*rows: dict[str, Any]) -> list[Contract]:
    return parse_contracts(list(rows))


# ---------------------------------------------------------------------------
# Supabase client mock
# ---------------------------------------------------------------------------

def make_supabase(data: list[dict[str, Any]] | None = None, error: Exception | None = None):
    """
    A MagicMock simulating client.table(...).select(...).execute().

    error, when given, is raised by execute().
    """
    client = MagicMock()
    execute = client.table.return_value.select.return_value.execute
    if error is not None:
        execute.side_effect = error
    else:
        execute.return_value = MagicMock(data=data or [])
    return client


# ---------------------------------------------------------------------------
# Reference collections
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_rows() -> list[dict[str, Any]]:
    return [
        make_contract_row(
            id="c-1",
            award_date="2022-05-01",
            subgrants=[make_subgrant(amount=100, certified=True, category="Supplier")],
        ),
        make_contract_row(
            id="c-2",
            contract_number="CNT-002",
            award_date="2023-01-10",
            subgrants=[
                make_subgrant(
                    amount=50,
                    certified=False,
                    category="Manufacturer",
                    award_date="2023-01-10",
                )
            ],
        ),
    ]


@pytest.fixture
def scenario_contracts(scenario_rows) -> list[Contract]:
    return parse_contracts(scenario_rows)


@pytest.fixture
def mixed_contracts() -> list[Contract]:
    """Contracts across three years, with an empty and an uncategorized one."""
    return make_contracts(
        make_contract_row(
            id="a",
            award_date="2021-03-15",
            subgrants=[
                make_subgrant(amount=200, certified=True, category="Subcontract", award_date="2021-03-20"),
                make_subgrant(amount=300, certified=False, category="Supplier", award_date="2021-04-01"),
            ],
        ),
        make_contract_row(id="b", award_date="2022-07-04", subgrants=[]),
        make_contract_row(
            id="c",
            award_date="2023-11-30",
            subgrants=[
                make_subgrant(amount=125.5, certified=True, category=None, award_date="2023-12-01"),
                make_subgrant(amount=74.5, certified=True, category="Supplier", award_date="2024-01-02"),
            ],
        ),
    )


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client() -> TestClient:
    from dbe_api.app import create_app

    return TestClient(create_app())
