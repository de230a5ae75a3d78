"""
models/contracts.py — Pydantic models for the contracts and subgrants tables.

Rows come from Supabase as a contract with its subgrants embedded:

    supabase.table("contracts").select("*, subgrants (id, dbe_firm_name, ...)")

parse_contracts() is the ingestion boundary: every row is validated here so
that malformed records are rejected before they can reach aggregation.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from dbe_shared.errors import InvalidArgument


class Subgrant(BaseModel):
    """Matches a subgrants table row."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | int | None = None
    dbe_firm_name: str | None = None
    naics_code: str | None = None
    amount: Decimal = Field(ge=0)
    certified_dbe: bool = False
    # Stored as contract_type in the database
    category: str | None = Field(
        default=None,
        validation_alias=AliasChoices("category", "contract_type"),
    )
    award_date: date

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("certified_dbe", mode="before")
    @classmethod
    def null_is_not_certified(cls, v: Any) -> Any:
        return False if v is None else v


class Contract(BaseModel):
    """Matches a contracts table row with its embedded subgrants."""

    model_config = ConfigDict(frozen=True)

    id: str | int | None = None
    tad_project_number: str | None = None
    contract_number: str | None = None
    prime_contractor: str | None = None
    original_amount: Decimal = Field(default=Decimal("0"), ge=0)
    award_date: date
    dbe_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    subgrants: list[Subgrant] = Field(default_factory=list)

    @field_validator("subgrants", mode="before")
    @classmethod
    def null_subgrants_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("original_amount", "dbe_percentage", mode="before")
    @classmethod
    def null_amount_is_zero(cls, v: Any) -> Any:
        return Decimal("0") if v is None else v

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Contract":
        return cls.model_validate(row)

    def to_db_row(self) -> dict[str, Any]:
        """Inverse of from_db_row, JSON-serializable."""
        return {
            "id": self.id,
            "tad_project_number": self.tad_project_number,
            "contract_number": self.contract_number,
            "prime_contractor": self.prime_contractor,
            "original_amount": float(self.original_amount),
            "award_date": self.award_date.isoformat(),
            "dbe_percentage": float(self.dbe_percentage),
            "subgrants": [
                {
                    "id": s.id,
                    "dbe_firm_name": s.dbe_firm_name,
                    "naics_code": s.naics_code,
                    "amount": float(s.amount),
                    "certified_dbe": s.certified_dbe,
                    "contract_type": s.category,
                    "award_date": s.award_date.isoformat(),
                }
                for s in self.subgrants
            ],
        }


def parse_contracts(rows: Iterable[dict[str, Any]]) -> list[Contract]:
    """
    Validate raw contract rows into Contract models.

    Args:
        rows: Deserialized rows (e.g. Supabase result.data or a JSON dump).

    Returns:
        Contracts in input order.

    Raises:
        InvalidArgument: if any row fails validation. Nothing is returned
            for partially valid input.
    """
    contracts: list[Contract] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise InvalidArgument(
                f"Contract row {index} must be an object, got {type(row).__name__}"
            )
        try:
            contracts.append(Contract.from_db_row(row))
        except ValidationError as exc:
            first = exc.errors(include_url=False)[0]
            loc = ".".join(str(part) for part in first["loc"])
            raise InvalidArgument(
                f"Contract row {index} is malformed at {loc}: {first['msg']}"
            ) from exc
    return contracts
