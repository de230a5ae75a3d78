"""
models/reports.py — Value objects for report filtering and participation stats.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from dbe_shared.errors import InvalidArgument


class CertificationStatus(str, Enum):
    """Tri-state certification selector; None on FilterCriteria means unset."""

    YES = "yes"
    NO = "no"


class FilterCriteria(BaseModel):
    """
    Report filter. Every field is optional and the default matches everything.

    Built from form-like input where an empty string means "unset":

        FilterCriteria.from_form(start_date="2024-01-01", category="", certified="yes")
    """

    # Misspelled keys must not silently widen the filter
    model_config = ConfigDict(frozen=True, extra="forbid")

    start_date: date | None = None
    end_date: date | None = None
    category: str | None = None
    certified: CertificationStatus | None = None

    @field_validator("*", mode="before")
    @classmethod
    def empty_string_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("certified", mode="before")
    @classmethod
    def lower_certified(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_range(self) -> "FilterCriteria":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )
        return self

    @classmethod
    def from_form(cls, **values: Any) -> "FilterCriteria":
        """Validate raw form values, raising InvalidArgument on bad input."""
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            first = exc.errors(include_url=False)[0]
            field = ".".join(str(part) for part in first["loc"]) or "criteria"
            raise InvalidArgument(f"Invalid filter {field}: {first['msg']}") from exc

    @property
    def is_unset(self) -> bool:
        return (
            self.start_date is None
            and self.end_date is None
            and self.category is None
            and self.certified is None
        )


class AggregateResult(BaseModel):
    """Participation totals for one contract collection."""

    total_amount: float = 0.0
    certified_amount: float = 0.0
    non_certified_amount: float = 0.0
    certified_percentage: float = 0.0
    category_counts: dict[str, int] = Field(default_factory=dict)
    # Ascending by year
    yearly_totals: dict[str, float] = Field(default_factory=dict)


class ChartSlice(BaseModel):
    name: str
    value: float


class TrendPoint(BaseModel):
    year: str
    amount: float


class ParticipationStats(BaseModel):
    """Chart-ready series for the participation statistics view."""

    participation: list[ChartSlice]
    category_distribution: list[ChartSlice]
    trends: list[TrendPoint]
    certified_percentage: float
