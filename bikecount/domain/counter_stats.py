"""
bikecount/domain/counter_stats.py

Domain models for counter summaries and canonical counter statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]

CounterMetadata = Mapping[str, str]
"""Upstream metadata for one physical device: field name -> string value."""

Coordinates = tuple[float, float]
"""(latitude, longitude) pair."""


class CounterSummary(BaseModel):
    """
    Pre-aggregated statistics for one raw counter id.

    Accepts the camelCase keys delivered by the upstream summaries feed
    as well as the snake_case attribute names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    total: Number
    day: Number
    week: Number
    month: Number
    year: Number
    days_this_year: Number = Field(alias="daysThisYear")
    min_date: datetime = Field(alias="minDate")
    max_date: datetime = Field(alias="maxDate")

    @field_validator("min_date", "max_date", mode="before")
    @classmethod
    def _promote_date(cls, value: Any) -> Any:
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value

    @field_validator("min_date", "max_date")
    @classmethod
    def _drop_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class CounterStat:
    """
    Canonical statistics for one counter.

    Intermediate records carry the raw id and metadata name; merged records
    use the normalized label as both id and label.
    """

    id: str
    label: str
    stripped_label: str
    days: int
    total: Number
    day: Number
    month: Number
    week: Number
    year: Number
    days_this_year: Number
    included: tuple[str, ...] = field(default_factory=tuple)
    coordinates: Coordinates = (float("nan"), float("nan"))

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-ready representation using the field names renderers expect.
        """

        return {
            "id": self.id,
            "label": self.label,
            "strippedLabel": self.stripped_label,
            "days": self.days,
            "total": self.total,
            "day": self.day,
            "month": self.month,
            "week": self.week,
            "year": self.year,
            "daysThisYear": self.days_this_year,
            "included": list(self.included),
            "coordinates": list(self.coordinates),
        }


@dataclass(frozen=True)
class CounterDetail:
    """
    One physical channel shown on a counter's detail page.
    """

    name: str
    installed_on: str | None
    img: str | None
    coordinates: Coordinates

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "date": self.installed_on,
            "img": self.img,
            "coord": list(self.coordinates),
        }
