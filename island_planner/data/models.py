"""
Data models for the island planner system.

This module defines the core data structures used throughout the planning
process: normalized points of interest and activities, the user's trip
selection and essentials, the generated day plans and the cost breakdown.
"""

import math
from datetime import date
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    Field,
    ValidatorFunctionWrapHandler,
    computed_field,
    field_validator,
)

from island_planner.utils.helpers import dedupe


class TransportMode(StrEnum):
    """Ground transport modes for a single day."""

    DAY_CAB = "Day Cab"
    SCOOTER = "Scooter"
    POINT_TO_POINT = "Point-to-Point"
    TRANSIT = "—"


class FerryClass(StrEnum):
    """Ferry fare classes."""

    ECONOMY = "Economy"
    DELUXE = "Deluxe"
    LUXURY = "Luxury"


class PointOfInterest(BaseModel):
    """A normalized, selectable stop on one island."""

    id: str
    name: str
    island: str = ""
    duration_hrs: float = Field(default=2.0, ge=0)
    best_times: list[str] = Field(default_factory=list)
    moods: list[str] = Field(..., min_length=1)
    description: str | None = None
    image: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("moods")
    @classmethod
    def dedupe_moods(cls, value: list[str]) -> list[str]:
        """Moods behave as an insertion-ordered set."""
        return dedupe(value)


class Activity(BaseModel):
    """An optional, priced add-on activity."""

    id: str
    name: str
    price: float = Field(default=0.0, ge=0)
    category: str = "Adventure"
    islands: list[str] = Field(default_factory=list)


class LocationActivityMapping(BaseModel):
    """Activities suggested for a particular location."""

    location_id: str
    activity_ids: list[str] = Field(default_factory=list)


class ArrivalItem(BaseModel):
    type: Literal["arrival"] = "arrival"
    name: str


class TransferItem(BaseModel):
    type: Literal["transfer"] = "transfer"
    name: str


class LocationItem(BaseModel):
    """A visit to a point of interest inside a day plan."""

    type: Literal["location"] = "location"
    ref: str
    name: str
    duration_hrs: float = 2.0
    best_times: list[str] = Field(default_factory=list)

    @classmethod
    def from_location(cls, location: PointOfInterest) -> "LocationItem":
        return cls(
            ref=location.id,
            name=location.name,
            duration_hrs=location.duration_hrs,
            best_times=list(location.best_times),
        )


class FerryItem(BaseModel):
    """One inter-island ferry leg."""

    type: Literal["ferry"] = "ferry"
    name: str
    source: str
    destination: str
    time: str | None = None


class DepartureItem(BaseModel):
    type: Literal["departure"] = "departure"
    name: str


DayItem = Annotated[
    ArrivalItem | TransferItem | LocationItem | FerryItem | DepartureItem,
    Field(discriminator="type"),
]


class DayPlan(BaseModel):
    """A single day of the itinerary."""

    island: str
    items: list[DayItem] = Field(default_factory=list)
    transport: str = TransportMode.POINT_TO_POINT

    def has_item(self, item_type: str) -> bool:
        return any(item.type == item_type for item in self.items)

    @property
    def is_transit(self) -> bool:
        """Ferry and departure days are not spent on the island."""
        return self.has_item("ferry") or self.has_item("departure")

    @property
    def stop_count(self) -> int:
        return sum(1 for item in self.items if item.type == "location")

    @property
    def ferry_count(self) -> int:
        return sum(1 for item in self.items if item.type == "ferry")

    @property
    def hours(self) -> float:
        return sum(
            item.duration_hrs for item in self.items if item.type == "location"
        )


class PartySize(BaseModel):
    """Travellers in the party."""

    adults: int = Field(default=2, description="Never below 0")
    infants: int = Field(default=0, description="Never below 0")

    @field_validator("adults", "infants", mode="wrap")
    @classmethod
    def clamp_count(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> int:
        """Usual int coercion; negative or non-finite counts become 0."""
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(handler(value), 0)

    @computed_field
    @property
    def pax(self) -> int:
        return self.adults + self.infants


class TripSelection(BaseModel):
    """
    The user's trip parameters.

    Location ids keep their selection order; repeated ids are collapsed.
    """

    location_ids: list[str] = Field(default_factory=list)
    start_from_hub: bool = True
    party: PartySize = Field(default_factory=PartySize)
    start_date: date | None = None

    @field_validator("location_ids")
    @classmethod
    def collapse_duplicates(cls, value: list[str]) -> list[str]:
        return dedupe(value)


class EssentialsConfig(BaseModel):
    """Ferry class, vehicle model and flat-rate scooter islands."""

    ferry_class: str = FerryClass.DELUXE
    cab_model_id: str = "suv"
    scooter_islands: set[str] = Field(default_factory=set)


class CostBreakdown(BaseModel):
    """Four independent cost lines and their sum."""

    lodging: float = Field(default=0.0, ge=0)
    transit: float = Field(default=0.0, ge=0)
    ground: float = Field(default=0.0, ge=0)
    addons: float = Field(default=0.0, ge=0)

    @computed_field
    @property
    def total(self) -> float:
        return self.lodging + self.transit + self.ground + self.addons

    def line_items(self) -> list[tuple[str, float]]:
        """Labelled cost lines in display order."""
        return [
            ("Hotels", self.lodging),
            ("Ferries", self.transit),
            ("Ground transport", self.ground),
            ("Adventures", self.addons),
        ]


class TripSummary(BaseModel):
    """Derived figures shown next to the itinerary."""

    day_count: int
    ferry_legs: int
    nights_by_island: dict[str, int] = Field(default_factory=dict)
    pax: int
    costs: CostBreakdown
    dates: list[date | None] = Field(default_factory=list)
