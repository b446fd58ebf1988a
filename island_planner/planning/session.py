"""
Editable trip planning session.

The session owns the current itinerary as a versioned, immutable snapshot.
Changing the selection or the start-from-hub flag regenerates the snapshot
wholesale, discarding manual edits; the edit operations (insert, delete,
move, set transport) each produce a new snapshot version. Costs and the
trip summary are derived on every read and never cached.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from island_planner.config import ReferenceTables
from island_planner.data.models import (
    Activity,
    CostBreakdown,
    DayPlan,
    EssentialsConfig,
    LocationActivityMapping,
    PartySize,
    PointOfInterest,
    TransportMode,
    TripSelection,
    TripSummary,
)
from island_planner.planning.costs import (
    compute_costs,
    ferry_leg_count,
    nights_by_island,
)
from island_planner.planning.itinerary import generate_itinerary
from island_planner.services import catalog
from island_planner.utils.helpers import add_days
from island_planner.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ItinerarySnapshot:
    """An immutable version of the day plans."""

    days: tuple[DayPlan, ...]
    version: int = 0
    # (selected ids, start_from_hub) the snapshot was generated from
    source: tuple[tuple[str, ...], bool] = ((), True)

    def editable_days(self) -> list[DayPlan]:
        """Deep copies of the days, safe to mutate into a new snapshot."""
        return [day.model_copy(deep=True) for day in self.days]


@dataclass
class TripPlanner:
    """
    A planning session over a fixed location and activity catalog.

    Attributes:
        locations: Normalized location catalog
        activities: Normalized activity catalog
        mappings: Activities suggested per location
        tables: Reference tables for generation and pricing
    """

    locations: list[PointOfInterest]
    activities: list[Activity] = field(default_factory=list)
    mappings: list[LocationActivityMapping] = field(default_factory=list)
    tables: ReferenceTables = field(default_factory=ReferenceTables)
    selection: TripSelection = field(default_factory=TripSelection)
    essentials: EssentialsConfig = field(default_factory=EssentialsConfig)
    chosen_hotels: dict[str, str] = field(default_factory=dict)
    addon_ids: list[str] = field(default_factory=list)
    snapshot: ItinerarySnapshot = field(
        init=False, default_factory=lambda: ItinerarySnapshot(days=())
    )

    def __post_init__(self):
        self.regenerate()

    # --- Derived inputs ---

    @property
    def days(self) -> list[DayPlan]:
        return list(self.snapshot.days)

    def selected_locations(self) -> list[PointOfInterest]:
        """Selected locations, in catalog order; airports are never stops."""
        return catalog.selected_locations(
            catalog.selectable_locations(self.locations), self.selection
        )

    def find_location(self, location_id: str) -> PointOfInterest | None:
        return next((loc for loc in self.locations if loc.id == location_id), None)

    def suggested_activities(self) -> list[Activity]:
        """Add-on activities worth offering for the current selection."""
        return catalog.suggest_activities(
            self.activities, self.mappings, self.selection, self.selected_locations()
        )

    def nearby(self, location_id: str, limit: int = 6) -> list[PointOfInterest]:
        """Other selectable locations on the same island as a location."""
        location = self.find_location(location_id)
        if location is None:
            return []
        return catalog.nearby_locations(
            location, catalog.selectable_locations(self.locations), limit
        )

    def location_adventures(self, location_id: str) -> list[Activity]:
        """Activities mapped to a single location."""
        location = self.find_location(location_id)
        if location is None:
            return []
        return catalog.location_adventures(location, self.activities, self.mappings)

    def _source_key(self) -> tuple[tuple[str, ...], bool]:
        ids = tuple(loc.id for loc in self.selected_locations())
        return ids, self.selection.start_from_hub

    # --- Regeneration ---

    def regenerate(self) -> ItinerarySnapshot:
        """Replace the itinerary with a freshly generated one."""
        days = generate_itinerary(
            self.selected_locations(), self.selection.start_from_hub, self.tables
        )
        self.snapshot = ItinerarySnapshot(
            days=tuple(days),
            version=self.snapshot.version + 1,
            source=self._source_key(),
        )
        logger.info(
            f"Itinerary regenerated (version {self.snapshot.version}, "
            f"{len(days)} days)"
        )
        return self.snapshot

    def _refresh(self) -> ItinerarySnapshot:
        """Regenerate only if the generator's inputs changed."""
        if self._source_key() != self.snapshot.source:
            return self.regenerate()
        return self.snapshot

    def select(self, location_ids: Iterable[str]) -> ItinerarySnapshot:
        """Replace the selected location ids."""
        ids = TripSelection(location_ids=list(location_ids)).location_ids
        self.selection = self.selection.model_copy(update={"location_ids": ids})
        return self._refresh()

    def toggle_location(self, location_id: str) -> ItinerarySnapshot:
        """Select a location, or unselect it if already picked."""
        ids = list(self.selection.location_ids)
        if location_id in ids:
            ids.remove(location_id)
        else:
            ids.append(location_id)
        return self.select(ids)

    def set_start_from_hub(self, start_from_hub: bool) -> ItinerarySnapshot:
        self.selection = self.selection.model_copy(
            update={"start_from_hub": start_from_hub}
        )
        return self._refresh()

    def set_party(self, adults: int, infants: int = 0) -> None:
        self.selection = self.selection.model_copy(
            update={"party": PartySize(adults=adults, infants=infants)}
        )

    def set_start_date(self, start_date: date | None) -> None:
        self.selection = self.selection.model_copy(update={"start_date": start_date})

    # --- Manual edits ---

    def _commit(self, days: list[DayPlan]) -> ItinerarySnapshot:
        self.snapshot = ItinerarySnapshot(
            days=tuple(days),
            version=self.snapshot.version + 1,
            source=self.snapshot.source,
        )
        return self.snapshot

    def _valid_index(self, index: int) -> bool:
        if 0 <= index < len(self.snapshot.days):
            return True
        logger.warning(f"Day index {index} out of range, edit ignored")
        return False

    def add_empty_day_after(self, index: int) -> ItinerarySnapshot:
        """Insert an empty Point-to-Point day after the given day."""
        if not self._valid_index(index):
            return self.snapshot
        days = self.snapshot.editable_days()
        days.insert(
            index + 1,
            DayPlan(
                island=days[index].island or self.tables.hub_island,
                items=[],
                transport=TransportMode.POINT_TO_POINT,
            ),
        )
        return self._commit(days)

    def delete_day(self, index: int) -> ItinerarySnapshot:
        """Remove a day; the last remaining day cannot be deleted."""
        if len(self.snapshot.days) <= 1 or not self._valid_index(index):
            return self.snapshot
        days = self.snapshot.editable_days()
        del days[index]
        return self._commit(days)

    def move_item(
        self, from_day: int, item_index: int, direction: int = 1
    ) -> ItinerarySnapshot:
        """Move an item to the end of the previous (-1) or next (+1) day."""
        to_day = from_day + direction
        if not (self._valid_index(from_day) and self._valid_index(to_day)):
            return self.snapshot
        days = self.snapshot.editable_days()
        if not 0 <= item_index < len(days[from_day].items):
            logger.warning(f"Item index {item_index} out of range, edit ignored")
            return self.snapshot
        item = days[from_day].items.pop(item_index)
        days[to_day].items.append(item)
        return self._commit(days)

    def set_transport(self, index: int, mode: str) -> ItinerarySnapshot:
        """Override the transport mode of a day; transit days are fixed."""
        if not self._valid_index(index):
            return self.snapshot
        if self.snapshot.days[index].is_transit:
            logger.warning(f"Day {index} is a transit day, transport not changed")
            return self.snapshot
        days = self.snapshot.editable_days()
        days[index] = days[index].model_copy(update={"transport": mode})
        return self._commit(days)

    # --- Choices that only affect costs ---

    def choose_hotel(self, island: str, hotel_id: str) -> None:
        self.chosen_hotels[island] = hotel_id

    def toggle_scooter_island(self, island: str) -> None:
        """Opt an island in or out of the flat-rate scooter mode."""
        islands = set(self.essentials.scooter_islands)
        islands.symmetric_difference_update({island})
        self.essentials = self.essentials.model_copy(
            update={"scooter_islands": islands}
        )

    def toggle_addon(self, activity_id: str) -> None:
        if activity_id in self.addon_ids:
            self.addon_ids.remove(activity_id)
        else:
            self.addon_ids.append(activity_id)

    # --- Derived outputs ---

    def costs(self) -> CostBreakdown:
        return compute_costs(
            self.days,
            essentials=self.essentials,
            party=self.selection.party,
            chosen_hotels=self.chosen_hotels,
            addon_ids=self.addon_ids,
            activities=self.activities,
            tables=self.tables,
        )

    def day_dates(self) -> list[date | None]:
        """Calendar date of each day, or None when no start date is set."""
        return [add_days(self.selection.start_date, i) for i in range(len(self.days))]

    def summary(self) -> TripSummary:
        days = self.days
        return TripSummary(
            day_count=len(days),
            ferry_legs=ferry_leg_count(days),
            nights_by_island=nights_by_island(days),
            pax=self.selection.party.pax,
            costs=self.costs(),
            dates=self.day_dates(),
        )
