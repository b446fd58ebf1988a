"""
Catalog queries over the normalized reference data.

Filters used while picking locations, and the activity suggestions and
nearby stops shown alongside a location.
"""

import re

from island_planner.config import ReferenceTables
from island_planner.data.models import (
    Activity,
    LocationActivityMapping,
    PointOfInterest,
    TripSelection,
)

ALL = "All"
_AIRPORT = re.compile(r"airport", re.IGNORECASE)


def islands_list(
    locations: list[PointOfInterest], tables: ReferenceTables
) -> list[str]:
    """Islands present in the catalog, or the canonical list if none are."""
    found = list(dict.fromkeys(loc.island for loc in locations if loc.island))
    return found or list(tables.island_order)


def selectable_locations(locations: list[PointOfInterest]) -> list[PointOfInterest]:
    """Locations a traveller may pick; airports are part of every trip."""
    return [loc for loc in locations if not _AIRPORT.search(loc.name)]


def filter_locations(
    locations: list[PointOfInterest], island: str = ALL, mood: str = ALL
) -> list[PointOfInterest]:
    return [
        loc
        for loc in locations
        if (island == ALL or loc.island == island)
        and (mood == ALL or mood in loc.moods)
    ]


def selected_locations(
    locations: list[PointOfInterest], selection: TripSelection
) -> list[PointOfInterest]:
    chosen = set(selection.location_ids)
    return [loc for loc in locations if loc.id in chosen]


def suggest_activities(
    activities: list[Activity],
    mappings: list[LocationActivityMapping],
    selection: TripSelection,
    selected: list[PointOfInterest],
) -> list[Activity]:
    """
    Suggest add-on activities for the current selection.

    Activities mapped to a selected location win; failing that, activities
    offered on a selected island; failing that, the whole catalog.
    """
    chosen = set(selection.location_ids)
    mapped_ids: set[str] = set()
    for mapping in mappings:
        if mapping.location_id in chosen:
            mapped_ids.update(mapping.activity_ids)

    mapped = [a for a in activities if a.id in mapped_ids]
    if mapped:
        return mapped

    islands = {loc.island for loc in selected}
    island_match = [a for a in activities if any(i in islands for i in a.islands)]
    return island_match or list(activities)


def nearby_locations(
    location: PointOfInterest, locations: list[PointOfInterest], limit: int = 6
) -> list[PointOfInterest]:
    """Other locations on the same island."""
    return [
        loc
        for loc in locations
        if loc.island == location.island and loc.id != location.id
    ][:limit]


def location_adventures(
    location: PointOfInterest,
    activities: list[Activity],
    mappings: list[LocationActivityMapping],
) -> list[Activity]:
    """Activities mapped to a single location."""
    ids: set[str] = set()
    for mapping in mappings:
        if mapping.location_id == location.id:
            ids.update(mapping.activity_ids)
    return [a for a in activities if a.id in ids]
