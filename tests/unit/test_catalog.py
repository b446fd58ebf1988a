"""Tests for catalog queries."""

import pytest

from island_planner.config import HUB_ISLAND
from island_planner.data.models import (
    Activity,
    LocationActivityMapping,
    PointOfInterest,
    TripSelection,
)
from island_planner.services.catalog import (
    filter_locations,
    islands_list,
    location_adventures,
    nearby_locations,
    selectable_locations,
    selected_locations,
    suggest_activities,
)

HAVELOCK = "Havelock (Swaraj Dweep)"
NEIL = "Neil (Shaheed Dweep)"


def _loc(location_id, island=HUB_ISLAND, name=None, moods=None):
    return PointOfInterest(
        id=location_id,
        name=name or location_id,
        island=island,
        moods=moods or ["balanced"],
    )


@pytest.fixture
def locations():
    return [
        _loc("airport", name="Veer Savarkar Airport"),
        _loc("jail", name="Cellular Jail", moods=["family"]),
        _loc("radha", island=HAVELOCK, moods=["romantic", "relaxed"]),
        _loc("elephant", island=HAVELOCK, moods=["adventure"]),
        _loc("bridge", island=NEIL),
    ]


@pytest.fixture
def activities():
    return [
        Activity(id="scuba", name="Scuba", islands=[HAVELOCK, NEIL]),
        Activity(id="show", name="Light Show", islands=[HUB_ISLAND]),
        Activity(id="walk", name="Sea Walk", islands=[HAVELOCK]),
    ]


@pytest.fixture
def mappings():
    return [
        LocationActivityMapping(location_id="elephant", activity_ids=["scuba", "walk"]),
        LocationActivityMapping(location_id="jail", activity_ids=["show"]),
    ]


def test_islands_list_discovers_islands_in_order(locations, tables):
    assert islands_list(locations, tables) == [HUB_ISLAND, HAVELOCK, NEIL]


def test_islands_list_falls_back_to_canonical(tables):
    assert islands_list([], tables) == tables.island_order


def test_selectable_locations_hide_airports(locations):
    ids = [loc.id for loc in selectable_locations(locations)]
    assert "airport" not in ids
    assert len(ids) == 4


def test_filter_locations(locations):
    assert [loc.id for loc in filter_locations(locations, island=HAVELOCK)] == [
        "radha",
        "elephant",
    ]
    assert [loc.id for loc in filter_locations(locations, mood="family")] == ["jail"]
    assert [
        loc.id for loc in filter_locations(locations, island=HAVELOCK, mood="romantic")
    ] == ["radha"]
    assert len(filter_locations(locations)) == len(locations)


def test_selected_locations_follow_catalog_order(locations):
    selection = TripSelection(location_ids=["bridge", "jail"])
    assert [loc.id for loc in selected_locations(locations, selection)] == [
        "jail",
        "bridge",
    ]


def test_suggestions_prefer_mapped_activities(locations, activities, mappings):
    selection = TripSelection(location_ids=["elephant"])
    selected = selected_locations(locations, selection)

    suggested = suggest_activities(activities, mappings, selection, selected)

    assert [a.id for a in suggested] == ["scuba", "walk"]


def test_suggestions_fall_back_to_island_match(locations, activities, mappings):
    selection = TripSelection(location_ids=["bridge"])
    selected = selected_locations(locations, selection)

    suggested = suggest_activities(activities, mappings, selection, selected)

    assert [a.id for a in suggested] == ["scuba"]


def test_suggestions_fall_back_to_everything(activities, mappings):
    suggested = suggest_activities(activities, mappings, TripSelection(), [])
    assert suggested == activities


def test_nearby_locations(locations):
    radha = locations[2]
    assert [loc.id for loc in nearby_locations(radha, locations)] == ["elephant"]

    many = [_loc(f"n{i}", island=NEIL) for i in range(10)]
    assert len(nearby_locations(many[0], many)) == 6


def test_location_adventures(locations, activities, mappings):
    assert [a.id for a in location_adventures(locations[1], activities, mappings)] == [
        "show"
    ]
    assert location_adventures(locations[4], activities, mappings) == []
