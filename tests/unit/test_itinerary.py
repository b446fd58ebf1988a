"""Tests for itinerary generation."""

from collections import Counter

from island_planner.config import HUB_ISLAND, HubPolicy, ReferenceTables
from island_planner.planning.itinerary import (
    generate_itinerary,
    island_visit_order,
    order_by_best_time,
    pack_days,
)

HAVELOCK = "Havelock (Swaraj Dweep)"
NEIL = "Neil (Shaheed Dweep)"


def _types(day):
    return [item.type for item in day.items]


def test_empty_selection_has_arrival_and_departure_only():
    days = generate_itinerary([], start_from_hub=True)

    assert len(days) == 2
    assert _types(days[0]) == ["arrival", "transfer"]
    assert days[0].island == HUB_ISLAND
    assert days[0].transport == "Point-to-Point"
    assert _types(days[1]) == ["departure"]
    assert days[1].transport == "—"


def test_two_island_example(make_location):
    tables = ReferenceTables(hub_island="A", island_order=["A", "B"], leisure_islands=[])
    selected = [
        make_location("a1", island="A"),
        make_location("a2", island="A"),
        make_location("a3", island="A"),
        make_location("b1", island="B", duration=3.0),
    ]

    days = generate_itinerary(selected, start_from_hub=True, tables=tables)

    assert len(days) == 6
    assert _types(days[0]) == ["arrival", "transfer"]
    assert [item.ref for item in days[1].items] == ["a1", "a2", "a3"]
    assert days[1].hours == 6
    assert days[1].transport == "Day Cab"
    assert days[2].island == "A"
    assert (days[2].items[0].source, days[2].items[0].destination) == ("A", "B")
    assert [item.ref for item in days[3].items] == ["b1"]
    assert days[3].transport == "Point-to-Point"
    assert days[4].island == "B"
    assert (days[4].items[0].source, days[4].items[0].destination) == ("B", "A")
    assert _types(days[5]) == ["departure"]
    assert days[5].island == "A"


def test_leisure_island_gets_scooter(sample_locations):
    days = generate_itinerary(sample_locations, start_from_hub=True)

    havelock_days = [d for d in days if d.island == HAVELOCK and not d.is_transit]
    assert len(havelock_days) == 1
    assert havelock_days[0].transport == "Scooter"


def test_inter_island_ferry_has_time_window_and_return_has_none(sample_locations):
    days = generate_itinerary(sample_locations, start_from_hub=True)

    ferries = [item for day in days for item in day.items if item.type == "ferry"]
    assert len(ferries) == 2
    assert ferries[0].time == "08:00–09:30"
    assert ferries[0].name == f"Ferry {HUB_ISLAND} → {HAVELOCK}"
    assert ferries[1].time is None


def test_bucket_splits_after_four_stops(make_location):
    selected = [make_location(f"s{i}", duration=1.0) for i in range(5)]

    days = generate_itinerary(selected, start_from_hub=True)

    visiting = [d for d in days[1:] if not d.is_transit]
    assert [d.stop_count for d in visiting] == [4, 1]
    assert visiting[0].transport == "Day Cab"
    assert visiting[1].transport == "Point-to-Point"


def test_bucket_splits_on_hour_budget(make_location, tables):
    selected = [make_location(f"s{i}", duration=3.0) for i in range(3)]

    days = pack_days(HUB_ISLAND, selected, tables)

    assert [d.stop_count for d in days] == [2, 1]
    assert [d.hours for d in days] == [6, 3]


def test_overlong_stop_gets_its_own_day(make_location, tables):
    selected = [make_location("long", duration=8.0), make_location("short", duration=1.0)]

    days = pack_days(HUB_ISLAND, selected, tables)

    assert [[item.ref for item in d.items] for d in days] == [["long"], ["short"]]


def test_order_by_best_time_is_stable(make_location):
    locations = [
        make_location("none1"),
        make_location("eve", best_times=["Evening"]),
        make_location("morn", best_times=["early morning"]),
        make_location("none2"),
        make_location("aft", best_times=["afternoon"]),
        make_location("rise", best_times=["Sunrise"]),
        make_location("set", best_times=["sunset"]),
    ]

    ordered = [loc.id for loc in order_by_best_time(locations)]

    assert ordered == ["morn", "rise", "aft", "eve", "set", "none1", "none2"]


def test_islands_follow_canonical_order(make_location):
    selected = [
        make_location("x1", island="Atlantis"),
        make_location("n1", island=NEIL),
        make_location("h1", island=HAVELOCK),
    ]

    days = generate_itinerary(selected, start_from_hub=False)

    visited = [d.island for d in days if d.stop_count]
    assert visited == [HAVELOCK, NEIL, "Atlantis"]


def test_island_visit_order_moves_hub_to_front(tables):
    order = island_visit_order([NEIL, HUB_ISLAND, HAVELOCK], True, tables)
    assert order == [HUB_ISLAND, HAVELOCK, NEIL]


def test_unknown_islands_keep_relative_order(tables):
    order = island_visit_order(["Zeta", "Alpha", NEIL], False, tables)
    assert order == [NEIL, "Zeta", "Alpha"]


def test_hub_is_injected_when_starting_from_hub(make_location):
    days = generate_itinerary([make_location("h1", island=HAVELOCK)], start_from_hub=True)

    assert len(days) == 5
    assert days[1].island == HUB_ISLAND
    assert days[1].items[0].type == "ferry"
    assert days[1].items[0].destination == HAVELOCK
    assert days[2].island == HAVELOCK
    assert days[3].items[0].destination == HUB_ISLAND


def test_reorder_only_policy_skips_unselected_hub(make_location):
    tables = ReferenceTables(hub_policy=HubPolicy.REORDER_ONLY)

    days = generate_itinerary(
        [make_location("h1", island=HAVELOCK)], start_from_hub=True, tables=tables
    )

    assert len(days) == 4
    assert days[1].island == HAVELOCK
    assert days[1].stop_count == 1


def test_without_hub_start_there_is_no_outbound_ferry(make_location):
    days = generate_itinerary([make_location("h1", island=HAVELOCK)], start_from_hub=False)

    assert [d.island for d in days] == [HUB_ISLAND, HAVELOCK, HAVELOCK, HUB_ISLAND]
    assert days[2].items[0].type == "ferry"


def test_hub_only_trip_needs_no_ferry(make_location):
    days = generate_itinerary([make_location("pb1")], start_from_hub=True)

    assert len(days) == 3
    assert not any(d.ferry_count for d in days)


def test_generated_days_respect_invariants(make_location):
    selected = [
        make_location("n1", island=NEIL, duration=5.0, best_times=["sunset"]),
        make_location("n2", island=NEIL, duration=1.5),
        make_location("h1", island=HAVELOCK, duration=9.0),
        make_location("h2", island=HAVELOCK, duration=0.5, best_times=["morning"]),
        make_location("h3", island=HAVELOCK),
        make_location("p1", duration=2.5),
        make_location("p2", duration=2.5),
        make_location("p3", duration=2.5),
        make_location("p4", duration=0.5),
        make_location("p5", duration=0.5),
    ]

    days = generate_itinerary(selected, start_from_hub=True)

    refs = Counter(item.ref for d in days for item in d.items if item.type == "location")
    assert refs == Counter(loc.id for loc in selected)
    assert days[0].has_item("arrival")
    assert _types(days[-1]) == ["departure"]
    assert sum(d.has_item("departure") for d in days) == 1

    for day in days:
        if day.is_transit:
            assert day.transport == "—"
            continue
        assert day.stop_count <= 4
        assert day.hours <= 7 or day.stop_count == 1

    visited = []
    for day in days:
        if day.stop_count and (not visited or visited[-1] != day.island):
            visited.append(day.island)
    assert visited == [HUB_ISLAND, HAVELOCK, NEIL]
    for before, after in zip(visited, visited[1:], strict=False):
        ferry_days = [
            d
            for d in days
            if d.ferry_count
            and (d.items[0].source, d.items[0].destination) == (before, after)
        ]
        assert len(ferry_days) == 1


def test_generation_is_deterministic(sample_locations):
    first = generate_itinerary(sample_locations, start_from_hub=True)
    second = generate_itinerary(list(sample_locations), start_from_hub=True)
    assert first == second
