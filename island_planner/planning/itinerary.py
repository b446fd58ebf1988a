"""
Itinerary generation.

Turns the selected points of interest into an ordered list of day plans:
an arrival day at the hub, visiting days packed per island under a stop and
hour budget, ferry days between islands and back to the hub, and a final
departure day. Generation is a pure function of its inputs.
"""

from island_planner.config import HubPolicy, ReferenceTables
from island_planner.data.models import (
    ArrivalItem,
    DayPlan,
    DepartureItem,
    FerryItem,
    LocationItem,
    PointOfInterest,
    TransferItem,
    TransportMode,
)
from island_planner.planning.transport import assign_transport
from island_planner.utils.logging import get_logger

logger = get_logger(__name__)

_TIME_RANKS: list[tuple[int, tuple[str, ...]]] = [
    (0, ("morning", "sunrise")),
    (1, ("afternoon",)),
    (2, ("evening", "sunset")),
]
_UNRANKED = 3


def time_of_day_rank(location: PointOfInterest) -> int:
    """Coarse rank of a location's preferred time of day, earliest first."""
    tags = [str(t).lower() for t in location.best_times]
    for rank, keywords in _TIME_RANKS:
        if any(keyword in tag for tag in tags for keyword in keywords):
            return rank
    return _UNRANKED


def order_by_best_time(locations: list[PointOfInterest]) -> list[PointOfInterest]:
    """Stable sort by time-of-day rank; ties keep their original order."""
    return sorted(locations, key=time_of_day_rank)


def group_by_island(
    locations: list[PointOfInterest],
) -> dict[str, list[PointOfInterest]]:
    """Partition locations by island, keeping first-seen order."""
    groups: dict[str, list[PointOfInterest]] = {}
    for location in locations:
        groups.setdefault(location.island, []).append(location)
    return groups


def island_visit_order(
    islands: list[str], start_from_hub: bool, tables: ReferenceTables
) -> list[str]:
    """
    Order islands canonically, optionally leading with the hub.

    Islands missing from the canonical order go last, keeping their relative
    order. With ``start_from_hub`` the hub is moved to the front; whether it
    is added when nothing there was selected depends on the hub policy.
    """
    order = sorted(islands, key=tables.island_rank)
    if not start_from_hub:
        return order

    hub = tables.hub_island
    if hub in order:
        return [hub, *(island for island in order if island != hub)]
    if tables.hub_policy == HubPolicy.INJECT:
        return [hub, *order]
    return order


def pack_days(
    island: str, locations: list[PointOfInterest], tables: ReferenceTables
) -> list[DayPlan]:
    """
    Greedily pack an island's locations into visiting days.

    A bucket is closed before adding a location once it already holds the
    maximum number of stops or the location would push it past the hour
    budget. The location that closes a bucket opens the next one, so a
    single location longer than the budget still gets its own day.
    """
    days: list[DayPlan] = []
    bucket: list[PointOfInterest] = []
    hours = 0.0

    def flush() -> None:
        nonlocal bucket, hours
        if not bucket:
            return
        days.append(
            DayPlan(
                island=island,
                items=[LocationItem.from_location(loc) for loc in bucket],
                transport=assign_transport(len(bucket), island, tables),
            )
        )
        bucket = []
        hours = 0.0

    for location in order_by_best_time(locations):
        if (
            len(bucket) >= tables.max_stops_per_day
            or hours + location.duration_hrs > tables.max_hours_per_day
        ):
            flush()
        bucket.append(location)
        hours += location.duration_hrs
    flush()

    return days


def _ferry_day(source: str, destination: str, time: str | None = None) -> DayPlan:
    return DayPlan(
        island=source,
        items=[
            FerryItem(
                name=f"Ferry {source} → {destination}",
                source=source,
                destination=destination,
                time=time,
            )
        ],
        transport=TransportMode.TRANSIT,
    )


def _departure_day(tables: ReferenceTables) -> DayPlan:
    return DayPlan(
        island=tables.hub_island,
        items=[DepartureItem(name=tables.departure_label)],
        transport=TransportMode.TRANSIT,
    )


def generate_itinerary(
    selected: list[PointOfInterest],
    start_from_hub: bool = True,
    tables: ReferenceTables | None = None,
) -> list[DayPlan]:
    """
    Generate the day-by-day itinerary for the selected locations.

    Args:
        selected: Normalized, selected points of interest
        start_from_hub: Visit the hub island first
        tables: Reference tables; the defaults describe the Andaman islands

    Returns:
        Day plans starting with arrival and ending with departure at the hub
    """
    tables = tables or ReferenceTables()
    hub = tables.hub_island

    days = [
        DayPlan(
            island=hub,
            items=[
                ArrivalItem(name=tables.arrival_label),
                TransferItem(name=tables.transfer_label),
            ],
            transport=TransportMode.POINT_TO_POINT,
        )
    ]

    if not selected:
        days.append(_departure_day(tables))
        logger.debug("Empty selection, generated arrival and departure only")
        return days

    by_island = group_by_island(selected)
    order = island_visit_order(list(by_island), start_from_hub, tables)

    for index, island in enumerate(order):
        days.extend(pack_days(island, by_island.get(island, []), tables))

        if index + 1 < len(order):
            days.append(_ferry_day(island, order[index + 1], tables.ferry_time_window))

    last_island = days[-1].island
    if last_island != hub:
        days.append(_ferry_day(last_island, hub))

    days.append(_departure_day(tables))

    logger.debug(
        f"Generated {len(days)} days for {len(selected)} locations "
        f"across {len(order)} islands"
    )
    return days
