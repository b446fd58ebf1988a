"""
Cost aggregation for a planned trip.

Four independent cost lines are derived from the current day plans and the
user's choices: lodging, ferries, ground transport and add-on activities.
Each line is a pure function of its inputs, so the breakdown can be
recomputed from scratch whenever anything upstream changes.
"""

from collections.abc import Iterable, Mapping

from island_planner.config import ReferenceTables
from island_planner.data.models import (
    Activity,
    CostBreakdown,
    DayPlan,
    EssentialsConfig,
    PartySize,
    TransportMode,
)
from island_planner.utils.helpers import dedupe, safe_num
from island_planner.utils.logging import get_logger

logger = get_logger(__name__)


def nights_by_island(days: Iterable[DayPlan]) -> dict[str, int]:
    """Count one night per non-transit day on its island."""
    nights: dict[str, int] = {}
    for day in days:
        if day.is_transit:
            continue
        nights[day.island] = nights.get(day.island, 0) + 1
    return nights


def ferry_leg_count(days: Iterable[DayPlan]) -> int:
    """Total ferry items across all days."""
    return sum(day.ferry_count for day in days)


def lodging_total(
    days: list[DayPlan],
    chosen_hotels: Mapping[str, str],
    tables: ReferenceTables,
) -> float:
    """
    Price the nights spent on each island at the chosen hotel's rate.

    Islands without a chosen (or known) hotel contribute nothing.
    """
    total = 0.0
    for island, nights in nights_by_island(days).items():
        hotel_id = chosen_hotels.get(island)
        if not hotel_id:
            continue
        hotel = tables.find_hotel(island, hotel_id)
        if hotel is None:
            logger.warning(f"Unknown hotel '{hotel_id}' chosen for {island}")
            continue
        total += safe_num(hotel.nightly_rate) * nights
    return total


def transit_total(
    days: list[DayPlan],
    essentials: EssentialsConfig,
    party: PartySize,
    tables: ReferenceTables,
) -> float:
    """Ferry legs times the class fare for every adult; infants travel free."""
    legs = ferry_leg_count(days)
    fare = safe_num(tables.ferry_base_fare) * tables.class_multiplier(
        essentials.ferry_class
    )
    adults = max(1, int(safe_num(party.adults)))
    return legs * fare * adults


def day_ground_cost(
    day: DayPlan, essentials: EssentialsConfig, tables: ReferenceTables
) -> float:
    """Ground transport cost of a single non-transit day."""
    if day.island in essentials.scooter_islands:
        return safe_num(tables.scooter_day_rate)
    if day.transport == TransportMode.DAY_CAB:
        return safe_num(tables.cab_day_rate(essentials.cab_model_id))
    if day.transport == TransportMode.SCOOTER:
        return safe_num(tables.scooter_day_rate)
    # Point-to-Point, and any transport label we do not recognise
    return max(1, day.stop_count - 1) * safe_num(tables.per_hop_rate)


def ground_total(
    days: list[DayPlan], essentials: EssentialsConfig, tables: ReferenceTables
) -> float:
    """Sum the ground transport cost of every day spent on an island."""
    total = 0.0
    for day in days:
        if day.is_transit:
            continue
        if day.has_item("arrival") and not tables.charge_arrival_transport:
            continue
        total += day_ground_cost(day, essentials, tables)
    return total


def addons_total(activity_ids: Iterable[str], activities: Iterable[Activity]) -> float:
    """Sum the prices of the chosen add-on activities; unknown ids are free."""
    prices = {activity.id: activity.price for activity in activities}
    return sum(safe_num(prices.get(activity_id)) for activity_id in dedupe(activity_ids))


def compute_costs(
    days: list[DayPlan],
    *,
    essentials: EssentialsConfig | None = None,
    party: PartySize | None = None,
    chosen_hotels: Mapping[str, str] | None = None,
    addon_ids: Iterable[str] = (),
    activities: Iterable[Activity] = (),
    tables: ReferenceTables | None = None,
) -> CostBreakdown:
    """
    Compute the full cost breakdown for the current itinerary and choices.

    Args:
        days: Current day plans, including any manual edits
        essentials: Ferry class, vehicle model and scooter islands
        party: Adults and infants travelling
        chosen_hotels: Hotel id per island
        addon_ids: Chosen add-on activity ids
        activities: Activity catalog used to price the add-ons
        tables: Reference tables with fares and rates

    Returns:
        CostBreakdown whose total is the sum of its four lines
    """
    essentials = essentials or EssentialsConfig()
    party = party or PartySize()
    tables = tables or ReferenceTables()

    breakdown = CostBreakdown(
        lodging=lodging_total(days, chosen_hotels or {}, tables),
        transit=transit_total(days, essentials, party, tables),
        ground=ground_total(days, essentials, tables),
        addons=addons_total(addon_ids, activities),
    )
    logger.debug(f"Computed costs: {breakdown.model_dump()}")
    return breakdown
