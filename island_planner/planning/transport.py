"""
Default transport mode for a visiting day.
"""

from island_planner.config import ReferenceTables
from island_planner.data.models import TransportMode


def is_leisure_island(island: str, tables: ReferenceTables) -> bool:
    """Leisure islands are small enough to get around by scooter."""
    return any(fragment in island for fragment in tables.leisure_islands)


def assign_transport(
    stop_count: int, island: str, tables: ReferenceTables
) -> TransportMode:
    """
    Pick the initial transport mode for a day of stops.

    Args:
        stop_count: Number of stops packed into the day
        island: Island the day is spent on
        tables: Reference tables holding the thresholds

    Returns:
        Day Cab for busy days, Scooter on leisure islands, else Point-to-Point
    """
    if stop_count >= tables.day_cab_min_stops:
        return TransportMode.DAY_CAB
    if is_leisure_island(island, tables):
        return TransportMode.SCOOTER
    return TransportMode.POINT_TO_POINT
