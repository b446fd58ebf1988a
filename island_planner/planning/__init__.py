"""
Itinerary generation, transport assignment and cost aggregation.
"""

from island_planner.planning.costs import (
    addons_total,
    compute_costs,
    ferry_leg_count,
    ground_total,
    lodging_total,
    nights_by_island,
    transit_total,
)
from island_planner.planning.itinerary import generate_itinerary
from island_planner.planning.session import ItinerarySnapshot, TripPlanner
from island_planner.planning.transport import assign_transport

__all__ = [
    "ItinerarySnapshot",
    "TripPlanner",
    "addons_total",
    "assign_transport",
    "compute_costs",
    "ferry_leg_count",
    "generate_itinerary",
    "ground_total",
    "lodging_total",
    "nights_by_island",
    "transit_total",
]
