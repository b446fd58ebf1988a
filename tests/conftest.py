"""
Pytest configuration for the Island Planner tests.
"""

import pytest

from island_planner.config import HUB_ISLAND, ReferenceTables
from island_planner.data.models import PointOfInterest
from island_planner.utils import LogLevel, setup_logging

HAVELOCK = "Havelock (Swaraj Dweep)"
NEIL = "Neil (Shaheed Dweep)"


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up logging for tests."""
    setup_logging(LogLevel.DEBUG)


@pytest.fixture
def tables():
    """Default Andaman reference tables."""
    return ReferenceTables()


@pytest.fixture
def make_location():
    """Factory for normalized locations."""

    def _make(
        location_id: str,
        island: str = HUB_ISLAND,
        duration: float = 2.0,
        best_times: list[str] | None = None,
    ) -> PointOfInterest:
        return PointOfInterest(
            id=location_id,
            name=f"Spot {location_id}",
            island=island,
            duration_hrs=duration,
            best_times=best_times or [],
            moods=["balanced"],
        )

    return _make


@pytest.fixture
def sample_locations(make_location):
    """Three two-hour stops at the hub and one three-hour stop on Havelock."""
    return [
        make_location("pb1"),
        make_location("pb2"),
        make_location("pb3"),
        make_location("hl1", island=HAVELOCK, duration=3.0),
    ]
