"""
Reference data normalization.

Reconciles the different shapes location, activity and mapping records come
in and turns them into canonical models. Nothing here raises for malformed
input: every field falls back to a safe default so that an itinerary can
always be planned from imperfect data.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from island_planner.data.models import Activity, LocationActivityMapping, PointOfInterest
from island_planner.utils.helpers import is_number, safe_num
from island_planner.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DURATION_HRS = 2.0
UNNAMED = "Unnamed spot"

# Fields consumed by normalize_location; anything else is kept in `extra`.
_LOCATION_FIELDS = {
    "id",
    "name",
    "location",
    "island",
    "durationHrs",
    "typicalHours",
    "bestTimes",
    "bestTime",
    "moods",
    "brief",
    "description",
    "image",
}

MOOD_KEYWORDS: list[tuple[str, re.Pattern[str]]] = [
    ("adventure", re.compile(r"snorkel|scuba|dive|trek|kayak|surf|jet|parasail")),
    ("romantic", re.compile(r"beach|sunset|view|cove|lagoon|bay|sandbar")),
    ("family", re.compile(r"museum|culture|heritage|jail|cellular|memorial")),
    (
        "photography",
        re.compile(r"wildlife|reef|coral|mangrove|bird|nature|peak|national park"),
    ),
    (
        "offbeat",
        re.compile(
            r"lighthouse|mangrove|cave|long island|mud volcano|baratang"
            r"|saddle peak|remote"
        ),
    ),
]


def _first_text(raw: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _first_duration(
    raw: Mapping[str, Any], keys: tuple[str, ...], default: float
) -> float:
    for key in keys:
        value = raw.get(key)
        if is_number(value) and value >= 0:
            return float(value)
    return default


def _best_times(raw: Mapping[str, Any]) -> list[str]:
    value = raw.get("bestTimes")
    if isinstance(value, list | tuple):
        return [str(v) for v in value if v is not None]
    single = raw.get("bestTime")
    if single:
        return [str(single)]
    return []


def infer_moods(name: str, description: str | None, duration_hrs: float) -> list[str]:
    """
    Guess descriptive moods for a location that has none.

    Keyword families are checked first, then the duration. A location whose
    text matches no keyword family is always tagged "balanced".

    Args:
        name: Location name
        description: Free-text description, if any
        duration_hrs: Typical visit duration in hours

    Returns:
        Moods in evaluation order, without duplicates
    """
    text = f"{name or ''} {description or ''}".lower()
    moods: list[str] = []

    def add(mood: str) -> None:
        if mood not in moods:
            moods.append(mood)

    for mood, pattern in MOOD_KEYWORDS:
        if pattern.search(text):
            add(mood)
    keyword_matched = bool(moods)

    if duration_hrs <= 2:
        add("relaxed")
    if duration_hrs >= 3:
        add("balanced")
    if duration_hrs >= 4:
        add("active")

    if not keyword_matched:
        add("balanced")
    return moods


def normalize_location(
    raw: Any, default_duration: float = DEFAULT_DURATION_HRS
) -> PointOfInterest:
    """
    Build a PointOfInterest from a raw record of unknown shape.

    Args:
        raw: Usually a dict decoded from JSON; anything else yields a placeholder
        default_duration: Hours assumed when the record has no usable duration

    Returns:
        A PointOfInterest with every field resolved to a valid value
    """
    if not isinstance(raw, Mapping):
        logger.warning(f"Location record is not a mapping: {type(raw).__name__}")
        raw = {}

    name = _first_text(raw, "name", "location") or UNNAMED
    duration = _first_duration(raw, ("durationHrs", "typicalHours"), default_duration)
    description = _first_text(raw, "brief", "description")

    raw_id = raw.get("id")
    location_id = str(raw_id) if raw_id not in (None, "") else name

    moods = raw.get("moods")
    if isinstance(moods, list) and moods:
        moods = [str(m) for m in moods]
    else:
        moods = infer_moods(name, description, duration)

    island = raw.get("island")
    image = raw.get("image")

    return PointOfInterest(
        id=location_id,
        name=name,
        island=island if isinstance(island, str) else "",
        duration_hrs=duration,
        best_times=_best_times(raw),
        moods=moods,
        description=description,
        image=image if isinstance(image, str) else "",
        extra={str(k): v for k, v in raw.items() if k not in _LOCATION_FIELDS},
    )


def normalize_locations(
    records: Iterable[Any], default_duration: float = DEFAULT_DURATION_HRS
) -> list[PointOfInterest]:
    """Normalize a batch of location records, keeping their order."""
    return [normalize_location(raw, default_duration) for raw in records]


def normalize_activity(raw: Any) -> Activity:
    """
    Build an Activity, resolving its price from ``basePriceINR`` or ``price``.

    Args:
        raw: Activity record of unknown shape

    Returns:
        An Activity whose price is 0 when no usable price is present
    """
    if not isinstance(raw, Mapping):
        raw = {}

    price = raw.get("basePriceINR")
    if price is None:
        price = raw.get("price")

    islands = raw.get("islands")
    raw_id = raw.get("id")
    name = _first_text(raw, "name") or "Unnamed activity"

    return Activity(
        id=str(raw_id) if raw_id not in (None, "") else name,
        name=name,
        price=safe_num(price),
        category=_first_text(raw, "category", "type") or "Adventure",
        islands=[str(i) for i in islands] if isinstance(islands, list) else [],
    )


def normalize_mapping(raw: Any) -> LocationActivityMapping | None:
    """
    Build a location-to-activity mapping from either naming convention.

    Returns:
        The mapping, or None when the record names no location
    """
    if not isinstance(raw, Mapping):
        return None

    location_id = raw.get("locationId") or raw.get("location_id")
    if not location_id:
        return None

    activity_ids = raw.get("adventureIds") or raw.get("adventure_ids") or []
    if not isinstance(activity_ids, list):
        activity_ids = []

    return LocationActivityMapping(
        location_id=str(location_id),
        activity_ids=[str(a) for a in activity_ids],
    )
