"""
Reference data repository backed by JSON files.

Reads the location, activity and location-to-activity files from a data
directory and hands back normalized models. A file that is missing,
unreadable or malformed yields an empty collection and marks the data as
degraded; the planner keeps working with whatever loaded.
"""

import json
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from island_planner.config import LoaderConfig, ReferenceTables
from island_planner.data.models import Activity, LocationActivityMapping, PointOfInterest
from island_planner.services.normalizer import (
    normalize_activity,
    normalize_locations,
    normalize_mapping,
)
from island_planner.utils.error_handling import (
    PlannerError,
    ReferenceDataError,
    ValidationError,
    with_retry,
)
from island_planner.utils.logging import get_logger

logger = get_logger(__name__)

LOCATIONS_FILE = "locations.json"
ACTIVITIES_FILE = "activities.json"
MAPPINGS_FILE = "location_adventures.json"


class DataStatus(StrEnum):
    READY = "ready"
    DEGRADED = "degraded"


@dataclass
class ReferenceData:
    """Everything the planner needs from storage."""

    locations: list[PointOfInterest] = field(default_factory=list)
    activities: list[Activity] = field(default_factory=list)
    mappings: list[LocationActivityMapping] = field(default_factory=list)
    status: DataStatus = DataStatus.READY
    failed_sources: list[str] = field(default_factory=list)


class ReferenceDataRepository:
    """Repository for the JSON reference data files."""

    def __init__(
        self,
        data_dir: str | Path,
        loader: LoaderConfig | None = None,
        tables: ReferenceTables | None = None,
    ):
        self.data_dir = Path(data_dir)
        self.loader = loader or LoaderConfig()
        self.tables = tables or ReferenceTables()
        self._failed: list[str] = []

    # --- Helpers ---

    def _read_file(self, filename: str) -> Any:
        """Read and decode one file; I/O errors are retried by the caller."""
        path = self.data_dir / filename
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise ValidationError(f"{filename} is not valid UTF-8", e) from e
        except OSError as e:
            raise ReferenceDataError("could not read file", filename, e) from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Malformed JSON in {filename}", e) from e

    def _load_list(self, filename: str) -> list[Any]:
        path = self.data_dir / filename
        if not path.exists():
            logger.error(f"[data] {filename} not found in {self.data_dir}")
            self._failed.append(filename)
            return []

        read = with_retry(
            max_attempts=self.loader.max_attempts,
            min_wait_seconds=self.loader.min_wait_seconds,
            max_wait_seconds=self.loader.max_wait_seconds,
        )(self._read_file)

        try:
            data = read(filename)
        except PlannerError as e:
            logger.error(f"[data] {filename} failed: {e!s}")
            self._failed.append(filename)
            return []

        if not isinstance(data, list):
            logger.warning(f"[data] {filename} is not a list, ignoring it")
            self._failed.append(filename)
            return []
        return data

    # --- Collections ---

    def load_locations(self) -> list[PointOfInterest]:
        return normalize_locations(
            self._load_list(LOCATIONS_FILE),
            default_duration=self.tables.default_duration_hrs,
        )

    def load_activities(self) -> list[Activity]:
        return [normalize_activity(raw) for raw in self._load_list(ACTIVITIES_FILE)]

    def load_mappings(self) -> list[LocationActivityMapping]:
        mappings = (normalize_mapping(raw) for raw in self._load_list(MAPPINGS_FILE))
        return [m for m in mappings if m is not None]

    def load_all(self) -> ReferenceData:
        """Load every reference collection, recording which sources failed."""
        self._failed = []
        data = ReferenceData(
            locations=self.load_locations(),
            activities=self.load_activities(),
            mappings=self.load_mappings(),
        )
        if self._failed:
            data.status = DataStatus.DEGRADED
            data.failed_sources = list(self._failed)

        logger.info(
            f"Loaded {len(data.locations)} locations, {len(data.activities)} "
            f"activities, {len(data.mappings)} mappings ({data.status})"
        )
        return data
