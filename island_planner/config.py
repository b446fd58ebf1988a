"""
Configuration management for the Island Planner system.

This module handles loading and managing configuration for the planner,
including environment variables, logging settings and the reference tables
(island order, fares, vehicle and hotel prices) consumed by the itinerary
generator and the cost aggregator.
"""

import os
from dataclasses import dataclass, field
from enum import Enum, StrEnum

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

HUB_ISLAND = "Port Blair (South Andaman)"

DEFAULT_ISLANDS = [
    HUB_ISLAND,
    "Havelock (Swaraj Dweep)",
    "Neil (Shaheed Dweep)",
    "Long Island (Middle Andaman)",
    "Rangat (Middle Andaman)",
    "Mayabunder (Middle Andaman)",
    "Diglipur (North Andaman)",
    "Little Andaman",
]


class LogLevel(str, Enum):
    """Log levels supported by the system."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HubPolicy(StrEnum):
    """What to do with the hub island when starting from it without picks."""

    INJECT = "inject"
    REORDER_ONLY = "reorder_only"


class CabModel(BaseModel):
    """A ground vehicle that can be hired for a full day."""

    id: str
    label: str
    day_rate: float = Field(..., ge=0)


class Hotel(BaseModel):
    """A bookable hotel on a single island."""

    id: str
    name: str
    tier: str = "Value"
    nightly_rate: float = Field(..., ge=0)


def _default_cab_models() -> list[CabModel]:
    return [
        CabModel(id="sedan", label="Sedan", day_rate=2500),
        CabModel(id="suv", label="SUV", day_rate=3200),
        CabModel(id="innova", label="Toyota Innova", day_rate=3800),
        CabModel(id="traveller", label="Tempo Traveller (12)", day_rate=5200),
    ]


def _default_hotels() -> dict[str, list[Hotel]]:
    return {
        HUB_ISLAND: [
            Hotel(id="pb_h1", name="PB Value Hotel", tier="Value", nightly_rate=3299),
            Hotel(id="pb_h2", name="PB Mid Hotel", tier="Mid", nightly_rate=5499),
            Hotel(
                id="pb_h3", name="PB Premium Hotel", tier="Premium", nightly_rate=8899
            ),
        ],
        "Havelock (Swaraj Dweep)": [
            Hotel(id="hl_h1", name="HL Value Hotel", tier="Value", nightly_rate=4499),
            Hotel(id="hl_h2", name="HL Mid Hotel", tier="Mid", nightly_rate=6999),
            Hotel(
                id="hl_h3", name="HL Premium Hotel", tier="Premium", nightly_rate=10999
            ),
        ],
        "Neil (Shaheed Dweep)": [
            Hotel(id="nl_h1", name="NL Value Hotel", tier="Value", nightly_rate=3399),
            Hotel(id="nl_h2", name="NL Mid Hotel", tier="Mid", nightly_rate=5699),
        ],
        "Long Island (Middle Andaman)": [
            Hotel(id="li_h1", name="LI Mid Hotel", tier="Mid", nightly_rate=6199),
        ],
        "Rangat (Middle Andaman)": [
            Hotel(id="rg_h1", name="Rangat Lodge", tier="Value", nightly_rate=2599),
        ],
        "Mayabunder (Middle Andaman)": [
            Hotel(id="mb_h1", name="Mayabunder Stay", tier="Value", nightly_rate=2399),
        ],
        "Diglipur (North Andaman)": [
            Hotel(id="dg_h1", name="DG Lodge", tier="Value", nightly_rate=2899),
        ],
        "Little Andaman": [
            Hotel(id="la_h1", name="Hut Stay", tier="Value", nightly_rate=2199),
        ],
    }


class ReferenceTables(BaseModel):
    """
    Fixed reference data used by the itinerary generator and cost aggregator.

    Passed in explicitly so that alternate pricing regimes or island groups
    can be planned (and tested) without touching module constants.
    """

    hub_island: str = Field(default=HUB_ISLAND, description="Arrival/departure island")
    island_order: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ISLANDS),
        description="Canonical island visiting order",
    )
    leisure_islands: list[str] = Field(
        default_factory=lambda: ["Havelock", "Neil"],
        description="Name fragments of islands where a scooter is the default",
    )
    hub_policy: HubPolicy = Field(default=HubPolicy.INJECT)

    max_stops_per_day: int = Field(default=4, description="Bucket size limit")
    max_hours_per_day: float = Field(default=7.0, description="Bucket time budget")
    default_duration_hrs: float = Field(default=2.0)
    day_cab_min_stops: int = Field(default=3)

    ferry_base_fare: float = Field(default=1500, ge=0)
    ferry_class_multipliers: dict[str, float] = Field(
        default_factory=lambda: {"Economy": 1.0, "Deluxe": 1.4, "Luxury": 1.9}
    )
    ferry_time_window: str = Field(default="08:00–09:30")
    cab_models: list[CabModel] = Field(default_factory=_default_cab_models)
    per_hop_rate: float = Field(default=500, ge=0)
    scooter_day_rate: float = Field(default=800, ge=0)
    charge_arrival_transport: bool = Field(
        default=False,
        description="Charge ground transport on the arrival day",
    )
    hotels: dict[str, list[Hotel]] = Field(default_factory=_default_hotels)

    arrival_label: str = "Arrival - Veer Savarkar Intl. Airport (IXZ)"
    transfer_label: str = "Airport → Hotel (Port Blair)"
    departure_label: str = "Airport Departure (IXZ) — Fly Out"

    @field_validator("max_stops_per_day", "day_cab_min_stops")
    @classmethod
    def validate_positive_int(cls, value: int) -> int:
        """Validate day limits are positive."""
        if value <= 0:
            raise ValueError(f"Day limits must be positive, got {value}")
        return value

    @field_validator("max_hours_per_day", "default_duration_hrs")
    @classmethod
    def validate_positive_hours(cls, value: float) -> float:
        """Validate hour budgets are positive."""
        if value <= 0:
            raise ValueError(f"Hours must be positive, got {value}")
        return value

    @field_validator("cab_models")
    @classmethod
    def validate_cab_models(cls, value: list[CabModel]) -> list[CabModel]:
        """At least one vehicle is needed as the fallback day-rate."""
        if not value:
            raise ValueError("At least one cab model must be configured")
        return value

    def island_rank(self, island: str) -> int:
        """Position of an island in the canonical order; unknown islands last."""
        try:
            return self.island_order.index(island)
        except ValueError:
            return len(self.island_order)

    def class_multiplier(self, ferry_class: str) -> float:
        """Ferry class price multiplier, 1 for unknown classes."""
        return self.ferry_class_multipliers.get(ferry_class, 1.0)

    def cab_day_rate(self, cab_model_id: str) -> float:
        """Day-rate of the chosen vehicle, falling back to the first one."""
        for cab in self.cab_models:
            if cab.id == cab_model_id:
                return cab.day_rate
        return self.cab_models[0].day_rate

    def find_hotel(self, island: str, hotel_id: str) -> Hotel | None:
        """Look up a hotel by id among the hotels of an island."""
        for hotel in self.hotels.get(island, []):
            if hotel.id == hotel_id:
                return hotel
        return None


class LoaderConfig(BaseModel):
    """Configuration for reading reference data files."""

    max_attempts: int = Field(default=3, description="Read attempts per file")
    min_wait_seconds: float = Field(default=0.2)
    max_wait_seconds: float = Field(default=2.0)

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """Create a LoaderConfig from environment variables."""
        return cls(
            max_attempts=int(os.getenv("LOADER_MAX_ATTEMPTS", "3")),
            min_wait_seconds=float(os.getenv("LOADER_MIN_WAIT", "0.2")),
            max_wait_seconds=float(os.getenv("LOADER_MAX_WAIT", "2.0")),
        )


class SystemConfig(BaseModel):
    """System-wide configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    data_dir: str = Field(default="data", description="Reference data directory")
    currency: str = Field(default="INR", description="Display currency code")

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Create a SystemConfig from environment variables."""
        return cls(
            log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO")),
            data_dir=os.getenv("PLANNER_DATA_DIR", "data"),
            currency=os.getenv("PLANNER_CURRENCY", "INR"),
        )


@dataclass
class PlannerSettings:
    """Main configuration class for the Island Planner system."""

    system: SystemConfig = field(default_factory=SystemConfig.from_env)
    loader: LoaderConfig = field(default_factory=LoaderConfig.from_env)
    tables: ReferenceTables = field(default_factory=ReferenceTables)

    class ConfigurationError(Exception):
        """Exception raised for configuration validation errors."""

        pass

    def validate(self, raise_error: bool = False) -> bool:
        """
        Validate the entire configuration.

        Args:
            raise_error: If True, raise ConfigurationError instead of returning False

        Returns:
            True if configuration is valid, False otherwise

        Raises:
            ConfigurationError: If raise_error is True and validation fails
        """
        try:
            if self.loader.max_attempts <= 0:
                raise ValueError("Loader attempts must be positive")

            if self.tables.hub_island not in self.tables.island_order:
                raise ValueError(
                    f"Hub island '{self.tables.hub_island}' missing from island order"
                )

            return True

        except ValueError as e:
            logger.error(f"Configuration validation failed: {e!s}")

            if raise_error:
                raise self.ConfigurationError(
                    f"Configuration validation failed: {e!s}"
                ) from e

            return False


# Global configuration instance
config = PlannerSettings()


def initialize_config(
    custom_config_path: str | None = None,
    validate: bool = True,
    raise_on_error: bool = False,
) -> PlannerSettings:
    """
    Initialize and validate the configuration.

    Args:
        custom_config_path: Path to a custom .env file to load
        validate: Whether to validate the configuration
        raise_on_error: Whether to raise an exception on validation failure

    Returns:
        Initialized and validated configuration object

    Raises:
        PlannerSettings.ConfigurationError: If validation fails and
            raise_on_error is True
        FileNotFoundError: If custom_config_path is provided but does not exist
    """
    if custom_config_path:
        if not os.path.exists(custom_config_path):
            error_msg = f"Custom configuration file not found: {custom_config_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading custom configuration from {custom_config_path}")
        load_dotenv(custom_config_path, override=True)

        # Reload into the existing global object so importers see the update
        config.system = SystemConfig.from_env()
        config.loader = LoaderConfig.from_env()

    if validate:
        is_valid = config.validate(raise_error=raise_on_error)
        if not is_valid:
            logger.warning(
                "Configuration validation failed. Itineraries may be planned "
                "against inconsistent reference tables."
            )

    return config
