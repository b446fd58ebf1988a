"""Tests for configuration and reference tables."""

import pydantic
import pytest

from island_planner import config as config_module
from island_planner.config import (
    DEFAULT_ISLANDS,
    HUB_ISLAND,
    HubPolicy,
    LoaderConfig,
    LogLevel,
    PlannerSettings,
    ReferenceTables,
    SystemConfig,
    initialize_config,
)


def test_default_tables(tables):
    assert tables.hub_island == HUB_ISLAND
    assert tables.island_order == DEFAULT_ISLANDS
    assert tables.hub_policy == HubPolicy.INJECT
    assert tables.max_stops_per_day == 4
    assert tables.max_hours_per_day == 7.0


def test_island_rank_puts_unknown_islands_last(tables):
    assert tables.island_rank(HUB_ISLAND) == 0
    assert tables.island_rank("Little Andaman") == 7
    assert tables.island_rank("Atlantis") == len(DEFAULT_ISLANDS)


def test_class_multiplier(tables):
    assert tables.class_multiplier("Luxury") == 1.9
    assert tables.class_multiplier("Hovercraft") == 1.0


def test_cab_day_rate(tables):
    assert tables.cab_day_rate("traveller") == 5200
    assert tables.cab_day_rate("unknown") == 2500


def test_find_hotel(tables):
    hotel = tables.find_hotel("Neil (Shaheed Dweep)", "nl_h2")
    assert hotel.nightly_rate == 5699
    assert tables.find_hotel(HUB_ISLAND, "nl_h2") is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_stops_per_day": 0},
        {"max_hours_per_day": -1},
        {"default_duration_hrs": 0},
        {"cab_models": []},
    ],
)
def test_invalid_tables_are_rejected(overrides):
    with pytest.raises(pydantic.ValidationError):
        ReferenceTables(**overrides)


def test_loader_config_from_env(monkeypatch):
    monkeypatch.setenv("LOADER_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("LOADER_MIN_WAIT", "0")
    loader = LoaderConfig.from_env()
    assert loader.max_attempts == 5
    assert loader.min_wait_seconds == 0
    assert loader.max_wait_seconds == 2.0


def test_system_config_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("PLANNER_DATA_DIR", "/srv/data")
    system = SystemConfig.from_env()
    assert system.log_level == LogLevel.DEBUG
    assert system.data_dir == "/srv/data"
    assert system.currency == "INR"


def test_settings_validation():
    settings = PlannerSettings(
        system=SystemConfig(), loader=LoaderConfig(), tables=ReferenceTables()
    )
    assert settings.validate() is True

    settings.tables = ReferenceTables(island_order=["Havelock (Swaraj Dweep)"])
    assert settings.validate() is False
    with pytest.raises(PlannerSettings.ConfigurationError):
        settings.validate(raise_error=True)

    settings.tables = ReferenceTables()
    settings.loader = LoaderConfig(max_attempts=0)
    assert settings.validate() is False


def test_initialize_config_missing_file():
    with pytest.raises(FileNotFoundError):
        initialize_config("/nonexistent/planner.env")


def test_initialize_config_loads_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / "planner.env"
    env_file.write_text("PLANNER_DATA_DIR=/tmp/islands\nLOADER_MAX_ATTEMPTS=4\n")
    # restored at teardown
    monkeypatch.setenv("PLANNER_DATA_DIR", "data")
    monkeypatch.setenv("LOADER_MAX_ATTEMPTS", "3")
    monkeypatch.setattr(config_module.config, "system", config_module.config.system)
    monkeypatch.setattr(config_module.config, "loader", config_module.config.loader)

    settings = initialize_config(str(env_file))

    assert settings is config_module.config
    assert settings.system.data_dir == "/tmp/islands"
    assert settings.loader.max_attempts == 4
