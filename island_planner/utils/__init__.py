"""
Utility modules for the Island Planner system.
"""

from island_planner.config import LogLevel
from island_planner.utils.error_handling import (
    PlannerError,
    ReferenceDataError,
    ValidationError,
    with_retry,
)
from island_planner.utils.helpers import (
    add_days,
    dedupe,
    format_inr,
    format_price,
    is_number,
    safe_load_json,
    safe_num,
)
from island_planner.utils.logging import get_logger, setup_logging

__all__ = [
    "LogLevel",
    "PlannerError",
    "ReferenceDataError",
    "ValidationError",
    "add_days",
    "dedupe",
    "format_inr",
    "format_price",
    "get_logger",
    "is_number",
    "safe_load_json",
    "safe_num",
    "setup_logging",
    "with_retry",
]
