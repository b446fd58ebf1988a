"""
Helper utilities for the Island Planner system.

This module provides general utility functions used across the application.
"""

import json
import math
from collections.abc import Hashable, Iterable
from datetime import date, timedelta
from typing import Any, TypeVar

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def is_number(value: Any) -> bool:
    """True for finite int/float values; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def safe_num(value: Any) -> float:
    """
    Coerce a value to a usable amount.

    Args:
        value: Anything that may hold a price, count or duration

    Returns:
        The value as a float, or 0 if it is not a finite, non-negative number
    """
    if not is_number(value) or value < 0:
        return 0.0
    return float(value)


def format_inr(amount: Any) -> str:
    """
    Format an amount in rupees with Indian digit grouping and no decimals.

    Args:
        amount: Amount to format; invalid amounts are shown as zero

    Returns:
        Formatted price string, e.g. ``₹1,23,456``
    """
    digits = str(round(safe_num(amount)))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join([*groups, tail])
    return f"₹{digits}"


def format_price(amount: Any, currency: str = "INR") -> str:
    """
    Format a price in the given currency.

    Args:
        amount: Price amount; invalid amounts are shown as zero
        currency: ISO 4217 currency code

    Returns:
        Rupee amounts with Indian grouping, others as ``CODE 1,234``
    """
    if currency.upper() == "INR":
        return format_inr(amount)
    return f"{currency.upper()} {safe_num(amount):,.0f}"


def add_days(start: date | str | None, n: int) -> date | None:
    """
    Add calendar days to a start date.

    Args:
        start: A date or an ISO ``YYYY-MM-DD`` string; empty means no date
        n: Number of days to add

    Returns:
        The shifted date, or None when no usable start date was given
    """
    if not start:
        return None
    if isinstance(start, str):
        try:
            start = date.fromisoformat(start)
        except ValueError:
            return None
    return start + timedelta(days=n)


def dedupe(values: Iterable[H]) -> list[H]:
    """Drop repeated values, keeping first-seen order."""
    return list(dict.fromkeys(values))


def safe_load_json(
    json_str: str, default: T | None = None
) -> dict[str, Any] | list[Any] | T:
    """
    Safely load a JSON string, returning a default value if parsing fails.

    Args:
        json_str: JSON string to parse
        default: Default value to return if parsing fails

    Returns:
        Parsed JSON data or default value
    """
    if not json_str:
        return default if default is not None else {}

    try:
        return json.loads(json_str)
    except json.JSONDecodeError:
        return default if default is not None else {}
