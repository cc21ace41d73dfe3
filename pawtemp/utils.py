"""Formatting and validation helpers."""

import re
from datetime import datetime
from typing import Optional

ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")


def format_temperature(temp: float, unit: str = "fahrenheit") -> str:
    """Format a temperature to one decimal with its unit symbol, e.g. '98.6°F'."""
    symbol = "°C" if unit == "celsius" else "°F"
    return f"{temp:.1f}{symbol}"


def validate_zip_code(zip_code: str) -> bool:
    """US ZIP code, 5 digits with optional +4 suffix."""
    return bool(ZIP_CODE_PATTERN.match(zip_code.strip()))


def format_location(lat: float, lon: float) -> str:
    return f"{lat:.4f}, {lon:.4f}"


def is_valid_coordinates(lat: float, lon: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lon <= 180


def get_current_time_of_day() -> int:
    """Current local hour (0-23)."""
    return datetime.now().hour


def parse_timestamp_hour(timestamp: Optional[str]) -> Optional[int]:
    """
    Extract the hour from an ISO timestamp such as '2024-07-01T15:00'.

    Returns None if the timestamp is missing or unparseable.
    """
    if not timestamp:
        return None
    try:
        return datetime.fromisoformat(timestamp).hour
    except (TypeError, ValueError):
        return None


def truncate_to_hour(timestamp: Optional[str]) -> Optional[str]:
    """'2024-07-01T15:42' -> '2024-07-01T15:00', or None if unparseable."""
    if not timestamp:
        return None
    try:
        parsed = datetime.fromisoformat(timestamp)
    except (TypeError, ValueError):
        return None
    return parsed.replace(minute=0, second=0, microsecond=0).strftime("%Y-%m-%dT%H:%M")
