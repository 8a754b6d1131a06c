"""Duration normalization for reminder requests.

Turns the quantity and unit tokens captured by the intent parser
("20", "minutes") into a canonical number of seconds.
"""

from enum import Enum


class TimeUnit(Enum):
    """Supported duration units."""
    NONE = "none"
    SECONDS = "second"
    MINUTES = "minute"
    HOURS = "hour"


_MULTIPLIERS = {
    TimeUnit.SECONDS: 1,
    TimeUnit.MINUTES: 60,
    TimeUnit.HOURS: 3600,
}

# Longest reminder accepted; also keeps fire times representable as floats
MAX_SECONDS = 366 * 24 * 3600


def parse_quantity(token: str) -> int:
    """Parse a quantity token.

    Args:
        token: "a", "an" or a non-negative integer literal

    Returns:
        The quantity as an int

    Raises:
        ValueError: If the token is neither numeric nor an article
    """
    normalized = token.strip().lower()
    if normalized in ("a", "an"):
        return 1
    if not normalized.isdigit():
        raise ValueError(f"Invalid quantity: {token!r}")
    return int(normalized)


def parse_unit(token: str) -> TimeUnit:
    """Map a unit token to a TimeUnit by case-insensitive prefix."""
    normalized = token.strip().lower()
    if normalized.startswith("sec"):
        return TimeUnit.SECONDS
    if normalized.startswith("min"):
        return TimeUnit.MINUTES
    if normalized.startswith("hour"):
        return TimeUnit.HOURS
    return TimeUnit.NONE


def to_seconds(quantity: int, unit: TimeUnit) -> int:
    """Convert a quantity of some unit to seconds.

    Each unit has a single multiplier; minutes are never scaled again as hours.

    Raises:
        ValueError: For TimeUnit.NONE, which has no meaningful duration, or for
            durations longer than MAX_SECONDS
    """
    multiplier = _MULTIPLIERS.get(unit)
    if multiplier is None:
        raise ValueError(f"Cannot convert unit {unit.value!r} to seconds")
    seconds = quantity * multiplier
    if seconds > MAX_SECONDS:
        raise ValueError(f"Duration exceeds the {MAX_SECONDS} second limit")
    return seconds


def format_seconds(seconds: int) -> str:
    """Render a second count as "1 second" or "N seconds"."""
    unit = "second" if seconds == 1 else "seconds"
    return f"{seconds} {unit}"
