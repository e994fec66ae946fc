"""
Formatting utilities for display.

Internal values are meters, seconds and seconds-per-meter;
these helpers convert at the response boundary only.
"""


def meters_to_km(meters: float) -> float:
    """Convert meters to kilometers."""
    return meters / 1000


def safe_pace(moving_time_s: float, distance_m: float) -> float:
    """
    Pace in seconds per meter.

    Returns 0 when there is no distance. Zero means "no data",
    callers must never divide by it.
    """
    if distance_m > 0:
        return moving_time_s / distance_m
    return 0.0


def format_pace(pace_sec_per_m: float) -> str:
    """
    Format pace as 'M:SS /km'.

    Args:
        pace_sec_per_m: Pace in seconds per meter

    Returns:
        Formatted string (e.g., '5:00 /km'), 'N/A' for zero pace
    """
    if pace_sec_per_m <= 0:
        return "N/A"

    sec_per_km = round(pace_sec_per_m * 1000)
    minutes, seconds = divmod(sec_per_km, 60)

    return f"{minutes}:{seconds:02d} /km"
