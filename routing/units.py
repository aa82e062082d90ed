#Purpose: Travel modes, unit systems and human-readable formatting.
#OSRM only returns raw meters/seconds, so these helpers produce the same kind of
#text ("0.8 mi", "14 mins") the Google Distance Matrix returns natively.

from enum import Enum

METERS_PER_MILE = 1609.344
FEET_PER_METER = 3.28084


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"


class UnitSystem(str, Enum):
    IMPERIAL = "imperial"
    METRIC = "metric"


def format_distance(meters: float, units: UnitSystem = UnitSystem.IMPERIAL) -> str:
    """
    Imperial: feet below a tenth of a mile, otherwise miles with one decimal.
    Metric: whole meters below 1 km, otherwise kilometers with one decimal.
    """
    if meters < 0:
        raise ValueError("distance cannot be negative")

    if units == UnitSystem.IMPERIAL:
        miles = meters / METERS_PER_MILE
        if miles < 0.1:
            return f"{round(meters * FEET_PER_METER):,} ft"
        return f"{miles:,.1f} mi"

    if meters < 1000:
        return f"{round(meters):,} m"
    return f"{meters / 1000:,.1f} km"


def format_duration(seconds: float) -> str:
    """
    Rounded to whole minutes, never below one minute:
    45 -> "1 min", 840 -> "14 mins", 3900 -> "1 hour 5 mins".
    """
    if seconds < 0:
        raise ValueError("duration cannot be negative")

    minutes = max(1, int(round(seconds / 60)))
    hours, minutes = divmod(minutes, 60)

    parts = []
    if hours:
        parts.append(f"{hours} hour" if hours == 1 else f"{hours} hours")
    if minutes:
        parts.append(f"{minutes} min" if minutes == 1 else f"{minutes} mins")
    return " ".join(parts)
