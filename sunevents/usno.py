"""
USNO sunrise/sunset algorithm.
Source: Almanac for Computers, 1990. Nautical Almanac Office,
United States Naval Observatory, Washington, DC 20392.

The published recipe works in degrees throughout, so every step below is
written against the deg_* helpers rather than the radian math functions.
"""

import math
import logging
from typing import Optional, Tuple

from .models import SunEvent

logger = logging.getLogger(__name__)


def deg_sin(x: float) -> float:
    return math.sin(math.radians(x))


def deg_cos(x: float) -> float:
    return math.cos(math.radians(x))


def deg_tan(x: float) -> float:
    return math.tan(math.radians(x))


def deg_asin(x: float) -> float:
    return math.degrees(math.asin(x))


def deg_acos(x: float) -> float:
    return math.degrees(math.acos(x))


def deg_atan(x: float) -> float:
    return math.degrees(math.atan(x))


def normalize_range(value: float, maximum: float) -> float:
    """
    Reduce value into [0, maximum) by repeated addition/subtraction.
    Expects a finite value within a few cycles of the range.
    """
    while value < 0:
        value += maximum

    while value >= maximum:
        value -= maximum

    return value


def day_of_year(year: int, month: int, day: int) -> int:
    """Calculate day of the year (1-366)."""
    n1 = math.floor(275 * month / 9)
    n2 = math.floor((month + 9) / 12)
    n3 = 1 + math.floor((year - 4 * math.floor(year / 4) + 2) / 3)
    return n1 - (n2 * n3) + day - 30


def approximate_time(n: int, longitude: float, event: SunEvent) -> float:
    """Approximate event time in days, from 06:00 or 18:00 local mean time."""
    lng_hour = longitude / 15.0

    if event is SunEvent.RISE:
        return n + ((6.0 - lng_hour) / 24.0)
    return n + ((18.0 - lng_hour) / 24.0)


def sun_mean_anomaly(t: float) -> float:
    """Calculate sun's mean anomaly (degrees)."""
    return (0.9856 * t) - 3.289


def sun_true_longitude(m: float) -> float:
    """Calculate sun's true longitude (degrees, [0, 360))."""
    true_long = m + (1.916 * deg_sin(m)) + (0.020 * deg_sin(2 * m)) + 282.634
    return normalize_range(true_long, 360)


def sun_right_ascension(true_long: float) -> float:
    """Calculate sun's right ascension (hours), in the same quadrant as L."""
    ra = normalize_range(deg_atan(0.91764 * deg_tan(true_long)), 360)

    l_quadrant = math.floor(true_long / 90.0) * 90.0
    ra_quadrant = math.floor(ra / 90.0) * 90.0
    ra = ra + (l_quadrant - ra_quadrant)

    return ra / 15.0


def sun_declination(true_long: float) -> Tuple[float, float]:
    """Calculate (sin, cos) of the sun's declination."""
    sin_dec = 0.39782 * deg_sin(true_long)
    cos_dec = deg_cos(deg_asin(sin_dec))
    return sin_dec, cos_dec


def local_hour_angle_cosine(zenith: float, sin_dec: float, cos_dec: float,
                            latitude: float) -> float:
    """
    Cosine of the sun's local hour angle at the given zenith.
    Above 1 the sun never rises that day; below -1 it never sets.
    """
    return (deg_cos(zenith) - (sin_dec * deg_sin(latitude))) / \
           (cos_dec * deg_cos(latitude))


def local_hour_angle(cos_h: float, event: SunEvent) -> float:
    """Convert cosH (must be within [-1, 1]) to an hour angle in hours."""
    if event is SunEvent.RISE:
        h = 360.0 - deg_acos(cos_h)
    else:
        h = deg_acos(cos_h)

    return h / 15.0


def local_mean_time(h: float, ra: float, t: float) -> float:
    """Calculate local mean time of the event (hours, not normalized)."""
    return h + ra - (0.06571 * t) - 6.622


def event_hour_angle_cosine(year: int, month: int, day: int,
                            latitude: float, longitude: float,
                            event: SunEvent, zenith: float) -> float:
    """Run steps 1-7a for a date and return cosH."""
    n = day_of_year(year, month, day)
    t = approximate_time(n, longitude, event)
    true_long = sun_true_longitude(sun_mean_anomaly(t))
    sin_dec, cos_dec = sun_declination(true_long)
    return local_hour_angle_cosine(zenith, sin_dec, cos_dec, latitude)


def solar_event_hours(year: int, month: int, day: int,
                      latitude: float, longitude: float,
                      local_offset_hours: float,
                      event: SunEvent, zenith: float) -> Optional[float]:
    """
    Calculate the local time of a rise/set event as fractional hours in [0, 24).
    Returns None when the sun does not reach the zenith on this date.
    """
    lng_hour = longitude / 15.0

    n = day_of_year(year, month, day)
    t = approximate_time(n, longitude, event)
    m = sun_mean_anomaly(t)
    true_long = sun_true_longitude(m)
    ra = sun_right_ascension(true_long)
    sin_dec, cos_dec = sun_declination(true_long)

    cos_h = local_hour_angle_cosine(zenith, sin_dec, cos_dec, latitude)

    if cos_h > 1:
        logger.debug(f"Sun never rises on {year}-{month:02d}-{day:02d} at "
                     f"({latitude}, {longitude}) for zenith {zenith}")
        return None
    elif cos_h < -1:
        logger.debug(f"Sun never sets on {year}-{month:02d}-{day:02d} at "
                     f"({latitude}, {longitude}) for zenith {zenith}")
        return None

    h = local_hour_angle(cos_h, event)
    local_t = local_mean_time(h, ra, t)

    ut = normalize_range(local_t - lng_hour, 24)
    return normalize_range(ut + local_offset_hours, 24)


def hours_to_clock(hours: float) -> Tuple[int, int, int]:
    """Split fractional hours into (hour, minute, second), truncating each part."""
    hour = math.trunc(hours)
    hour_seconds = math.trunc(3600 * (hours - hour))
    minute = math.trunc(hour_seconds / 60)
    second = hour_seconds - (minute * 60)
    return hour, minute, second
