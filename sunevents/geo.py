"""
Coordinate parsing and timezone resolution for SunEvents.
Resolves the UTC offset in effect on a specific calendar date.
"""

import os
import logging
from datetime import date, datetime, time
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from timezonefinder import TimezoneFinder

from .models import GeoCoordinate

logger = logging.getLogger(__name__)

# Environment configuration
DEFAULT_TIMEZONE = os.environ.get('DEFAULT_TIMEZONE', 'UTC')

_tf: Optional[TimezoneFinder] = None


class TimezoneError(Exception):
    """Raised when timezone resolution fails."""
    pass


def get_timezone_finder() -> TimezoneFinder:
    """Lazily create the shared TimezoneFinder (loading its data is slow)."""
    global _tf

    if _tf is None:
        _tf = TimezoneFinder()
    return _tf


def validate_coordinate(coordinate: GeoCoordinate) -> GeoCoordinate:
    """Return coordinate unchanged, or raise ValueError if out of range."""
    if not (-90 <= coordinate.latitude <= 90):
        raise ValueError(f"Latitude {coordinate.latitude} out of range [-90, 90]")
    if not (-180 <= coordinate.longitude <= 180):
        raise ValueError(f"Longitude {coordinate.longitude} out of range [-180, 180]")
    return coordinate


def parse_gps_string(gps: str) -> GeoCoordinate:
    """
    Parse GPS coordinate string "lat,lon".
    Returns a validated GeoCoordinate.
    """
    try:
        parts = gps.strip().split(',')
        if len(parts) != 2:
            raise ValueError("GPS string must be 'lat,lon' format")

        coordinate = GeoCoordinate(float(parts[0].strip()), float(parts[1].strip()))
        return validate_coordinate(coordinate)

    except (ValueError, IndexError) as e:
        raise ValueError(f"Invalid GPS string format: {str(e)}")


@lru_cache(maxsize=1000)
def resolve_timezone(lat: float, lon: float) -> str:
    """
    Resolve IANA timezone ID from coordinates.
    Returns timezone ID string (e.g., 'America/New_York').
    """
    tf = get_timezone_finder()

    tz_name = tf.certain_timezone_at(lat=lat, lng=lon)

    if tz_name:
        logger.debug(f"Resolved timezone for ({lat}, {lon}): {tz_name}")
        return tz_name

    # Points outside every polygon get the zone timezonefinder considers likeliest
    tz_name = tf.timezone_at(lat=lat, lng=lon)

    if tz_name:
        logger.warning(f"Using best-guess timezone for ({lat}, {lon}): {tz_name}")
        return tz_name

    # Rough nautical zone from longitude
    offset_hours = round(lon / 15)
    logger.warning(f"No timezone found for ({lat}, {lon}), using nautical zone {offset_hours:+d}")
    if offset_hours == 0:
        return DEFAULT_TIMEZONE
    elif offset_hours > 0:
        return f'Etc/GMT-{offset_hours}'  # Etc/GMT signs are inverted
    else:
        return f'Etc/GMT+{abs(offset_hours)}'


def get_timezone_info(lat: float, lon: float) -> ZoneInfo:
    """Get ZoneInfo object for coordinates."""
    tz_name = resolve_timezone(lat, lon)

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.error(f"Failed to create ZoneInfo for {tz_name}: {e}")
        raise TimezoneError(f"Invalid timezone: {tz_name}")


def utc_offset_hours(tzinfo: ZoneInfo, day: date) -> float:
    """
    UTC offset of tzinfo in hours on the given calendar date.
    Evaluated at local noon so DST transitions (usually overnight) resolve to
    the offset in force for most of that day.
    """
    local_noon = datetime.combine(day, time(12, 0), tzinfo=tzinfo)
    offset = local_noon.utcoffset()

    if offset is None:
        raise TimezoneError(f"Timezone {tzinfo} has no UTC offset for {day.isoformat()}")

    return offset.total_seconds() / 3600.0
