"""
Sun event calculations using the USNO algorithm.
Handles sunrise, sunset, dawn, dusk, twilights, and polar edge cases.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Any, Union
from zoneinfo import ZoneInfo
import logging

from .models import CalendarDate, GeoCoordinate, SunEvent, TimeOfDay
from .usno import event_hour_angle_cosine, hours_to_clock, solar_event_hours
from .geo import utc_offset_hours

logger = logging.getLogger(__name__)

# Zenith angles (degrees from straight overhead)
SUNRISE_SUNSET_ZENITH = 90.0
DAWN_DUSK_ZENITH = 83.0

OFFICIAL_ZENITH = 90.0 + 50.0 / 60.0
CIVIL_ZENITH = 96.0
NAUTICAL_ZENITH = 102.0
ASTRONOMICAL_ZENITH = 108.0

TWILIGHT_ZENITHS = {
    'official': OFFICIAL_ZENITH,
    'civil': CIVIL_ZENITH,
    'nautical': NAUTICAL_ZENITH,
    'astronomical': ASTRONOMICAL_ZENITH,
}

DayLike = Union[CalendarDate, date]


def _calendar_date(day: DayLike) -> CalendarDate:
    if isinstance(day, CalendarDate):
        return day
    return CalendarDate.from_date(day)


def solar_event(day: DayLike, coordinate: GeoCoordinate, local_offset_hours: float,
                event: SunEvent, zenith: float) -> Optional[TimeOfDay]:
    """
    Local clock time of a rise/set event at the given zenith.
    Returns None if the sun does not reach that zenith on this date.
    """
    cal = _calendar_date(day)

    hours = solar_event_hours(
        cal.year, cal.month, cal.day,
        coordinate.latitude, coordinate.longitude,
        local_offset_hours, event, zenith
    )

    if hours is None:
        return None

    return TimeOfDay(*hours_to_clock(hours))


def sunrise(day: DayLike, coordinate: GeoCoordinate,
            local_offset_hours: float) -> Optional[TimeOfDay]:
    return solar_event(day, coordinate, local_offset_hours, SunEvent.RISE, SUNRISE_SUNSET_ZENITH)


def sunset(day: DayLike, coordinate: GeoCoordinate,
           local_offset_hours: float) -> Optional[TimeOfDay]:
    return solar_event(day, coordinate, local_offset_hours, SunEvent.SET, SUNRISE_SUNSET_ZENITH)


def dawn(day: DayLike, coordinate: GeoCoordinate,
         local_offset_hours: float) -> Optional[TimeOfDay]:
    return solar_event(day, coordinate, local_offset_hours, SunEvent.RISE, DAWN_DUSK_ZENITH)


def dusk(day: DayLike, coordinate: GeoCoordinate,
         local_offset_hours: float) -> Optional[TimeOfDay]:
    return solar_event(day, coordinate, local_offset_hours, SunEvent.SET, DAWN_DUSK_ZENITH)


def twilight(day: DayLike, coordinate: GeoCoordinate, local_offset_hours: float,
             kind: str, event: SunEvent) -> Optional[TimeOfDay]:
    """
    Morning (RISE) or evening (SET) twilight boundary.
    kind is one of 'official', 'civil', 'nautical', 'astronomical'.
    """
    try:
        zenith = TWILIGHT_ZENITHS[kind]
    except KeyError:
        raise ValueError(f"Unknown twilight kind: {kind}")

    return solar_event(day, coordinate, local_offset_hours, event, zenith)


def event_datetime(day: date, time_of_day: Optional[TimeOfDay],
                   tzinfo: ZoneInfo) -> Optional[datetime]:
    """
    Attach an event time to its calendar date in tzinfo.
    The clock time is always placed on `day`, even when the event falls
    past local midnight for far-from-zone longitudes.
    """
    if time_of_day is None:
        return None

    return datetime.combine(day, time_of_day.to_time(), tzinfo=tzinfo)


def _iso(day: date, time_of_day: Optional[TimeOfDay], tzinfo: ZoneInfo) -> Optional[str]:
    moment = event_datetime(day, time_of_day, tzinfo)
    return moment.isoformat() if moment else None


def sun_events_for_date(
    lat: float,
    lon: float,
    day: date,
    tzinfo: ZoneInfo,
    include_twilight: bool = True
) -> Dict[str, Any]:
    """
    Calculate all sun events for a given date and location.

    Returns dict with:
    - date: ISO date string
    - utc_offset_hours: offset of tzinfo in force on that date
    - sunrise/sunset/dawn/dusk: ISO datetime strings in local time, or None
    - twilight times (if include_twilight=True)
    - day_length_sec: daylight duration in seconds
    - flags: polar_day, polar_night, no_*_twilight
    """
    if not validate_location(lat, lon):
        raise ValueError(f"Coordinates out of range: lat={lat}, lon={lon}")

    day = CalendarDate.from_date(day).to_date()
    coordinate = GeoCoordinate(lat, lon)
    offset = utc_offset_hours(tzinfo, day)

    rise = sunrise(day, coordinate, offset)
    set_ = sunset(day, coordinate, offset)

    results = {
        'date': day.isoformat(),
        'utc_offset_hours': offset,
        'sunrise': _iso(day, rise, tzinfo),
        'sunset': _iso(day, set_, tzinfo),
        'dawn': _iso(day, dawn(day, coordinate, offset), tzinfo),
        'dusk': _iso(day, dusk(day, coordinate, offset), tzinfo),
        'day_length_sec': 0,
        'flags': {
            'polar_day': False,
            'polar_night': False,
        }
    }

    # Handle polar cases. Rise and set use different approximate times, so
    # near the polar circles only one of them may be missing.
    if rise is None or set_ is None:
        missing = SunEvent.RISE if rise is None else SunEvent.SET
        cos_h = event_hour_angle_cosine(
            day.year, day.month, day.day, lat, lon,
            missing, SUNRISE_SUNSET_ZENITH
        )
        if cos_h < -1:
            results['flags']['polar_day'] = True
            results['day_length_sec'] = 86400  # 24 hours
        else:
            results['flags']['polar_night'] = True
            results['day_length_sec'] = 0
    else:
        # Wraps when the zone is far from the longitude's natural offset
        results['day_length_sec'] = (set_.total_seconds() - rise.total_seconds()) % 86400

    if include_twilight:
        for kind in ('civil', 'nautical', 'astronomical'):
            morning = twilight(day, coordinate, offset, kind, SunEvent.RISE)
            evening = twilight(day, coordinate, offset, kind, SunEvent.SET)

            results[f'{kind}_dawn'] = _iso(day, morning, tzinfo)
            results[f'{kind}_dusk'] = _iso(day, evening, tzinfo)
            results['flags'][f'no_{kind}_twilight'] = morning is None or evening is None

    logger.debug(f"Sun events for ({lat}, {lon}) on {results['date']}: "
                 f"sunrise={results['sunrise']} sunset={results['sunset']}")

    return results


def sun_events_for_range(
    lat: float,
    lon: float,
    start_date: date,
    end_date: date,
    tzinfo: ZoneInfo,
    **kwargs
) -> List[Dict[str, Any]]:
    """
    Calculate sun events for a date range (inclusive).

    Returns list of daily event dictionaries.
    """
    results = []
    current_date = start_date

    while current_date <= end_date:
        day_events = sun_events_for_date(
            lat, lon, current_date, tzinfo, **kwargs
        )
        results.append(day_events)
        current_date += timedelta(days=1)

    return results


def validate_location(lat: float, lon: float) -> bool:
    """Validate latitude and longitude values."""
    return GeoCoordinate(lat, lon).is_valid()


def format_duration(seconds: int) -> str:
    """Format duration in seconds to human-readable string."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
