"""
Test USNO algorithm steps against hand-worked values.
Reference: Almanac for Computers, 1990, US Naval Observatory.
"""

import math
import pytest

from sunevents.models import SunEvent
from sunevents.usno import (
    deg_sin, deg_cos, deg_tan, deg_asin, deg_acos, deg_atan,
    normalize_range, day_of_year, approximate_time, sun_mean_anomaly,
    sun_true_longitude, sun_right_ascension, sun_declination,
    local_hour_angle_cosine, local_hour_angle, local_mean_time,
    event_hour_angle_cosine, solar_event_hours, hours_to_clock
)

# Washington, DC on 2013-01-01, sunrise
DC_LAT, DC_LON = 38.907, -77.037


def normalize_with_modulo(value, maximum):
    """Single-modulo form; must agree with the loop form."""
    result = math.fmod(value, maximum)
    if result < 0:
        result += maximum
    if result >= maximum:
        result -= maximum
    return result


class TestDegreeTrig:
    """Test degree wrappers around the radian math functions."""

    def test_known_angles(self):
        assert deg_sin(30) == pytest.approx(0.5)
        assert deg_cos(60) == pytest.approx(0.5)
        assert deg_tan(45) == pytest.approx(1.0)
        assert deg_sin(90) == pytest.approx(1.0)
        assert deg_cos(90) == pytest.approx(0.0, abs=1e-15)

    def test_inverse_functions_return_degrees(self):
        assert deg_asin(0.5) == pytest.approx(30.0)
        assert deg_acos(0.5) == pytest.approx(60.0)
        assert deg_atan(1.0) == pytest.approx(45.0)
        assert deg_acos(-1.0) == pytest.approx(180.0)

    def test_round_trip(self):
        for angle in (-80.0, -12.5, 0.0, 23.44, 89.0):
            assert deg_asin(deg_sin(angle)) == pytest.approx(angle)


class TestNormalizeRange:
    """Test range reduction into [0, max)."""

    def test_values_already_in_range(self):
        assert normalize_range(0.0, 360) == 0.0
        assert normalize_range(359.5, 360) == 359.5
        assert normalize_range(12.25, 24) == 12.25

    def test_exact_maximum_wraps_to_zero(self):
        assert normalize_range(360.0, 360) == 0.0
        assert normalize_range(24.0, 24) == 0.0
        assert normalize_range(-24.0, 24) == 0.0

    def test_negative_and_large_values(self):
        assert normalize_range(-1.0, 360) == 359.0
        assert normalize_range(-725.0, 360) == 355.0
        assert normalize_range(30.5, 24) == pytest.approx(6.5)
        assert normalize_range(-0.5, 24) == 23.5

    def test_idempotent(self):
        for value in (-1000.1, -360.0, -0.001, 0.0, 180.0, 360.0, 719.99, 1234.5):
            once = normalize_range(value, 360)
            assert normalize_range(once, 360) == once
            assert 0 <= once < 360

        for value in (-48.0, -5.25, 0.0, 23.999, 24.0, 47.5):
            once = normalize_range(value, 24)
            assert normalize_range(once, 24) == once
            assert 0 <= once < 24

    @pytest.mark.parametrize("value", [-720.0, -360.0, -359.75, -90.0, -1e-9, 0.0,
                                       1e-9, 90.0, 359.999, 360.0, 540.25, 1080.0])
    def test_agrees_with_modulo_form(self, value):
        assert normalize_range(value, 360) == pytest.approx(
            normalize_with_modulo(value, 360), abs=1e-9
        )


class TestDayOfYear:
    """Test step 1: day of the year."""

    def test_first_and_last_day(self):
        assert day_of_year(2013, 1, 1) == 1
        assert day_of_year(2013, 12, 31) == 365

    def test_leap_year(self):
        assert day_of_year(2012, 2, 29) == 60
        assert day_of_year(2012, 3, 1) == 61
        assert day_of_year(2012, 12, 31) == 366

    def test_common_year_march(self):
        assert day_of_year(2013, 3, 1) == 60
        assert day_of_year(2013, 3, 20) == 79


class TestPipelineSteps:
    """Test steps 2-8 for Washington, DC sunrise on 2013-01-01."""

    def test_approximate_time(self):
        t = approximate_time(1, DC_LON, SunEvent.RISE)
        assert t == pytest.approx(1.463991667, abs=1e-9)

        t_set = approximate_time(1, DC_LON, SunEvent.SET)
        assert t_set - t == pytest.approx(0.5)

    def test_mean_anomaly_and_true_longitude(self):
        m = sun_mean_anomaly(1.463991667)
        assert m == pytest.approx(-1.846089813, abs=1e-6)

        true_long = sun_true_longitude(m)
        assert true_long == pytest.approx(280.724898764, abs=1e-6)
        assert 0 <= true_long < 360

    def test_right_ascension(self):
        assert sun_right_ascension(280.724898764) == pytest.approx(18.777476992, abs=1e-6)

    @pytest.mark.parametrize("true_long,expected", [
        (10.0, 0.612737906),
        (100.0, 6.725130782),
        (190.0, 12.612737906),
        (280.0, 18.725130782),
    ])
    def test_right_ascension_follows_longitude_quadrant(self, true_long, expected):
        ra = sun_right_ascension(true_long)
        assert ra == pytest.approx(expected, abs=1e-6)
        assert math.floor(ra * 15 / 90) == math.floor(true_long / 90)

    def test_declination(self):
        sin_dec, cos_dec = sun_declination(280.724898764)
        assert sin_dec == pytest.approx(-0.390870888, abs=1e-6)
        assert cos_dec == pytest.approx(0.920445517, abs=1e-6)
        assert sin_dec ** 2 + cos_dec ** 2 == pytest.approx(1.0)

    def test_hour_angle(self):
        cos_h = local_hour_angle_cosine(90, -0.390870888, 0.920445517, DC_LAT)
        assert cos_h == pytest.approx(0.342738266, abs=1e-6)

        rise_h = local_hour_angle(cos_h, SunEvent.RISE)
        set_h = local_hour_angle(cos_h, SunEvent.SET)
        assert rise_h == pytest.approx(19.336252809, abs=1e-6)
        assert rise_h + set_h == pytest.approx(24.0)

    def test_local_mean_time(self):
        t = local_mean_time(19.336252809, 18.777476992, 1.463991667)
        assert t == pytest.approx(31.395530909, abs=1e-6)

    def test_event_hour_angle_cosine(self):
        cos_h = event_hour_angle_cosine(2013, 1, 1, DC_LAT, DC_LON, SunEvent.RISE, 90)
        assert cos_h == pytest.approx(0.342738266, abs=1e-6)


class TestSolarEventHours:
    """Test the full pipeline."""

    def test_utc_sunrise(self):
        hours = solar_event_hours(2013, 1, 1, DC_LAT, DC_LON, 0, SunEvent.RISE, 90)
        assert hours == pytest.approx(12.531330909, abs=1e-6)

    def test_local_offset_applied_and_wrapped(self):
        utc = solar_event_hours(2013, 1, 1, DC_LAT, DC_LON, 0, SunEvent.RISE, 90)
        est = solar_event_hours(2013, 1, 1, DC_LAT, DC_LON, -5, SunEvent.RISE, 90)
        assert est == pytest.approx(utc - 5)

        # 12:31 UTC + 14h wraps past midnight
        kiribati = solar_event_hours(2013, 1, 1, DC_LAT, DC_LON, 14, SunEvent.RISE, 90)
        assert kiribati == pytest.approx(utc + 14 - 24)
        assert 0 <= kiribati < 24

    def test_never_rises(self):
        assert event_hour_angle_cosine(2013, 12, 21, 78, 15.6, SunEvent.RISE, 90) > 1
        assert solar_event_hours(2013, 12, 21, 78, 15.6, 1, SunEvent.RISE, 90) is None
        assert solar_event_hours(2013, 12, 21, 78, 15.6, 1, SunEvent.SET, 90) is None

    def test_never_sets(self):
        assert event_hour_angle_cosine(2013, 6, 21, 78, 15.6, SunEvent.SET, 90) < -1
        assert solar_event_hours(2013, 6, 21, 78, 15.6, 1, SunEvent.RISE, 90) is None
        assert solar_event_hours(2013, 6, 21, 78, 15.6, 1, SunEvent.SET, 90) is None


class TestHoursToClock:
    """Test step 11: truncating decomposition."""

    def test_exact_values(self):
        assert hours_to_clock(0.0) == (0, 0, 0)
        assert hours_to_clock(7.5) == (7, 30, 0)
        assert hours_to_clock(23.75) == (23, 45, 0)

    def test_truncates_instead_of_rounding(self):
        # 12.531330909 h = 12:31:52.79
        assert hours_to_clock(12.531330909) == (12, 31, 52)
        # 59.9999 seconds stays at 59
        assert hours_to_clock(10 + 59.9999 / 3600) == (10, 0, 59)

    def test_components_in_range(self):
        for hours in (0.0001, 5.999999, 11.5, 17.123456, 23.999999):
            hour, minute, second = hours_to_clock(hours)
            assert 0 <= hour <= 23
            assert 0 <= minute <= 59
            assert 0 <= second <= 59
