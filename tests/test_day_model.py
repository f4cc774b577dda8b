# tests/test_day_model.py

import pytest
from dataclasses import dataclass
from unittest.mock import patch
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import zmankit
from zmankit.core.events import elapsed
from zmankit.core.types import DayWindow
from zmankit.engines.astro.noaa import NOAACalculator
from zmankit.engines.day_model import DayModel, chatzos, evaluate, evaluate_half_day, temporal_hour_length

UTC = timezone.utc
START = datetime(2023, 3, 21, 6, 0, tzinfo=UTC)
END = datetime(2023, 3, 21, 18, 0, tzinfo=UTC)
WINDOW = DayWindow.of(START, END)

DENVER = zmankit.GeoLocation(latitude=39.73915, longitude=-104.9847, elevation=1636, time_zone="America/Denver")
DAY = date(2020, 6, 5)


def at(h, m, s, ms=0):
    return datetime(2020, 6, 5, h, m, s, ms * 1000, tzinfo=DENVER.tzinfo)


@pytest.fixture
def model():
    return zmankit.day_model(DENVER, DAY, config=zmankit.ZmanimConfig(use_elevation=True))


# ============================================================
# Pure formulas
# ============================================================

def test_temporal_hour_is_a_twelfth():
    assert temporal_hour_length(WINDOW) == timedelta(hours=1)
    assert temporal_hour_length(DayWindow.of(START, None)) is None


def test_evaluate_hours():
    assert evaluate(WINDOW, 0) == START
    assert evaluate(WINDOW, 6) == START + (END - START) / 2
    assert evaluate(WINDOW, 12) == END
    assert evaluate(WINDOW, 10.75) == datetime(2023, 3, 21, 16, 45, tzinfo=UTC)


def test_evaluate_outside_the_window_extrapolates():
    assert evaluate(WINDOW, -1.2) == START - timedelta(minutes=72)
    assert evaluate(WINDOW, 13) == END + timedelta(hours=1)


@pytest.mark.parametrize("hours", [0, 3, 6, 12])
def test_missing_endpoint_gives_no_event(hours):
    assert evaluate(DayWindow.of(None, END), hours) is None
    assert evaluate(DayWindow.of(START, None), hours) is None


def test_window_must_run_forward():
    with pytest.raises(zmankit.InvalidWindowError):
        evaluate(DayWindow.of(END, START), 3)
    with pytest.raises(zmankit.InvalidWindowError):
        evaluate(DayWindow.of(START, START), 3)
    with pytest.raises(ValueError):
        evaluate_half_day(END, START, 1)


def test_half_day_counts_from_either_end():
    noon = datetime(2023, 3, 21, 12, 0, tzinfo=UTC)
    assert evaluate_half_day(noon, END, 0.5) == noon + (END - noon) / 12
    assert evaluate_half_day(START, noon, 3) == datetime(2023, 3, 21, 9, 0, tzinfo=UTC)
    # negative hours run back from the end of the half
    assert evaluate_half_day(START, noon, -1) == datetime(2023, 3, 21, 11, 0, tzinfo=UTC)
    assert evaluate_half_day(None, noon, 1) is None


def test_chatzos_prefers_transit():
    transit = datetime(2023, 3, 21, 12, 7, tzinfo=UTC)
    assert chatzos(WINDOW, astronomical_transit=True, transit=transit) == transit
    assert chatzos(WINDOW, astronomical_transit=False, transit=transit) == datetime(2023, 3, 21, 12, 0, tzinfo=UTC)
    assert chatzos(WINDOW, astronomical_transit=True, transit=None) == datetime(2023, 3, 21, 12, 0, tzinfo=UTC)


# ============================================================
# DayModel
# ============================================================

def test_day_window_follows_use_elevation(model):
    window = model.day_window()
    assert window.start == model.calendar.sunrise()
    assert window.synchronous
    flat = zmankit.day_model(DENVER, DAY)
    assert flat.day_window().start == flat.calendar.sea_level_sunrise()


def test_mixed_windows_are_asynchronous(model):
    assert model.degree_window(16.1).synchronous
    assert not model.degree_window(16.1, 7.083).synchronous
    assert model.minute_window(72).synchronous
    assert not model.minute_window(72, 50).synchronous


def test_minute_window_offsets(model):
    window = model.minute_window(72)
    assert window.start == model.calendar.sunrise() - timedelta(minutes=72)
    assert window.end == model.calendar.sunset() + timedelta(minutes=72)


def test_chatzos_as_half_day_is_sea_level_midpoint(model):
    rise, set_ = model.calendar.sea_level_sunrise(), model.calendar.sea_level_sunset()
    assert model.chatzos_as_half_day() == rise + (set_ - rise) / 2
    midpoint_model = DayModel(model.calendar.with_config(use_astronomical_chatzos=False))
    assert midpoint_model.chatzos() == midpoint_model.chatzos_as_half_day()


def test_zman_without_substitution_is_plain_evaluate(model):
    window = model.day_window()
    assert model.zman(window, 3) == evaluate(window, 3)


def test_zman_splits_at_chatzos_when_asked(model):
    split = DayModel(model.calendar.with_config(use_astronomical_chatzos_for_other_zmanim=True))
    window = split.day_window()
    noon = split.chatzos()
    assert split.zman(window, 3) == evaluate_half_day(window.start, noon, 3)
    assert split.zman(window, 9.5) == evaluate_half_day(noon, window.end, 3.5)
    assert abs(split.zman(window, 6) - noon) < timedelta(milliseconds=1)
    # outside [0, 12] the plain formula applies
    assert split.zman(window, -1.2) == evaluate(window, -1.2)


def test_asynchronous_window_never_splits(model):
    split = DayModel(model.calendar.with_config(use_astronomical_chatzos_for_other_zmanim=True))
    window = split.degree_window(16.1, 7.083)
    assert split.zman(window, 3) == evaluate(window, 3)


def test_denver_candle_lighting_and_ateret_torah(model):
    assert abs(model.candle_lighting() - at(20, 7, 1, 588)) <= timedelta(milliseconds=1)
    assert model.tzais_ateret_torah() == model.calendar.sunset() + timedelta(minutes=40)
    later = DayModel(model.calendar.with_config(candle_lighting_offset=40))
    assert model.candle_lighting() - later.candle_lighting() == timedelta(minutes=22)


def test_chatzos_falls_back_to_midpoint_without_transit(model):
    with patch.object(NOAACalculator, "utc_noon", return_value=None):
        assert model.calendar.sun_transit() is None
        assert model.chatzos() == model.chatzos_as_half_day()


# ============================================================
# Windows across a daylight-saving change
# ============================================================

BERLIN = ZoneInfo("Europe/Berlin")
# 2024-03-31: 01:00 CET is 00:00 UTC, 13:00 CEST is 11:00 UTC
SPRING = DayWindow.of(datetime(2024, 3, 31, 1, 0, tzinfo=BERLIN), datetime(2024, 3, 31, 13, 0, tzinfo=BERLIN))


def utc(h, m=0, s=0):
    return datetime(2024, 3, 31, h, m, s, tzinfo=UTC)


def test_temporal_hour_counts_real_time_across_dst():
    assert temporal_hour_length(SPRING) == timedelta(minutes=55)


def test_evaluate_across_dst():
    assert evaluate(SPRING, 6) == utc(5, 30)
    assert evaluate(SPRING, 3) == utc(2, 45)
    assert evaluate(SPRING, 3).tzinfo is BERLIN
    assert evaluate(SPRING, 12) == utc(11)


def test_half_day_across_dst():
    start, end = SPRING.start, SPRING.end
    assert evaluate_half_day(start, end, 3) == utc(5, 30)
    assert evaluate_half_day(start, end, -1) == utc(9, 10)


@dataclass
class FixedHours:
    """Calculator stub returning fixed UTC hours for every zenith."""
    rise: float
    set: float
    name: str = "fixed"

    def info(self):
        return {"name": self.name}

    def utc_sunrise(self, d, location, zenith, adjust_for_elevation):
        return self.rise

    def utc_sunset(self, d, location, zenith, adjust_for_elevation):
        return self.set

    def elevation_adjustment(self, elevation):
        return 0.0


@pytest.fixture
def spring_model():
    berlin = zmankit.GeoLocation(52.52, 13.405, time_zone="Europe/Berlin")
    # dawn 00:30 UTC is 01:30 CET, dusk 17:00 UTC is 19:00 CEST
    return zmankit.day_model(berlin, date(2024, 3, 31), calculator=FixedHours(rise=0.5, set=17.0))


def test_minute_window_across_dst(spring_model):
    late = zmankit.day_model(
        spring_model.calendar.location, date(2024, 3, 31), calculator=FixedHours(rise=1.5, set=17.0)
    )
    window = late.minute_window(72)
    # sunrise 03:30 CEST; 72 real minutes earlier is 01:18 CET
    assert window.start == utc(0, 18)
    assert (window.start.hour, window.start.minute) == (1, 18)
    assert elapsed(window.start, late.calendar.sunrise()) == timedelta(minutes=72)


def test_model_window_across_dst(spring_model):
    window = spring_model.degree_window(16.1)
    assert window.start.utcoffset() == timedelta(hours=1)
    assert window.end.utcoffset() == timedelta(hours=2)
    assert temporal_hour_length(window) == timedelta(minutes=82, seconds=30)
    assert spring_model.zman(window, 3) == utc(4, 37, 30)
    # chatzos without a transit is the real midpoint of the sea-level day
    assert spring_model.chatzos() == datetime(2024, 3, 31, 8, 45, tzinfo=UTC)


def test_high_latitude_twilight_window_is_split_evenly():
    model = zmankit.day_model(zmankit.GeoLocation(66.0, 18.0, time_zone="Europe/Stockholm"), date(2024, 3, 31))
    window = model.degree_window(16.1)
    assert window.is_defined
    mid = evaluate(window, 6)
    assert abs(elapsed(window.start, mid) - elapsed(mid, window.end)) <= timedelta(microseconds=1)
    assert abs(temporal_hour_length(window) * 12 - elapsed(window.start, window.end)) <= timedelta(microseconds=12)
