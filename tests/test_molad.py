# tests/test_molad.py

import pytest
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict

import zmankit
from zmankit.engines.molad import HALF_MOLAD_INTERVAL, MoladClamp, clamp

JERUSALEM = zmankit.GeoLocation(latitude=31.778, longitude=35.2354, time_zone="Asia/Jerusalem")
TZ = JERUSALEM.tzinfo
DAY = date(2023, 3, 21)


def at(h, m=0, d=21):
    return datetime(2023, 3, d, h, m, tzinfo=TZ)


DAY_START = at(0)
DAY_END = at(0, d=22)
NIGHT_END = at(5, 30)     # this morning's end of night
NIGHT_START = at(18, 30)  # tonight's nightfall


# ============================================================
# clamp
# ============================================================

@pytest.mark.parametrize("night", [(None, None), (NIGHT_START, NIGHT_END)])
@pytest.mark.parametrize("moment", [at(23, d=20), DAY_START, DAY_END, at(1, d=22)])
def test_outside_the_day_is_none(moment, night):
    assert clamp(moment, DAY_START, DAY_END, *night, defer_to_start=True) is None
    assert clamp(moment, DAY_START, DAY_END, *night, defer_to_start=False) is None


def test_missing_moment_is_none():
    assert clamp(None, DAY_START, DAY_END, defer_to_start=True) is None


def test_without_night_bounds_moment_passes():
    assert clamp(at(13), DAY_START, DAY_END, defer_to_start=True) == at(13)


def test_daylight_moment_moves_to_a_night_boundary():
    assert clamp(at(13), DAY_START, DAY_END, NIGHT_START, NIGHT_END, defer_to_start=True) == NIGHT_START
    assert clamp(at(13), DAY_START, DAY_END, NIGHT_START, NIGHT_END, defer_to_start=False) == NIGHT_END


def test_night_moment_is_kept():
    assert clamp(at(3), DAY_START, DAY_END, NIGHT_START, NIGHT_END, defer_to_start=True) == at(3)
    assert clamp(at(21), DAY_START, DAY_END, NIGHT_START, NIGHT_END, defer_to_start=False) == at(21)


def test_night_bounds_come_in_pairs():
    with pytest.raises(ValueError):
        clamp(at(13), DAY_START, DAY_END, NIGHT_START, None, defer_to_start=True)
    with pytest.raises(ValueError):
        clamp(at(13), DAY_START, DAY_END, None, NIGHT_END, defer_to_start=True)


# ============================================================
# MoladClamp
# ============================================================

@dataclass
class TableMolad:
    """MoladProvider stub: a molad looked up by the date asked for."""
    table: Dict[date, datetime]

    def molad(self, d):
        return self.table.get(d)


@pytest.fixture
def cal():
    return zmankit.calendar(JERUSALEM, DAY)


def test_zman_molad_today(cal):
    mc = MoladClamp(cal, TableMolad({DAY: at(14, 20)}))
    assert mc.zman_molad() == at(14, 20)
    assert MoladClamp(cal.with_date(date(2023, 3, 22)), mc.provider).zman_molad() is None


def test_tchilas_kidush_levana_three_and_seven_days(cal):
    molad = at(14, 20, d=18)
    provider = TableMolad({DAY - timedelta(days=3): molad, DAY - timedelta(days=7): at(14, 20, d=14)})
    mc = MoladClamp(cal, provider)
    assert mc.tchilas_kidush_levana() == at(14, 20)
    # in daylight it waits for nightfall
    assert mc.tchilas_kidush_levana(3, NIGHT_START, NIGHT_END) == NIGHT_START
    assert mc.tchilas_kidush_levana(7) == at(14, 20)
    with pytest.raises(ValueError):
        mc.tchilas_kidush_levana(5)


def test_sof_kidush_levana_is_pulled_back(cal):
    molad = at(14, 20) - HALF_MOLAD_INTERVAL
    # date arithmetic drops the sub-day part: the lookup is for March 7
    mc = MoladClamp(cal, TableMolad({date(2023, 3, 7): molad}))
    assert mc.sof_kidush_levana() == at(14, 20)
    assert mc.sof_kidush_levana(night_start=NIGHT_START, night_end=NIGHT_END) == NIGHT_END


def test_sof_kidush_levana_fifteen_days(cal):
    mc = MoladClamp(cal, TableMolad({date(2023, 3, 6): at(2, 0, d=6)}))
    assert mc.sof_kidush_levana(fifteen_days=True) == at(2, 0)
    assert mc.sof_kidush_levana(fifteen_days=True, night_start=NIGHT_START, night_end=NIGHT_END) == at(2, 0)


def test_no_molad_from_provider(cal):
    mc = MoladClamp(cal, TableMolad({}))
    assert mc.zman_molad() is None
    assert mc.tchilas_kidush_levana() is None
    assert mc.sof_kidush_levana() is None


def test_half_molad_interval():
    month = timedelta(days=29, hours=12, minutes=44, seconds=3, milliseconds=333)
    assert abs(HALF_MOLAD_INTERVAL * 2 - month) < timedelta(milliseconds=2)
