#!/usr/bin/env python3
"""
Compare the linear dip scan with a bracketing root finder.

The scan in AstronomicalCalendar.dip_from_offset is the reference behaviour;
this tool measures how far scipy's brentq lands from it for a run of dates,
in degrees and in seconds of twilight.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

import argparse

import zmankit
from zmankit.core.events import elapsed, time_offset
from zmankit.core.events import minutes as as_minutes
from zmankit.core.zenith import dip
from zmankit.engines.astronomical import AstronomicalCalendar


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "zmankit[diagnostics]"') from e


def _need_scipy_optimize():
    try:
        import scipy.optimize as so
        return so
    except ImportError as e:
        raise RuntimeError('Need scipy. Install: pip install "zmankit[diagnostics]"') from e


def _crossing(cal: AstronomicalCalendar, degrees: float, after_sunset: bool):
    z = dip(degrees)
    return cal.sunset_at(z, sea_level=True) if after_sunset else cal.sunrise_at(z, sea_level=True)


def bisect_dip(so, cal: AstronomicalCalendar, minutes: float, *, after_sunset: bool, hi: float = 30.0, xtol: float = 1e-7) -> Optional[float]:
    """Root of (crossing(dip) - target) in seconds, bracketed on [0, hi]."""
    ref = cal.sea_level_sunset() if after_sunset else cal.sea_level_sunrise()
    if ref is None:
        return None
    target = time_offset(ref, as_minutes(minutes if after_sunset else -minutes))

    # shrink the bracket until the sun still reaches its upper end
    while hi > 0.5 and _crossing(cal, hi, after_sunset) is None:
        hi *= 0.8
    if _crossing(cal, hi, after_sunset) is None:
        return None

    def f(degrees: float) -> float:
        moment = _crossing(cal, degrees, after_sunset)
        return elapsed(target, moment).total_seconds()

    if f(0.0) * f(hi) > 0:
        return None
    return float(so.brentq(f, 0.0, hi, xtol=xtol))


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Linear dip scan vs brentq for a minute offset.")
    p.add_argument("--start", default="2024-03-20", help="YYYY-MM-DD")
    p.add_argument("--days", type=int, default=12)
    p.add_argument("--every", type=int, default=30, help="Days between samples")
    p.add_argument("--minutes", type=float, default=72.0)
    p.add_argument("--sunset", action="store_true")
    p.add_argument("--step", default=None, help="Linear scan step (degrees)")
    p.add_argument("--lat", type=float, default=31.778)
    p.add_argument("--lon", type=float, default=35.2354)
    p.add_argument("--tz", default="Asia/Jerusalem")
    args = p.parse_args(argv)

    np = _need_numpy()
    so = _need_scipy_optimize()

    loc = zmankit.GeoLocation(latitude=args.lat, longitude=args.lon, time_zone=args.tz)
    y, m, d = map(int, args.start.split("-"))
    d0 = date(y, m, d)

    print(f"{'date':<12}{'linear':>12}{'brentq':>14}{'d_deg':>12}{'d_sec':>10}")
    diffs = []
    for i in range(args.days):
        cal = zmankit.calendar(loc, d0 + timedelta(days=i * args.every))
        lin = cal.dip_from_offset(args.minutes, after_sunset=args.sunset, step=args.step)
        root = bisect_dip(so, cal, args.minutes, after_sunset=args.sunset)
        if lin is None or root is None:
            print(f"{cal.date.isoformat():<12}{'-':>12}{'-':>14}")
            continue
        t_lin = _crossing(cal, lin, args.sunset)
        t_root = _crossing(cal, root, args.sunset)
        d_sec = elapsed(t_root, t_lin).total_seconds()
        diffs.append(lin - root)
        print(f"{cal.date.isoformat():<12}{lin:>12.4f}{root:>14.7f}{lin - root:>12.2e}{d_sec:>10.2f}")

    if diffs:
        arr = np.asarray(diffs, dtype=float)
        print()
        print(f"max |linear - brentq| = {np.max(np.abs(arr)):.2e} deg, mean = {np.mean(arr):.2e} deg")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
