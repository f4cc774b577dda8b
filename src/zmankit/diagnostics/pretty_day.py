from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional
import argparse

import zmankit


def hms(e) -> str:
    return "--:--:--" if e is None else e.strftime("%H:%M:%S")


def print_days(loc: zmankit.GeoLocation, d0: date, n: int, names: List[str], *, config: zmankit.ZmanimConfig, calculator: str) -> None:
    header = "date        " + " ".join(f"{name[:12]:>12}" for name in names)
    print(f"{loc.name or ''}  lat={loc.latitude} lon={loc.longitude} elev={loc.elevation}m  {loc.time_zone}  ({calculator})")
    print(header)
    print("-" * len(header))
    for i in range(n):
        d = d0 + timedelta(days=i)
        events = zmankit.day_events(loc, d, calculator=calculator, config=config)
        print(f"{d.isoformat()}  " + " ".join(f"{hms(events[name]):>12}" for name in names))


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print a table of solar events and markers for consecutive days.")
    p.add_argument("--start", default=date.today().isoformat(), help="YYYY-MM-DD")
    p.add_argument("--days", type=int, default=7)
    p.add_argument("--lat", type=float, default=31.778)
    p.add_argument("--lon", type=float, default=35.2354)
    p.add_argument("--elevation", type=float, default=0.0)
    p.add_argument("--tz", default="Asia/Jerusalem")
    p.add_argument("--calculator", default="noaa")
    p.add_argument("--use-elevation", action="store_true")
    p.add_argument(
        "--event",
        action="append",
        default=[],
        help="Event or preset name (repeatable). Default: a short dawn-to-dusk selection.",
    )
    args = p.parse_args(argv)

    names = args.event or [
        "begin_astronomical_twilight",
        "sunrise",
        "sof_zman_shma_gra",
        "chatzos",
        "mincha_gedola",
        "plag_hamincha",
        "sunset",
        "end_astronomical_twilight",
    ]
    loc = zmankit.GeoLocation(latitude=args.lat, longitude=args.lon, elevation=args.elevation, time_zone=args.tz)
    config = zmankit.ZmanimConfig(use_elevation=args.use_elevation)
    y, m, d = map(int, args.start.split("-"))
    print_days(loc, date(y, m, d), args.days, names, config=config, calculator=args.calculator)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
