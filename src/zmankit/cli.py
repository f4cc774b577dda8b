from __future__ import annotations

import argparse
from datetime import date
import sys
import re
import importlib
import inspect
import logging


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def add_location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, default=31.778, help="Latitude in degrees (positive north)")
    p.add_argument("--lon", type=float, default=35.2354, help="Longitude in degrees (positive east)")
    p.add_argument("--elevation", type=float, default=0.0, help="Elevation in meters")
    p.add_argument("--tz", default="Asia/Jerusalem", help="IANA time zone id")
    p.add_argument("--calculator", default="noaa")
    p.add_argument("--use-elevation", action="store_true", help="Use elevation-adjusted sunrise and sunset")
    p.add_argument("--astronomical-chatzos-for-other-zmanim", action="store_true")


def calendar_from_args(args: argparse.Namespace):
    import zmankit

    loc = zmankit.GeoLocation(latitude=args.lat, longitude=args.lon, elevation=args.elevation, time_zone=args.tz)
    config = zmankit.ZmanimConfig(
        use_elevation=args.use_elevation,
        use_astronomical_chatzos_for_other_zmanim=args.astronomical_chatzos_for_other_zmanim,
    )
    return zmankit.calendar(loc, _parse_ymd(args.date), calculator=args.calculator, config=config)


def fmt_event(e) -> str:
    return "-" if e is None else e.isoformat(timespec="seconds")


def cmd_day(argv: list[str]) -> int:
    import zmankit

    p = argparse.ArgumentParser(prog="zmankit day", description="Solar events and proportional-hour markers for one day")
    p.add_argument("date", help="YYYY-MM-DD")
    add_location_args(p)
    args = p.parse_args(argv)

    cal = calendar_from_args(args)
    events = zmankit.day_events(cal.location, cal.date, calculator=cal.calculator, config=cal.config)
    width = max(len(k) for k in events)
    for name, e in events.items():
        print(f"{name:<{width}}  {fmt_event(e)}")
    return 0


def cmd_solar(argv: list[str]) -> int:
    from zmankit.core.time import centuries_since_j2000, julian_day
    from zmankit.engines.astro import noaa
    from zmankit.core.zenith import ZENITHS, zenith_for

    p = argparse.ArgumentParser(prog="zmankit solar", description="Solar coordinates, equation of time and raw crossings.")
    p.add_argument("date", help="YYYY-MM-DD")
    add_location_args(p)
    p.add_argument("--zenith", default="geometric", help="Zenith in degrees, or a catalog name such as civil or 16.1 (a dip)")
    args = p.parse_args(argv)
    zenith = zenith_for(args.zenith) if args.zenith in ZENITHS else float(args.zenith)

    cal = calendar_from_args(args)
    jd = julian_day(cal.date)
    T = centuries_since_j2000(jd)

    print("Time Input:")
    print(f"  JD (0h UT) = {jd:.6f}")
    print(f"  T          = {T:.12f}")
    print()
    print("Solar Position at 0h UT (degrees):")
    print(f"  Apparent Longitude = {noaa.apparent_longitude_deg(T):.6f}")
    print(f"  Declination        = {noaa.declination_deg(T):.6f}")
    print(f"  Obliquity          = {noaa.obliquity_deg(T):.6f}")
    print()
    print("Equation of Time:")
    print(f"  EOT (minutes) = {noaa.equation_of_time_minutes(T):.4f}")
    print()

    def fmt_hours(h) -> str:
        if h is None:
            return "no crossing"
        h_int = int(h)
        m = (h - h_int) * 60
        m_int = int(m)
        s = (m - m_int) * 60
        return f"{h_int:02d}:{m_int:02d}:{s:05.2f}"

    print(f"Crossings of zenith {zenith:g} ({cal.calculator.name}):")
    print(f"  UTC Rise : {fmt_hours(cal.utc_sunrise(zenith))}")
    print(f"  UTC Set  : {fmt_hours(cal.utc_sunset(zenith))}")
    print(f"  Local Rise: {fmt_event(cal.sunrise_at(zenith))}")
    print(f"  Local Set : {fmt_event(cal.sunset_at(zenith))}")
    print(f"  Transit   : {fmt_event(cal.sun_transit())}")
    return 0


def cmd_dip(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="zmankit dip", description="Solar dip matching a minute offset from sea-level sunrise or sunset.")
    p.add_argument("minutes", type=float)
    p.add_argument("date", help="YYYY-MM-DD")
    add_location_args(p)
    p.add_argument("--sunset", action="store_true", help="Offset after sunset (default: before sunrise)")
    p.add_argument("--step", default=None, help="Scan step in degrees (default 0.0001 dawn, 0.001 dusk)")
    args = p.parse_args(argv)

    cal = calendar_from_args(args)
    degrees = cal.dip_from_offset(args.minutes, after_sunset=args.sunset, step=args.step)
    if degrees is None:
        print("No dip: the reference event does not occur or the search gave up.")
        return 1
    print(f"{degrees:.4f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `zmankit YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="zmankit", description="Solar events and proportional-hour toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Solar events and markers for one day")
    sub.add_parser("solar", help="Solar coordinates and raw crossings for one day")
    sub.add_parser("dip", help="Dip angle for a minute offset")
    sub.add_parser("calculators", help="List registered solar calculators")
    sub.add_parser("presets", help="List preset names")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["pretty-day", "day-length", "dip-search"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd == "solar":
        return cmd_solar(rest)

    if args.cmd == "dip":
        return cmd_dip(rest)

    if args.cmd == "calculators":
        import zmankit
        for name in zmankit.list_calculators():
            print(f"{name}: {zmankit.calculator_info(name)['algorithm']}")
        return 0

    if args.cmd == "presets":
        import zmankit
        for name in zmankit.list_presets():
            print(name)
        return 0

    if args.cmd == "diag":
        tool_map = {
            "pretty-day": "zmankit.diagnostics.pretty_day",
            "day-length": "zmankit.diagnostics.day_length",
            "dip-search": "zmankit.diagnostics.dip_search",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
