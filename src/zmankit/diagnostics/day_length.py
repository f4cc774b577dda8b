#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

import argparse

import zmankit
from zmankit.core.events import elapsed
from zmankit.core.types import DayWindow
from zmankit.engines.day_model import temporal_hour_length


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "zmankit[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "zmankit[diagnostics]"') from e


@dataclass(frozen=True)
class Style:
    label: str
    color: str
    linestyle: str = "-"


def build_series(np, lat: float, year: int, *, dip: float, calculator: str) -> Tuple["np.ndarray", "np.ndarray"]:
    """Day-of-year and temporal-hour length (minutes) from dawn to dusk at `dip`; NaN where undefined."""
    loc = zmankit.GeoLocation(latitude=lat, longitude=0.0, time_zone="UTC")
    d0 = date(year, 1, 1)
    n = (date(year + 1, 1, 1) - d0).days
    x = np.arange(1, n + 1, dtype=int)
    y = np.full(n, np.nan, dtype=float)

    for i in range(n):
        cal = zmankit.calendar(loc, d0 + timedelta(days=i), calculator=calculator)
        z = 90.0 + dip
        window = DayWindow.of(cal.sunrise_at(z, sea_level=True), cal.sunset_at(z, sea_level=True))
        if not window.is_defined or elapsed(window.start, window.end) <= timedelta(0):
            continue
        hour = temporal_hour_length(window)
        y[i] = hour.total_seconds() / 60.0
    return x, y


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot the temporal hour length through a year at several latitudes.")
    p.add_argument("--year", type=int, default=date.today().year)
    p.add_argument("--lat", type=float, action="append", default=[], help="Latitude (repeatable)")
    p.add_argument("--dip", type=float, default=0.0, help="Dip below the horizon defining the day (degrees)")
    p.add_argument("--calculator", default="noaa")
    p.add_argument("--outbase", default="temporal_hour", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    lats = args.lat or [0.0, 31.778, 51.5, 66.0]
    colors = ["tab:blue", "tab:orange", "tab:green", "tab:red", "tab:purple", "0.45"]
    styles = [Style(f"{lat:g}°", colors[i % len(colors)]) for i, lat in enumerate(lats)]

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 10,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)

    for lat, st in zip(lats, styles):
        x, y = build_series(np, lat, args.year, dip=args.dip, calculator=args.calculator)
        ax.plot(x, y, color=st.color, linestyle=st.linestyle, linewidth=1.6, label=st.label)

    ax.axhline(60.0, color="0.3", linewidth=0.8, linestyle=":")
    ax.set_xlabel(f"Day of year ({args.year})")
    ax.set_ylabel("Temporal hour (minutes)")
    ax.set_title(f"Temporal hour, dip {args.dip:g}°")
    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    fig.savefig(args.outbase + ".png", dpi=300)
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
