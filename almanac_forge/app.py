from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from almanac_forge.almanac.exports import export_year_pack
from almanac_forge.almanac.generator import (
    NUM_MONTHS, SEASON_NAMES, InvalidYearError, generate_year, month_name,
)
from almanac_forge.almanac.harbors import HARBORS, ROUTES, Harbor, UnknownHarborError, require_harbor
from almanac_forge.almanac.logistics import (
    adjust_days, build_shipping_windows, group_by_month, high_tide_days, route_departures, summarize_year,
)
from almanac_forge.almanac.moons import MOON_ICONS
from almanac_forge.core.app_settings import AppSettings
from almanac_forge.core.context import MAX_YEAR, ForgeContext


def _year_arg(value: str) -> int:
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a year: {value!r}")
    if not 1 <= year <= MAX_YEAR:
        raise argparse.ArgumentTypeError(f"year must be between 1 and {MAX_YEAR}")
    return year


def _month_arg(value: str) -> int:
    try:
        month = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a month: {value!r}")
    if not 1 <= month <= NUM_MONTHS:
        raise argparse.ArgumentTypeError(f"month must be between 1 and {NUM_MONTHS}")
    return month


def _limit_arg(value: str) -> int:
    try:
        limit = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if limit < 0:
        raise argparse.ArgumentTypeError("limit must be 0 or more")
    return limit


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="almanac-forge", description="Dual-moon almanac and tide tables")
    parser.add_argument("--project", type=Path, default=None, help="Project folder (holds project.json and exports/)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_year = sub.add_parser("year", help="Season layout and monthly tide summary")
    p_year.add_argument("year", nargs="?", type=_year_arg)
    p_year.add_argument("--harbor", default=None, help="Harbor id for tide offsets")

    p_month = sub.add_parser("month", help="Day-by-day tides, severe days and shipping windows")
    p_month.add_argument("month", type=_month_arg)
    p_month.add_argument("--year", type=_year_arg, default=None)
    p_month.add_argument("--harbor", default=None)

    p_export = sub.add_parser("export", help="Write JSON / CSV / Markdown for a year")
    p_export.add_argument("year", nargs="?", type=_year_arg)
    p_export.add_argument("--harbor", default=None)
    p_export.add_argument("--no-daily", action="store_true", help="Skip the daily listing in the Markdown file")

    sub.add_parser("harbors", help="List harbors and routes")

    p_cfg = sub.add_parser("config", help="Show or change project settings")
    p_cfg.add_argument("--default-year", type=_year_arg, default=None)
    p_cfg.add_argument("--harbor", default=None)
    p_cfg.add_argument("--high-tide-limit", type=_limit_arg, default=None, help="Severe days listed per month (0 lists all)")
    p_cfg.add_argument("--export-subdir", default=None)
    return parser


# ---------- resolution helpers ----------

def _resolve_project_dir(arg: Optional[Path], settings: AppSettings) -> Path:
    if arg is not None:
        return Path(arg)
    last = settings.get_last_project_dir()
    if last and last.exists():
        return last
    return Path.cwd() / "projects" / "default_project"


def _resolve_year(arg: Optional[int], ctx: ForgeContext, settings: AppSettings) -> int:
    if arg is not None:
        return arg
    last = settings.get_last_year()
    if last is not None and last <= MAX_YEAR:
        return last
    return ctx.default_year


def _resolve_harbor(arg: Optional[str], ctx: ForgeContext) -> Harbor:
    return require_harbor(arg or ctx.harbor_id)


# ---------- commands ----------

def _cmd_year(args, ctx: ForgeContext, settings: AppSettings, out: Callable[[str], None]) -> None:
    year = generate_year(_resolve_year(args.year, ctx, settings))
    harbor = _resolve_harbor(args.harbor, ctx)
    settings.set_last_year(year.year)

    out(f"Year {year.year} — extra month in {year.extra_season_name}")
    for season in SEASON_NAMES:
        months = ", ".join(month_name(m) for m in year.months_in_season(season))
        out(f"  {season:<7} {months}")
    out("")
    out(f"Tides at {harbor.name} (offset {harbor.tide_offset:+d})")
    out(f"  {'Month':<8} {'Low':>4} {'Mod':>4} {'High':>5} {'Mega':>5} {'Safe':>5} {'Best':>5}")
    for s in summarize_year(year, harbor.tide_offset):
        c = s.tide_counts
        out(f"  {s.name:<8} {c['Low']:>4} {c['Moderate']:>4} {c['High']:>5} {c['Mega']:>5} {s.safe_days:>5} {s.longest_window:>5}")


def _cmd_month(args, ctx: ForgeContext, settings: AppSettings, out: Callable[[str], None]) -> None:
    year = generate_year(_resolve_year(args.year, ctx, settings))
    harbor = _resolve_harbor(args.harbor, ctx)
    settings.set_last_year(year.year)
    month_days = group_by_month(year.days)[args.month]

    out(f"{month_name(args.month)} ({year.season_map[args.month]}), year {year.year} — {harbor.name}")
    for a in adjust_days(month_days, harbor.tide_offset):
        d = a.day
        tide = a.effective_tide if a.effective_tide == d.tide else f"{a.effective_tide} (raw {d.tide})"
        event = f"  {d.event}" if d.event else ""
        out(f"  {d.day:>2} {d.weekday_name:<8} {MOON_ICONS[d.major]}{MOON_ICONS[d.minor]} {tide}{event}")

    out("")
    severe = high_tide_days(month_days, harbor.tide_offset, limit=ctx.high_tide_limit)
    out("Severe tides: " + (", ".join(f"{a.day.day} {a.effective_tide}" for a in severe) or "none"))

    windows = build_shipping_windows(month_days, harbor.tide_offset)
    if windows:
        out("Safe shipping windows:")
        for w in windows:
            out(f"  days {w.start}–{w.end} ({w.length} day window)")
    else:
        out("No safe windows this month.")

    fits: List[str] = []
    for route in ROUTES:
        ok = route_departures(windows, route)
        if ok:
            starts = ", ".join(str(w.start) for w in ok)
            fits.append(f"  {route.name}: depart day {starts}")
    if fits:
        out("Route departures:")
        for line in fits:
            out(line)


def _cmd_export(args, ctx: ForgeContext, settings: AppSettings, out: Callable[[str], None]) -> None:
    year = generate_year(_resolve_year(args.year, ctx, settings))
    harbor = _resolve_harbor(args.harbor, ctx)
    settings.set_last_year(year.year)
    pack_dir = export_year_pack(ctx, year, harbor, include_daily_md=not args.no_daily)
    out(str(pack_dir))


def _cmd_harbors(args, ctx: ForgeContext, settings: AppSettings, out: Callable[[str], None]) -> None:
    out("Harbors:")
    for h in HARBORS:
        marker = "*" if h.id == ctx.harbor_id else " "
        out(f" {marker} {h.id:<16} {h.tide_offset:+d}  {h.name} — {h.note}")
    out("")
    out("Routes:")
    for r in ROUTES:
        out(f"  {r.id:<24} {r.distance_miles:>5} mi  {r.duration_days_min}-{r.duration_days_max} days  {r.name}")


def _cmd_config(args, ctx: ForgeContext, settings: AppSettings, out: Callable[[str], None]) -> None:
    changed = False
    if args.default_year is not None:
        ctx.project_settings["default_year"] = args.default_year
        changed = True
    if args.harbor is not None:
        ctx.project_settings["harbor_id"] = require_harbor(args.harbor).id
        changed = True
    if args.high_tide_limit is not None:
        ctx.project_settings["high_tide_limit"] = int(args.high_tide_limit)
        changed = True
    if args.export_subdir is not None:
        ctx.project_settings["export_subdir"] = args.export_subdir.strip()
        changed = True
    if changed:
        ctx.save_project_settings()
        ctx.log(f"[config] Saved {ctx.project_dir / 'project.json'}")
    for key in sorted(ctx.project_settings):
        out(f"{key} = {ctx.project_settings[key]}")


COMMANDS = {
    "year": _cmd_year,
    "month": _cmd_month,
    "export": _cmd_export,
    "harbors": _cmd_harbors,
    "config": _cmd_config,
}


def main(argv: Optional[Sequence[str]] = None, *, settings: Optional[AppSettings] = None, out: Callable[[str], None] = print) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings if settings is not None else AppSettings()

    ctx = ForgeContext(log=out)
    ctx.set_project_dir(_resolve_project_dir(args.project, settings))
    settings.set_last_project_dir(ctx.project_dir)

    try:
        COMMANDS[args.command](args, ctx, settings, out)
    except (InvalidYearError, UnknownHarborError) as e:
        parser.error(str(e.args[0]) if e.args else str(e))
    settings.sync()
    return 0


if __name__ == "__main__":
    sys.exit(main())
