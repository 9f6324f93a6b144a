from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple
import csv
import io
import json

from almanac_forge.core.context import ForgeContext
from .generator import DayRecord, Year, SEASON_NAMES, month_name
from .harbors import Harbor
from .logistics import build_shipping_windows, group_by_month, high_tide_days, summarize_year
from .moons import MOON_ICONS, illumination


# Wire name -> DayRecord attribute, in export order
DAY_FIELD_MAP: Tuple[Tuple[str, str], ...] = (
    ("absoluteDay", "absolute_day"),
    ("month", "month"),
    ("day", "day"),
    ("weekday", "weekday"),
    ("season", "season"),
    ("major", "major"),
    ("minor", "minor"),
    ("majorPhase", "major_phase"),
    ("minorPhase", "minor_phase"),
    ("tide", "tide"),
    ("event", "event"),
    ("intercalary", "intercalary"),
)
DAY_FIELDS: Tuple[str, ...] = tuple(k for k, _ in DAY_FIELD_MAP)


def _safe(s: Optional[str]) -> str:
    return (s or "").replace("\r\n", "\n").replace("\r", "\n")


def day_to_dict(day: DayRecord) -> Dict[str, Any]:
    out = {key: getattr(day, attr) for key, attr in DAY_FIELD_MAP}
    out["event"] = out["event"] or ""
    return out


# ----------------------------
# JSON / CSV
# ----------------------------

def build_year_json(year_number: int, days: Iterable[DayRecord]) -> str:
    payload = {
        "year": int(year_number),
        "days": [day_to_dict(d) for d in days],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _csv_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def build_csv(days: Iterable[DayRecord]) -> str:
    """One header row, one row per day. Standard CSV quoting."""
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(DAY_FIELDS)
    for d in days:
        row = day_to_dict(d)
        w.writerow([_csv_value(row[k]) for k in DAY_FIELDS])
    return buf.getvalue()


# ----------------------------
# Markdown
# ----------------------------

def _fmt_windows(windows) -> str:
    if not windows:
        return "none"
    return ", ".join(f"{w.start}–{w.end} ({w.length}d)" for w in windows)


def build_year_markdown(year: Year, harbor: Optional[Harbor] = None, include_daily: bool = True) -> str:
    offset = harbor.tide_offset if harbor else None
    summaries = summarize_year(year, offset)
    grouped = group_by_month(year.days)

    lines: List[str] = []
    lines.append(f"# Dual-Moon Almanac — Year {year.year}")
    lines.append("")
    lines.append("## Seasons")
    lines.append("")
    lines.append(f"- **Extra month:** {year.extra_season_name}")
    for season in SEASON_NAMES:
        months = year.months_in_season(season)
        names = ", ".join(f"{month_name(m)} ({m})" for m in months)
        lines.append(f"- **{season}:** {names}")
    lines.append("")

    if harbor:
        lines.append("## Harbor")
        lines.append("")
        sign = f"{harbor.tide_offset:+d}"
        lines.append(f"- **{harbor.name}** (tide offset {sign})" + (f" — {_safe(harbor.note)}" if harbor.note else ""))
        lines.append("")

    lines.append("## Monthly Tides")
    lines.append("")
    lines.append("| Month | Season | Low | Moderate | High | Mega | Events | Safe Days | Longest Window |")
    lines.append("|---|---|---:|---:|---:|---:|---:|---:|---:|")
    for s in summaries:
        c = s.tide_counts
        lines.append(
            f"| {s.name} ({s.month}) | {s.season} | {c['Low']} | {c['Moderate']} | {c['High']} | {c['Mega']} "
            f"| {s.event_days} | {s.safe_days} | {s.longest_window} |"
        )
    lines.append("")

    lines.append("## Shipping")
    lines.append("")
    for m in sorted(grouped):
        month_days = grouped[m]
        severe = high_tide_days(month_days, offset)
        windows = build_shipping_windows(month_days, offset)
        severe_txt = ", ".join(f"{a.day.day} ({a.effective_tide})" for a in severe) or "none"
        lines.append(f"### {month_name(m)}")
        lines.append(f"- Severe tides: {severe_txt}")
        lines.append(f"- Safe windows: {_fmt_windows(windows)}")
        lines.append("")

    if include_daily:
        lines.append("## Daily Almanac")
        lines.append("")
        for m in sorted(grouped):
            lines.append(f"### {month_name(m)} ({year.season_map.get(m, '')})")
            lines.append("")
            for d in grouped[m]:
                major = f"{MOON_ICONS[d.major]} {d.major} {illumination(d.major_phase):.0%}"
                minor = f"{MOON_ICONS[d.minor]} {d.minor} {illumination(d.minor_phase):.0%}"
                event = f" — {_safe(d.event)}" if d.event else ""
                lines.append(f"- Day {d.day} ({d.weekday_name}): {major} | {minor} | {d.tide} tide{event}")
            lines.append("")
    return "\n".join(lines).strip() + "\n"


# ----------------------------
# Export pack
# ----------------------------

def export_year_pack(ctx: ForgeContext, year: Year, harbor: Optional[Harbor] = None, include_daily_md: bool = True) -> Path:
    """Write ``almanac-year-<N>`` .json / .csv / .md into an export pack folder."""
    em = ctx.export_manager
    pack_dir = em.create_export_pack("almanac", year=year.year, slug=harbor.id if harbor else None, subdir=ctx.export_subdir)

    json_name = em.make_filename("almanac", "json", year=year.year)
    csv_name = em.make_filename("almanac", "csv", year=year.year)
    md_name = em.make_filename("almanac", "md", year=year.year)

    em.write_text(pack_dir, json_name, build_year_json(year.year, year.days))
    em.write_text(pack_dir, csv_name, build_csv(year.days))
    em.write_text(pack_dir, md_name, build_year_markdown(year, harbor, include_daily=include_daily_md))

    ctx.log(f"[almanac] Exported year {year.year} to {pack_dir}")
    return pack_dir
