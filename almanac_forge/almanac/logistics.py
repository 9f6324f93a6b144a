from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .generator import NUM_MONTHS, DayRecord, Year, month_name
from .harbors import Route
from .tides import TIDE_ORDER, TIDE_RANK, adjust_tide, tide_rank


SEVERE_RANK = TIDE_RANK["High"]
SAFE_RANK = TIDE_RANK["Moderate"]


# ----------------------------
# Data models
# ----------------------------

@dataclass(frozen=True)
class AdjustedDay:
    """A day seen from a harbor. ``adjusted_tide`` is None when no harbor is selected."""

    day: DayRecord
    adjusted_tide: Optional[str] = None

    @property
    def effective_tide(self) -> str:
        return self.adjusted_tide or self.day.tide


@dataclass(frozen=True)
class ShippingWindow:
    start: int
    end: int
    length: int


@dataclass(frozen=True)
class MonthSummary:
    month: int
    name: str
    season: str
    days: int
    tide_counts: Dict[str, int]
    event_days: int
    safe_days: int
    windows: int
    longest_window: int


# ----------------------------
# Grouping / harbor views
# ----------------------------

def group_by_month(days: Iterable[DayRecord]) -> Dict[int, List[DayRecord]]:
    """Split a day sequence by month; months 1..13 are always present."""
    md: Dict[int, List[DayRecord]] = {m: [] for m in range(1, NUM_MONTHS + 1)}
    for d in days:
        md.setdefault(d.month, []).append(d)
    return md


def adjust_days(days: Iterable[DayRecord], harbor_offset: Optional[int] = None) -> List[AdjustedDay]:
    if harbor_offset is None:
        return [AdjustedDay(day=d) for d in days]
    return [AdjustedDay(day=d, adjusted_tide=adjust_tide(d.tide, harbor_offset)) for d in days]


def high_tide_days(days: Iterable[DayRecord], harbor_offset: Optional[int] = None, limit: Optional[int] = None) -> List[AdjustedDay]:
    """Days whose (harbor-adjusted) tide is High or Mega, in calendar order.

    ``limit`` only trims the result for display.
    """
    severe = [a for a in adjust_days(days, harbor_offset) if tide_rank(a.effective_tide) >= SEVERE_RANK]
    if limit is not None:
        severe = severe[:max(0, int(limit))]
    return severe


# ----------------------------
# Shipping windows
# ----------------------------

def windows_from_day_numbers(day_numbers: Iterable[int]) -> List[ShippingWindow]:
    """Run-length merge of ascending day numbers into maximal windows.

    [2, 3, 4, 7, 8, 12] -> 2-4, 7-8, 12-12
    """
    windows: List[ShippingWindow] = []
    start: Optional[int] = None
    end = 0
    for n in day_numbers:
        if start is None:
            start = end = n
            continue
        if n == end + 1:
            end = n
        else:
            windows.append(ShippingWindow(start=start, end=end, length=end - start + 1))
            start = end = n
    if start is not None:
        windows.append(ShippingWindow(start=start, end=end, length=end - start + 1))
    return windows


def safe_days(month_days: Iterable[DayRecord], harbor_offset: Optional[int] = 0) -> List[AdjustedDay]:
    """Ordinary days whose adjusted tide is Moderate or calmer."""
    return [
        a for a in adjust_days(month_days, harbor_offset)
        if not a.day.intercalary and tide_rank(a.effective_tide) <= SAFE_RANK
    ]


def build_shipping_windows(month_days: Iterable[DayRecord], harbor_offset: Optional[int] = 0) -> List[ShippingWindow]:
    return windows_from_day_numbers(sorted(a.day.day for a in safe_days(month_days, harbor_offset)))


def route_departures(windows: Sequence[ShippingWindow], route: Route) -> List[ShippingWindow]:
    """Windows long enough to finish ``route`` at its fastest pace."""
    return [w for w in windows if w.length >= route.duration_days_min]


# ----------------------------
# Summaries
# ----------------------------

def summarize_month(month: int, month_days: Sequence[DayRecord], season: str, harbor_offset: Optional[int] = None) -> MonthSummary:
    adjusted = adjust_days(month_days, harbor_offset)
    counts = {t: 0 for t in TIDE_ORDER}
    for a in adjusted:
        counts[a.effective_tide] += 1
    windows = build_shipping_windows(month_days, harbor_offset)
    return MonthSummary(
        month=month,
        name=month_name(month),
        season=season,
        days=len(month_days),
        tide_counts=counts,
        event_days=sum(1 for d in month_days if d.event),
        safe_days=sum(w.length for w in windows),
        windows=len(windows),
        longest_window=max((w.length for w in windows), default=0),
    )


def summarize_year(year: Year, harbor_offset: Optional[int] = None) -> List[MonthSummary]:
    grouped = group_by_month(year.days)
    return [
        summarize_month(m, grouped[m], year.season_map.get(m, ""), harbor_offset)
        for m in sorted(grouped)
    ]
