from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .moons import major_phase, phase_name, weekly_phase
from .seed import extra_month_season
from .tides import tide_level


# ----------------------------
# Calendar constants
# ----------------------------

NUM_MONTHS = 13
DAYS_PER_MONTH = 30
WEEK_LENGTH = 7
YEAR_LENGTH = NUM_MONTHS * DAYS_PER_MONTH + 2

NEW_YEAR_DAY = 0
NEW_YEARS_EVE_DAY = DAYS_PER_MONTH + 1

SEASON_NAMES: Tuple[str, ...] = ("Spring", "Summer", "Autumn", "Winter")
WEEKDAY_NAMES: Tuple[str, ...] = ("First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh")
MONTH_NAMES: Dict[int, str] = {
    1: "Beres", 2: "Brit", 3: "Avos", 4: "Emos", 5: "Umshei", 6: "Idrel",
    7: "Yamei", 8: "Mila", 9: "Leida", 10: "Divar", 11: "Kohav", 12: "Shiv", 13: "Midia",
}

NEW_YEAR_FESTIVAL = "🎊 New Year's Festival"
NEW_YEARS_EVE_FESTIVAL = "🎊 New Year's Eve Festival"
DUAL_FULL_FESTIVAL = "🌕 Dual-Full Festival"
WEEKLY_MARKET = "🛒 Weekly Market"
HARVEST_MOON = "🌾 Harvest Moon"

MARKET_WEEKDAY = 2
HARVEST_MONTH = 7


class InvalidYearError(ValueError):
    """Raised when a year number cannot be turned into a calendar."""


# ----------------------------
# Data models
# ----------------------------

@dataclass(frozen=True)
class DayRecord:
    absolute_day: int
    month: int
    day: int
    weekday: int
    season: str
    major: str
    minor: str
    major_phase: float
    minor_phase: float
    tide: str
    event: str = ""
    intercalary: bool = False

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.weekday - 1]

    @property
    def month_name(self) -> str:
        return month_name(self.month)


@dataclass(frozen=True)
class Year:
    year: int
    extra_month_season: int
    season_map: Mapping[int, str]
    days: Tuple[DayRecord, ...] = field(default_factory=tuple)

    @property
    def base_day(self) -> int:
        return year_base_day(self.year)

    @property
    def extra_season_name(self) -> str:
        return SEASON_NAMES[self.extra_month_season]

    def epoch_day(self, record: DayRecord) -> int:
        """Days since the epoch for a record of this year."""
        return self.base_day + record.absolute_day

    def months_in_season(self, season: str) -> List[int]:
        return [m for m, s in sorted(self.season_map.items()) if s == season]


# ----------------------------
# Helpers
# ----------------------------

def month_name(month: int) -> str:
    return MONTH_NAMES.get(month, f"Month {month}")


def validate_year(year: object) -> int:
    # bool is an int subclass but never a meaningful year
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYearError(f"Year must be an integer, got {year!r}.")
    if year < 1:
        raise InvalidYearError(f"Year must be 1 or later, got {year}.")
    return year


def year_base_day(year: int) -> int:
    """Epoch day of the year's opening festival."""
    return max(0, int(year) - 1) * YEAR_LENGTH


def build_season_map(extra_season: int) -> Dict[int, str]:
    """Give four consecutive months to ``extra_season`` and three to the rest."""
    season_map: Dict[int, str] = {}
    n = 1
    for si, season in enumerate(SEASON_NAMES):
        count = 4 if si == extra_season else 3
        for _ in range(count):
            season_map[n] = season
            n += 1
    return season_map


def event_for_day(month: int, day: int, major: str, minor: str, weekday: int) -> str:
    """First matching rule wins; a day never carries two labels."""
    if month == 1 and day == NEW_YEAR_DAY:
        return NEW_YEAR_FESTIVAL
    if major == "Full" and minor == "Full":
        return DUAL_FULL_FESTIVAL
    if weekday == MARKET_WEEKDAY:
        return WEEKLY_MARKET
    if month == HARVEST_MONTH and major == "Full":
        return HARVEST_MOON
    return ""


def _make_day(base_day: int, counter: int, month: int, day: int, season: str, event: str, intercalary: bool) -> DayRecord:
    epoch_day = base_day + counter
    mp = major_phase(epoch_day)
    wp = weekly_phase(epoch_day)
    major = phase_name(mp)
    minor = phase_name(wp)
    weekday = (counter % WEEK_LENGTH) + 1
    if not intercalary:
        event = event_for_day(month, day, major, minor, weekday)
    return DayRecord(
        absolute_day=counter,
        month=month,
        day=day,
        weekday=weekday,
        season=season,
        major=major,
        minor=minor,
        major_phase=mp,
        minor_phase=wp,
        tide=tide_level(mp, wp, epoch_day),
        event=event,
        intercalary=intercalary,
    )


# ----------------------------
# Generation
# ----------------------------

def generate_year(year: int) -> Year:
    """Build the full, deterministic calendar for ``year``.

    Layout: the New Year's Festival (month 1, day 0), thirteen months of
    thirty days, then New Year's Eve (month 13, day 31). Weekdays run
    straight through both festival days.
    """
    year = validate_year(year)
    extra = extra_month_season(year)
    season_map = build_season_map(extra)
    base_day = year_base_day(year)

    days: List[DayRecord] = []
    counter = 0

    days.append(_make_day(base_day, counter, 1, NEW_YEAR_DAY, SEASON_NAMES[0], NEW_YEAR_FESTIVAL, True))
    counter += 1

    for month in range(1, NUM_MONTHS + 1):
        for day in range(1, DAYS_PER_MONTH + 1):
            days.append(_make_day(base_day, counter, month, day, season_map[month], "", False))
            counter += 1

    days.append(_make_day(base_day, counter, NUM_MONTHS, NEW_YEARS_EVE_DAY, SEASON_NAMES[-1], NEW_YEARS_EVE_FESTIVAL, True))

    return Year(
        year=year,
        extra_month_season=extra,
        season_map=MappingProxyType(season_map),
        days=tuple(days),
    )


generate = generate_year
