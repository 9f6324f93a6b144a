from __future__ import annotations

import pytest

from almanac_forge.almanac.generator import DayRecord, generate_year


@pytest.fixture(scope="session")
def year_1108():
    return generate_year(1108)


@pytest.fixture
def make_day():
    """Factory for hand-built day records; only the fields a test cares about need passing."""

    def _make(day: int, tide: str = "Low", month: int = 1, intercalary: bool = False, event: str = "", **kw) -> DayRecord:
        fields = dict(
            absolute_day=day,
            month=month,
            day=day,
            weekday=(day % 7) + 1,
            season="Spring",
            major="New",
            minor="New",
            major_phase=0.0,
            minor_phase=0.0,
            tide=tide,
            event=event,
            intercalary=intercalary,
        )
        fields.update(kw)
        return DayRecord(**fields)

    return _make
