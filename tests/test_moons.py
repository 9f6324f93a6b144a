from __future__ import annotations

import pytest

from almanac_forge.almanac.moons import (
    MAJOR_PERIOD, WEEKLY_PERIOD, illumination, major_phase, moon_phase, phase_name, weekly_phase,
)


def test_major_phase_wraps_each_period():
    assert moon_phase(0, MAJOR_PERIOD) == 0.0
    assert moon_phase(15, MAJOR_PERIOD) == pytest.approx(0.5)
    assert moon_phase(30, MAJOR_PERIOD) == 0.0
    assert moon_phase(392, MAJOR_PERIOD) == pytest.approx(2 / 30)


def test_weekly_phase_handles_fractional_period():
    assert moon_phase(8, WEEKLY_PERIOD) == pytest.approx(0.4 / 7.6)
    for day in range(0, 5000):
        p = moon_phase(day, WEEKLY_PERIOD)
        assert 0.0 <= p < 1.0


def test_named_moon_helpers():
    assert major_phase(407) == pytest.approx(moon_phase(407, MAJOR_PERIOD))
    assert weekly_phase(12) == pytest.approx(4.4 / 7.6)


@pytest.mark.parametrize(
    "phase, name",
    [
        (0.0, "New"),
        (0.124999, "New"),
        (0.125, "Waxing"),
        (0.374999, "Waxing"),
        (0.375, "Full"),
        (0.5, "Full"),
        (0.624999, "Full"),
        (0.625, "Waning"),
        (0.874999, "Waning"),
        (0.875, "New"),
        (0.99, "New"),
    ],
)
def test_phase_name_bands(phase, name):
    assert phase_name(phase) == name


def test_illumination():
    assert illumination(0.0) == 0.0
    assert illumination(0.25) == pytest.approx(0.5)
    assert illumination(0.5) == pytest.approx(1.0)
    assert illumination(0.75) == pytest.approx(0.5)
