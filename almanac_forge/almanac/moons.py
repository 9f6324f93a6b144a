from __future__ import annotations

from typing import Dict, Tuple


# Synodic periods, in days
MAJOR_PERIOD = 30.0
WEEKLY_PERIOD = 7.6

PHASE_NAMES: Tuple[str, ...] = ("New", "Waxing", "Full", "Waning")
MOON_ICONS: Dict[str, str] = {"New": "🌑", "Waxing": "🌓", "Full": "🌕", "Waning": "🌗"}


def moon_phase(day: int, period: float) -> float:
    """Phase fraction in [0, 1) for an absolute ``day``.

    Works for fractional periods (the weekly moon runs 7.6 days).
    """
    return (day % period) / period


def phase_name(phase: float) -> str:
    """Band a phase fraction into New / Waxing / Full / Waning.

    New and Full are each a quarter wide and centered on 0.0 and 0.5.
    """
    if phase < 0.125 or phase >= 0.875:
        return "New"
    if phase < 0.375:
        return "Waxing"
    if phase < 0.625:
        return "Full"
    return "Waning"


def illumination(phase: float) -> float:
    """Lit fraction of the disc: 0 at New, 1 at Full."""
    if phase <= 0.5:
        return phase * 2.0
    return (1.0 - phase) * 2.0


def major_phase(day: int) -> float:
    return moon_phase(day, MAJOR_PERIOD)


def weekly_phase(day: int) -> float:
    return moon_phase(day, WEEKLY_PERIOD)
