from __future__ import annotations

from typing import Dict, Tuple
import math


# ----------------------------
# Orbit constants
# ----------------------------

# Anomalistic periods (distance cycle), distinct from the synodic phase periods
MAJOR_ANOMALISTIC_PERIOD = 33.0
WEEKLY_ANOMALISTIC_PERIOD = 8.2

MAJOR_ECCENTRICITY = 0.08
WEEKLY_ECCENTRICITY = 0.12

# Major moon dominates the tidal pull
MAJOR_WEIGHT = 0.85
WEEKLY_WEIGHT = 0.15

TIDE_ORDER: Tuple[str, ...] = ("Low", "Moderate", "High", "Mega")
TIDE_RANK: Dict[str, int] = {t: i for i, t in enumerate(TIDE_ORDER)}

# Lower bound of each band, strongest first
TIDE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (0.95, "Mega"),
    (0.72, "High"),
    (0.46, "Moderate"),
)


# ----------------------------
# Strength model
# ----------------------------

def phase_alignment(major_phase: float, minor_phase: float) -> float:
    """1.0 when both moons share a phase, -1.0 when exactly opposed."""
    diff = abs(major_phase - minor_phase)
    diff = min(diff, 1.0 - diff)
    return 1.0 - diff * 2.0


def distance_scale(day: int, anomalistic_period: float, eccentricity: float) -> float:
    anomaly = 2.0 * math.pi * (day % anomalistic_period) / anomalistic_period
    return 1.0 / (1.0 - eccentricity * math.cos(anomaly)) ** 3


def tide_strength(major_phase: float, minor_phase: float, day: int = 0) -> float:
    """Raw tidal intensity for an absolute ``day``.

    Alignment alone would repeat on a fixed beat; the distance terms run on
    the anomalistic periods so Mega tides only show up when alignment and
    close approach coincide.
    """
    major_scale = distance_scale(day, MAJOR_ANOMALISTIC_PERIOD, MAJOR_ECCENTRICITY)
    weekly_scale = distance_scale(day, WEEKLY_ANOMALISTIC_PERIOD, WEEKLY_ECCENTRICITY)
    weighted = major_scale * MAJOR_WEIGHT + weekly_scale * WEEKLY_WEIGHT
    return phase_alignment(major_phase, minor_phase) * weighted


def tide_level_for_strength(strength: float) -> str:
    for threshold, level in TIDE_THRESHOLDS:
        if strength >= threshold:
            return level
    return "Low"


def tide_level(major_phase: float, minor_phase: float, day: int = 0) -> str:
    return tide_level_for_strength(tide_strength(major_phase, minor_phase, day))


# ----------------------------
# Ranks / harbor adjustment
# ----------------------------

def tide_rank(tide: str) -> int:
    """Ordinal of a tide level. Unknown labels raise KeyError."""
    return TIDE_RANK[tide]


def adjust_tide(tide: str, offset: int = 0) -> str:
    """Shift a tide level by a harbor offset, clamped to Low..Mega."""
    idx = tide_rank(tide) + int(offset)
    idx = max(0, min(len(TIDE_ORDER) - 1, idx))
    return TIDE_ORDER[idx]
