from __future__ import annotations

import math


_MASK32 = 0xFFFFFFFF
SEASON_BUCKETS = 4


def _mix32(year: int) -> int:
    # 32-bit avalanche mix; every step is taken modulo 2**32
    s = year & _MASK32
    s = ((s ^ 0xDEADBEEF) + ((s << 5) & _MASK32)) & _MASK32
    s = ((s ^ (s >> 16)) * 0x21F0AAAD) & _MASK32
    s = s ^ (s >> 15)
    s = ((s | 1) * 0x735A2D97) & _MASK32
    return (s ^ (s >> 15)) & _MASK32


def year_seed(year: int) -> float:
    """Return a reproducible fraction in [0, 1) for ``year``."""
    return _mix32(int(year)) / 4294967296.0


def extra_month_season(year: int) -> int:
    """Index (0=Spring .. 3=Winter) of the season that gets a fourth month."""
    return int(math.floor(year_seed(year) * SEASON_BUCKETS))
