from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import json
from importlib import resources
from pathlib import Path


def _load_table(name: str) -> Any:
    """Load a JSON table bundled with the almanac."""
    try:
        with resources.files(__package__).joinpath(f"tables/{name}").open("r", encoding="utf-8") as f:
            return json.load(f)
    except Exception:
        # Fallback: relative path on disk
        p = Path(__file__).parent / "tables" / name
        with p.open("r", encoding="utf-8") as f:
            return json.load(f)


class UnknownHarborError(KeyError):
    """Raised for a harbor id missing from the harbor table."""


@dataclass(frozen=True)
class Harbor:
    id: str
    name: str
    tide_offset: int = 0
    note: str = ""


@dataclass(frozen=True)
class Route:
    id: str
    name: str
    distance_miles: int
    duration_days_min: int
    duration_days_max: int
    note: str = ""


def _harbor_from_row(row: Dict[str, Any]) -> Harbor:
    return Harbor(
        id=str(row["id"]),
        name=str(row.get("name", row["id"])),
        tide_offset=int(row.get("tide_offset", 0)),
        note=str(row.get("note", "")),
    )


def _route_from_row(row: Dict[str, Any]) -> Route:
    lo = int(row.get("duration_days_min", 1))
    hi = int(row.get("duration_days_max", lo))
    return Route(
        id=str(row["id"]),
        name=str(row.get("name", row["id"])),
        distance_miles=int(row.get("distance_miles", 0)),
        duration_days_min=lo,
        duration_days_max=max(lo, hi),
        note=str(row.get("note", "")),
    )


HARBORS: List[Harbor] = [_harbor_from_row(r) for r in _load_table("harbors.json").get("harbors", [])]
ROUTES: List[Route] = [_route_from_row(r) for r in _load_table("routes.json").get("routes", [])]


def find_harbor(harbor_id: str) -> Optional[Harbor]:
    for h in HARBORS:
        if h.id == harbor_id:
            return h
    return None


def get_harbor(harbor_id: str) -> Harbor:
    """Harbor by id, falling back to the first harbor in the table."""
    h = find_harbor(harbor_id)
    if h is not None:
        return h
    return HARBORS[0] if HARBORS else Harbor(id="open-sea", name="Open sea")


def require_harbor(harbor_id: str) -> Harbor:
    h = find_harbor(harbor_id)
    if h is None:
        known = ", ".join(x.id for x in HARBORS)
        raise UnknownHarborError(f"Unknown harbor {harbor_id!r} (known: {known})")
    return h
