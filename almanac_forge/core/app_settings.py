from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings


@dataclass
class AppSettings:
    """Thin wrapper around QSettings for Almanac Forge app-wide prefs."""

    org: str = "AlmanacForge"
    app: str = "Almanac Forge"

    def __post_init__(self) -> None:
        self._qs = QSettings(self.org, self.app)

    def get_last_project_dir(self) -> Optional[Path]:
        v = self._qs.value("last_project_dir", "")
        v = str(v) if v is not None else ""
        v = v.strip()
        return Path(v) if v else None

    def set_last_project_dir(self, path: Path) -> None:
        self._qs.setValue("last_project_dir", str(Path(path)))

    def get_last_year(self) -> Optional[int]:
        v = self._qs.value("last_year", None)
        try:
            year = int(v)
        except (TypeError, ValueError):
            return None
        return year if year >= 1 else None

    def set_last_year(self, year: int) -> None:
        self._qs.setValue("last_year", int(year))

    def sync(self) -> None:
        self._qs.sync()
