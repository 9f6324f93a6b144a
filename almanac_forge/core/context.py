from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import json
from typing import Any, Callable, Dict, Optional

from .export_manager import ExportManager


DEFAULT_YEAR = 1108
MAX_YEAR = 9999
DEFAULT_HARBOR_ID = "west-crossing"
DEFAULT_HIGH_TIDE_LIMIT = 10


@dataclass
class ForgeContext:
    """Shared context for the almanac tools.

    Holds the project directory, its persisted settings, the log sink and
    export helpers.
    """

    project_dir: Path = field(default_factory=lambda: Path.cwd() / "projects" / "default_project")
    log: Callable[[str], None] = print

    # Project-level settings (persisted in project_dir/project.json)
    project_settings: Dict[str, Any] = field(default_factory=dict)

    def set_project_dir(self, new_dir: Path) -> None:
        self.project_dir = Path(new_dir)
        self.ensure_project_dirs()
        self.load_project_settings()

    # ---------- dirs / settings ----------

    def ensure_project_dirs(self) -> None:
        (self.project_dir / "exports").mkdir(parents=True, exist_ok=True)

    def load_project_settings(self) -> None:
        p = self.project_dir / "project.json"
        if p.exists():
            try:
                self.project_settings = json.loads(p.read_text(encoding="utf-8"))
            except Exception:
                self.project_settings = {}
        else:
            self.project_settings = {}
        if not isinstance(self.project_settings, dict):
            self.project_settings = {}

        # Defaults
        self.project_settings.setdefault("name", self.project_dir.name)
        self.project_settings.setdefault("default_year", DEFAULT_YEAR)
        self.project_settings.setdefault("harbor_id", DEFAULT_HARBOR_ID)
        self.project_settings.setdefault("high_tide_limit", DEFAULT_HIGH_TIDE_LIMIT)
        self.project_settings.setdefault("export_subdir", "")  # optional extra folder inside exports

    def save_project_settings(self) -> None:
        p = self.project_dir / "project.json"
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.project_settings, indent=2, ensure_ascii=False), encoding="utf-8")

    # ---------- typed settings ----------

    def _int_setting(self, key: str, fallback: int) -> int:
        try:
            return int(self.project_settings.get(key, fallback))
        except Exception:
            return fallback

    @property
    def default_year(self) -> int:
        year = self._int_setting("default_year", DEFAULT_YEAR)
        return year if 1 <= year <= MAX_YEAR else DEFAULT_YEAR

    @property
    def harbor_id(self) -> str:
        return str(self.project_settings.get("harbor_id") or DEFAULT_HARBOR_ID)

    @property
    def high_tide_limit(self) -> Optional[int]:
        # 0 or less means "show every severe day"
        limit = self._int_setting("high_tide_limit", DEFAULT_HIGH_TIDE_LIMIT)
        return limit if limit > 0 else None

    # ---------- exports ----------

    @property
    def export_manager(self) -> ExportManager:
        return ExportManager(self.project_dir)

    @property
    def export_subdir(self) -> Optional[str]:
        sub = str(self.project_settings.get("export_subdir", "") or "").strip()
        return sub or None
