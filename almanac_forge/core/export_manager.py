from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import re


def _slug(s: str) -> str:
    s = (s or "").strip().lower()
    s = re.sub(r"[^a-z0-9\-_ ]+", "", s)
    s = re.sub(r"\s+", "-", s)
    return s[:60] or "almanac"


@dataclass
class ExportManager:
    project_dir: Path

    def export_root(self) -> Path:
        p = self.project_dir / "exports"
        p.mkdir(parents=True, exist_ok=True)
        return p

    def make_filename(self, stem: str, ext: str, *, year: Optional[int] = None) -> str:
        """Build an export file name, e.g. ``almanac-year-1108.json``."""
        ext = ext.lstrip(".")
        stem = _slug(stem)
        if year is not None:
            stem = f"{stem}-year-{int(year)}"
        return f"{stem}.{ext}"

    def create_export_pack(self, title: str, *, year: Optional[int] = None, slug: Optional[str] = None, subdir: Optional[str] = None) -> Path:
        """Create (or reuse) the folder holding one year's export files.

        Re-exporting the same year and harbor overwrites the previous pack.
        """
        parts = [_slug(title)]
        if year is not None:
            parts.append(f"year-{int(year)}")
        if slug:
            parts.append(_slug(slug))
        root = self.export_root()
        if subdir:
            root = root / subdir
        path = root / "packs" / "_".join(parts)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_text(self, pack_dir: Path, filename: str, content: str) -> Path:
        p = pack_dir / filename
        p.write_text(content, encoding="utf-8", newline="")
        return p
