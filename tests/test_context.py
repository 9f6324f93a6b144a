from __future__ import annotations

import json

from almanac_forge.core.context import DEFAULT_HARBOR_ID, DEFAULT_YEAR, MAX_YEAR, ForgeContext
from almanac_forge.core.export_manager import ExportManager


def test_defaults_on_fresh_project(tmp_path):
    ctx = ForgeContext()
    ctx.set_project_dir(tmp_path / "fresh")
    assert (tmp_path / "fresh" / "exports").is_dir()
    assert ctx.project_settings["name"] == "fresh"
    assert ctx.default_year == DEFAULT_YEAR
    assert ctx.harbor_id == DEFAULT_HARBOR_ID
    assert ctx.high_tide_limit == 10
    assert ctx.export_subdir is None


def test_settings_round_trip(tmp_path):
    ctx = ForgeContext()
    ctx.set_project_dir(tmp_path)
    ctx.project_settings["default_year"] = 42
    ctx.project_settings["high_tide_limit"] = 0
    ctx.save_project_settings()

    again = ForgeContext()
    again.set_project_dir(tmp_path)
    assert again.default_year == 42
    assert again.high_tide_limit is None


def test_broken_settings_fall_back(tmp_path):
    (tmp_path / "project.json").write_text("{not json", encoding="utf-8")
    ctx = ForgeContext()
    ctx.set_project_dir(tmp_path)
    assert ctx.default_year == DEFAULT_YEAR


def test_bad_setting_values_fall_back(tmp_path):
    (tmp_path / "project.json").write_text(json.dumps({"default_year": "soon", "harbor_id": ""}), encoding="utf-8")
    ctx = ForgeContext()
    ctx.set_project_dir(tmp_path)
    assert ctx.default_year == DEFAULT_YEAR
    assert ctx.harbor_id == DEFAULT_HARBOR_ID


def test_default_year_out_of_range_falls_back(tmp_path):
    (tmp_path / "project.json").write_text(json.dumps({"default_year": 20000}), encoding="utf-8")
    ctx = ForgeContext()
    ctx.set_project_dir(tmp_path)
    assert ctx.default_year == DEFAULT_YEAR
    ctx.project_settings["default_year"] = MAX_YEAR
    assert ctx.default_year == MAX_YEAR


def test_negative_tide_limit_means_no_limit(tmp_path):
    ctx = ForgeContext()
    ctx.set_project_dir(tmp_path)
    ctx.project_settings["high_tide_limit"] = -3
    assert ctx.high_tide_limit is None


def test_export_manager_filenames(tmp_path):
    em = ExportManager(tmp_path)
    assert em.make_filename("almanac", ".json", year=7) == "almanac-year-7.json"
    assert em.make_filename("Tide Table!", "md") == "tide-table.md"


def test_export_pack_is_reused(tmp_path):
    em = ExportManager(tmp_path)
    first = em.create_export_pack("almanac", year=3, slug="strait-city")
    second = em.create_export_pack("almanac", year=3, slug="strait-city")
    assert first == second
    assert first.name == "almanac_year-3_strait-city"
    written = em.write_text(first, "x.csv", "a,b\n")
    assert written.read_text(encoding="utf-8") == "a,b\n"
