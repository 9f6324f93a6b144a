from __future__ import annotations

import csv
import io
import json

from almanac_forge.almanac.exports import (
    DAY_FIELDS, build_csv, build_year_json, build_year_markdown, day_to_dict, export_year_pack,
)
from almanac_forge.almanac.harbors import get_harbor
from almanac_forge.core.context import ForgeContext


HEADER = "absoluteDay,month,day,weekday,season,major,minor,majorPhase,minorPhase,tide,event,intercalary"


def test_field_order():
    assert ",".join(DAY_FIELDS) == HEADER


def test_day_to_dict_order(make_day):
    d = make_day(4, "High")
    assert list(day_to_dict(d)) == list(DAY_FIELDS)
    assert day_to_dict(d)["majorPhase"] == 0.0


def test_csv_header_and_rows(year_1108):
    text = build_csv(year_1108.days)
    lines = text.splitlines()
    assert lines[0] == HEADER
    assert len(lines) == 393


def test_csv_escapes_commas_and_quotes(make_day):
    d = make_day(3, event='Festival, "Grand"')
    row = build_csv([d]).splitlines()[1]
    assert '"Festival, ""Grand"""' in row
    parsed = list(csv.reader(io.StringIO(build_csv([d]))))
    assert parsed[1][DAY_FIELDS.index("event")] == 'Festival, "Grand"'


def test_csv_empty_and_missing_event(make_day):
    plain = make_day(3)
    missing = make_day(4, event=None)
    rows = build_csv([plain, missing]).splitlines()[1:]
    for row in rows:
        fields = row.split(",")
        assert fields[DAY_FIELDS.index("event")] == ""
        assert "null" not in row and "None" not in row


def test_csv_booleans_lowercase(make_day):
    row = build_csv([make_day(0, intercalary=True)]).splitlines()[1]
    assert row.endswith(",true")
    row = build_csv([make_day(1)]).splitlines()[1]
    assert row.endswith(",false")


def test_csv_of_nothing_is_header_only():
    assert build_csv([]) == HEADER + "\n"


def test_json_export(year_1108):
    payload = json.loads(build_year_json(1108, year_1108.days))
    assert payload["year"] == 1108
    assert len(payload["days"]) == 392
    assert list(payload["days"][0]) == list(DAY_FIELDS)
    assert payload["days"][0]["intercalary"] is True
    assert payload["days"][1]["event"] in ("", "🛒 Weekly Market", "🌕 Dual-Full Festival")


def test_json_keeps_emoji(year_1108):
    text = build_year_json(1108, year_1108.days[:1])
    assert "🎊 New Year's Festival" in text


def test_json_missing_event(make_day):
    payload = json.loads(build_year_json(3, [make_day(1, event=None)]))
    assert payload["days"][0]["event"] == ""


def test_markdown(year_1108):
    harbor = get_harbor("strait-city")
    md = build_year_markdown(year_1108, harbor)
    assert md.startswith("# Dual-Moon Almanac — Year 1108")
    assert f"**Extra month:** {year_1108.extra_season_name}" in md
    assert "Strait trade city" in md
    assert "## Shipping" in md
    assert "### Midia" in md
    assert "## Daily Almanac" in md


def test_markdown_without_daily(year_1108):
    md = build_year_markdown(year_1108, include_daily=False)
    assert "## Daily Almanac" not in md
    assert "## Harbor" not in md


def test_export_pack(tmp_path, year_1108):
    logs = []
    ctx = ForgeContext(log=logs.append)
    ctx.set_project_dir(tmp_path / "proj")

    pack = export_year_pack(ctx, year_1108, get_harbor("gulf-capital"))

    assert pack.is_dir()
    assert pack.parent == tmp_path / "proj" / "exports" / "packs"
    names = sorted(p.name for p in pack.iterdir())
    assert names == ["almanac-year-1108.csv", "almanac-year-1108.json", "almanac-year-1108.md"]
    assert json.loads((pack / "almanac-year-1108.json").read_text(encoding="utf-8"))["year"] == 1108
    assert (pack / "almanac-year-1108.csv").read_text(encoding="utf-8").startswith(HEADER)
    assert any("1108" in line for line in logs)


def test_export_pack_respects_subdir(tmp_path, year_1108):
    ctx = ForgeContext(log=lambda _m: None)
    ctx.set_project_dir(tmp_path)
    ctx.project_settings["export_subdir"] = "campaign"
    pack = export_year_pack(ctx, year_1108)
    assert pack.parent == tmp_path / "exports" / "campaign" / "packs"
