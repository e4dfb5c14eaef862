from __future__ import annotations

import json
from pathlib import Path

from invoice_builder.core.settings import Settings, load_settings, save_settings


def test_missing_file_writes_defaults(tmp_path: Path) -> None:
    p = tmp_path / "cfg" / "settings.json"
    s = load_settings(p)
    assert s == Settings()
    assert p.exists()
    assert json.loads(p.read_text(encoding="utf-8"))["currency_code"] == "IDR"


def test_corrupt_file_falls_back_without_overwriting(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    p.write_text("{ not json", encoding="utf-8")
    assert load_settings(p) == Settings()
    assert p.read_text(encoding="utf-8") == "{ not json"


def test_unknown_keys_ignored_and_known_merged(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"locale": "en-US", "theme": "dark"}), encoding="utf-8")
    s = load_settings(p)
    assert s.locale == "en-US"
    assert s.business_name == Settings().business_name


def test_round_trip_and_export_dir(tmp_path: Path) -> None:
    p = tmp_path / "settings.json"
    s = Settings(export_dir=str(tmp_path / "out"), image_timeout_ms=1500)
    save_settings(s, p)
    loaded = load_settings(p)
    assert loaded == s
    assert loaded.resolved_export_dir() == tmp_path / "out"
    assert not p.with_suffix(".json.tmp").exists()
