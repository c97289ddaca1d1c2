"""
Settings provider: defaults, typed accessors, JSON file backend
"""

from __future__ import annotations

import json

from wakapi_core.settings import JsonFileStore, MemoryStore, WakapiSettings


def test_defaults() -> None:
    settings = WakapiSettings(MemoryStore(), default_project="MyGame")

    assert settings.enabled is False
    assert settings.enable_version_control is True
    assert settings.api_key == ""
    assert settings.base_url == ""
    assert settings.active_project == "MyGame"


def test_last_write_wins() -> None:
    store = MemoryStore()
    settings = WakapiSettings(store)

    settings.api_key = "one"
    settings.api_key = "two"

    assert settings.api_key == "two"
    assert store.get("ApiKey") == "two"


def test_string_booleans_from_hand_edited_config() -> None:
    settings = WakapiSettings(MemoryStore({"Enabled": "true", "EnableVersionControl": "no"}))

    assert settings.enabled is True
    assert settings.enable_version_control is False


def test_json_file_store_round_trip(tmp_path) -> None:
    path = tmp_path / "config.json"
    settings = WakapiSettings(JsonFileStore(path))

    settings.enabled = True
    settings.base_url = "https://wakapi.test"
    settings.enable_version_control = False

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {
        "Enabled": True,
        "BaseURL": "https://wakapi.test",
        "EnableVersionControl": False,
    }
    assert WakapiSettings(JsonFileStore(path)).base_url == "https://wakapi.test"


def test_json_file_store_missing_or_corrupt_file(tmp_path) -> None:
    missing = WakapiSettings(JsonFileStore(tmp_path / "nope.json"))
    assert missing.enabled is False

    corrupt = tmp_path / "config.json"
    corrupt.write_text("{not json", encoding="utf-8")
    settings = WakapiSettings(JsonFileStore(corrupt))
    assert settings.enabled is False


def test_json_file_store_sees_external_edits(tmp_path) -> None:
    path = tmp_path / "config.json"
    settings = WakapiSettings(JsonFileStore(path))
    assert settings.enabled is False

    path.write_text(json.dumps({"Enabled": True}), encoding="utf-8")

    assert settings.enabled is True


def test_json_file_store_backs_up_unreadable_file(tmp_path, caplog) -> None:
    corrupt = tmp_path / "config.json"
    corrupt.write_text('{"ApiKey": "hand-edited", ', encoding="utf-8")
    settings = WakapiSettings(JsonFileStore(corrupt))

    settings.enabled = True

    assert json.loads(corrupt.read_text(encoding="utf-8")) == {"Enabled": True}
    backup = tmp_path / "config.json.bak"
    assert backup.read_text(encoding="utf-8") == '{"ApiKey": "hand-edited", '
    assert "Unreadable config" in caplog.text


def test_json_file_store_first_write_creates_no_backup(tmp_path) -> None:
    settings = WakapiSettings(JsonFileStore(tmp_path / "config.json"))

    settings.api_key = "k"

    assert not (tmp_path / "config.json.bak").exists()
