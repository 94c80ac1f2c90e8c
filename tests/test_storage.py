from __future__ import annotations

import json
from pathlib import Path

import pytest

from tartil.config import configure, get_settings, reset_settings
from tartil.exceptions import ConfigurationError
from tartil.models import AudioDownloadAmount, RepeatAmount
from tartil.storage.settings import (
    PREF_DOWNLOAD_AMOUNT,
    PREF_REPEAT_AMOUNT,
    PREF_REPEAT_TIMES,
    AudioPreferences,
    JsonSettingsStore,
    MemorySettingsStore,
)


@pytest.fixture(autouse=True)
def _reset_settings():
    reset_settings()
    yield
    reset_settings()


def test_preference_defaults() -> None:
    prefs = AudioPreferences(MemorySettingsStore())

    assert prefs.active_reciter is None
    assert prefs.repeat_enabled is False
    assert prefs.repeat_preference is None
    assert prefs.repeat_amount == RepeatAmount.ONE_AYAH
    assert prefs.repeat_times == 1
    assert prefs.download_amount == AudioDownloadAmount.PAGE
    assert prefs.prefer_streaming is False


def test_enums_stored_by_name() -> None:
    store = MemorySettingsStore()
    prefs = AudioPreferences(store)

    prefs.repeat_amount = RepeatAmount.TEN_AYAH
    prefs.download_amount = AudioDownloadAmount.JUZ

    assert store.get(PREF_REPEAT_AMOUNT) == "TEN_AYAH"
    assert store.get(PREF_DOWNLOAD_AMOUNT) == "JUZ"
    assert prefs.repeat_amount == RepeatAmount.TEN_AYAH


def test_unreadable_values_fall_back() -> None:
    store = MemorySettingsStore(
        {PREF_REPEAT_AMOUNT: "FOREVER", PREF_DOWNLOAD_AMOUNT: 7, PREF_REPEAT_TIMES: "many"}
    )
    prefs = AudioPreferences(store)

    assert prefs.repeat_amount == RepeatAmount.ONE_AYAH
    assert prefs.download_amount == AudioDownloadAmount.PAGE
    assert prefs.repeat_times == 1


def test_json_store_persists(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    prefs = AudioPreferences(JsonSettingsStore(path))
    prefs.active_reciter = "Minshawi Murattal"
    prefs.repeat_enabled = True

    reloaded = AudioPreferences(JsonSettingsStore(path))
    assert reloaded.active_reciter == "Minshawi Murattal"
    assert reloaded.repeat_enabled is True
    assert reloaded.repeat_preference is True
    assert json.loads(path.read_text(encoding="utf-8"))["audio_repeat"] is True
    assert list(path.parent.glob("*.tmp")) == []


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_json_store_rejects_bad_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError) as exc_info:
        JsonSettingsStore(path)
    assert exc_info.value.context["path"] == str(path)


def test_configure_overrides(tmp_path: Path) -> None:
    settings = configure(audio_root=tmp_path, stop_debounce_seconds=0.2)

    assert get_settings() is settings
    assert settings.stop_debounce_seconds == 0.2
    assert settings.timing_index_path == tmp_path / "ayahinfo.db"
    assert settings.album_label == "Quran"


def test_configure_rejects_bad_values() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        configure(no_such_setting=1)
    assert exc_info.value.setting_name == "no_such_setting"

    with pytest.raises(ConfigurationError):
        configure(stop_debounce_seconds=-1)


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("TARTIL_STOP_DEBOUNCE_SECONDS", "1.5")
    monkeypatch.setenv("TARTIL_ALBUM_LABEL", "Mushaf")

    settings = get_settings()

    assert settings.stop_debounce_seconds == 1.5
    assert settings.album_label == "Mushaf"
