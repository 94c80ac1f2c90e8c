"""
Persistent user settings.

This module defines the key/value store interface used for user choices
(reciter, repeat policy, download amount, streaming preference), an
in-memory implementation, a JSON-file implementation and typed accessors
for the audio preferences.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Optional, TypeVar

from tartil._logging import log_warning
from tartil.exceptions import ConfigurationError
from tartil.models import AudioDownloadAmount, RepeatAmount

PREF_ACTIVE_QARI = "active_qari"
PREF_AUDIO_REPEAT = "audio_repeat"
PREF_REPEAT_AMOUNT = "repeat_amount"
PREF_REPEAT_TIMES = "repeat_times"
PREF_DOWNLOAD_AMOUNT = "download_amount"
PREF_PREFER_STREAMING = "prefer_streaming"

E = TypeVar("E", bound=Enum)


class SettingsStore(ABC):
    """Abstract key/value store for persisted user settings."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Stored value for ``key``, or ``default``."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        pass


class MemorySettingsStore(SettingsStore):
    """Settings held in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class JsonSettingsStore(SettingsStore):
    """
    Settings persisted to a JSON file.

    Every ``set`` rewrites the file through a temporary file and an atomic
    rename, so a crash never leaves a truncated settings file.

    Args:
        path: JSON file location (created on first write)
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._values = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Settings file is not valid JSON: {e}", context={"path": str(self._path)})
        if not isinstance(data, dict):
            raise ConfigurationError("Settings file must contain a JSON object", context={"path": str(self._path)})
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._values, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class AudioPreferences:
    """
    Typed view over the audio settings in a SettingsStore.

    Enum values are stored by name. Unreadable stored values fall back to the
    default and are logged.
    """

    def __init__(self, store: SettingsStore):
        self._store = store

    @property
    def store(self) -> SettingsStore:
        return self._store

    def _get_enum(self, key: str, enum_type: type[E], default: E) -> E:
        raw = self._store.get(key)
        if raw is None:
            return default
        try:
            return enum_type[raw]
        except (KeyError, TypeError):
            log_warning("Ignoring unknown stored setting", key=key, value=raw)
            return default

    def _get_int(self, key: str, default: int) -> int:
        raw = self._store.get(key, default)
        try:
            return int(raw)
        except (TypeError, ValueError):
            log_warning("Ignoring non-numeric stored setting", key=key, value=raw)
            return default

    @property
    def active_reciter(self) -> Optional[str]:
        """Display name of the selected reciter."""
        return self._store.get(PREF_ACTIVE_QARI)

    @active_reciter.setter
    def active_reciter(self, name: Optional[str]) -> None:
        self._store.set(PREF_ACTIVE_QARI, name)

    @property
    def repeat_enabled(self) -> bool:
        return bool(self._store.get(PREF_AUDIO_REPEAT, False))

    @repeat_enabled.setter
    def repeat_enabled(self, value: bool) -> None:
        self._store.set(PREF_AUDIO_REPEAT, bool(value))

    @property
    def repeat_preference(self) -> Optional[bool]:
        """Stored repeat flag, or None when it was never set."""
        raw = self._store.get(PREF_AUDIO_REPEAT)
        return None if raw is None else bool(raw)

    @property
    def repeat_amount(self) -> RepeatAmount:
        return self._get_enum(PREF_REPEAT_AMOUNT, RepeatAmount, RepeatAmount.ONE_AYAH)

    @repeat_amount.setter
    def repeat_amount(self, value: RepeatAmount) -> None:
        self._store.set(PREF_REPEAT_AMOUNT, value.name)

    @property
    def repeat_times(self) -> int:
        return self._get_int(PREF_REPEAT_TIMES, 1)

    @repeat_times.setter
    def repeat_times(self, value: int) -> None:
        self._store.set(PREF_REPEAT_TIMES, int(value))

    @property
    def download_amount(self) -> AudioDownloadAmount:
        return self._get_enum(PREF_DOWNLOAD_AMOUNT, AudioDownloadAmount, AudioDownloadAmount.PAGE)

    @download_amount.setter
    def download_amount(self, value: AudioDownloadAmount) -> None:
        self._store.set(PREF_DOWNLOAD_AMOUNT, value.name)

    @property
    def prefer_streaming(self) -> bool:
        return bool(self._store.get(PREF_PREFER_STREAMING, False))

    @prefer_streaming.setter
    def prefer_streaming(self, value: bool) -> None:
        self._store.set(PREF_PREFER_STREAMING, bool(value))
