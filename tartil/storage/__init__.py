"""
Settings storage for the tartil library.
"""

from tartil.storage.settings import (
    PREF_ACTIVE_QARI,
    PREF_AUDIO_REPEAT,
    PREF_DOWNLOAD_AMOUNT,
    PREF_PREFER_STREAMING,
    PREF_REPEAT_AMOUNT,
    PREF_REPEAT_TIMES,
    AudioPreferences,
    JsonSettingsStore,
    MemorySettingsStore,
    SettingsStore,
)

__all__ = [
    "PREF_ACTIVE_QARI",
    "PREF_AUDIO_REPEAT",
    "PREF_DOWNLOAD_AMOUNT",
    "PREF_PREFER_STREAMING",
    "PREF_REPEAT_AMOUNT",
    "PREF_REPEAT_TIMES",
    "AudioPreferences",
    "JsonSettingsStore",
    "MemorySettingsStore",
    "SettingsStore",
]
