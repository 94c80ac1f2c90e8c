"""
Configuration for the tartil library.

Settings are read from environment variables prefixed with ``TARTIL_``
(or a ``.env`` file) and can be overridden programmatically with
:func:`configure`.

Example:
    export TARTIL_AUDIO_ROOT="/data/quran/audio"
    export TARTIL_STOP_DEBOUNCE_SECONDS=0.25
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tartil.exceptions import ConfigurationError


class TartilSettings(BaseSettings):
    """
    Runtime settings for asset storage, downloads and playback timing.

    Attributes:
        audio_root: Root directory holding per-reciter audio folders
        timing_index_url: Remote URL of the verse-timing index database
        timing_index_filename: Local file name of the verse-timing index
        reciters_file: JSON catalogue of reciters
        page_table_file: CSV table of page start verses
        settings_file: JSON file backing the persisted user settings
        stop_debounce_seconds: Delay before trusting a stopped/error notification
        page_change_delay_seconds: Delay after a page change before selecting a verse
        http_timeout_seconds: Total HTTP timeout for a download
        http_connect_timeout_seconds: HTTP connect timeout
        download_chunk_size: Streaming chunk size in bytes
        album_label: Album label attached to every track
        audio_extension: File extension of downloaded audio files
    """

    model_config = SettingsConfigDict(
        env_prefix="TARTIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    audio_root: Path = Field(
        default=Path("data") / "audio",
        description="Root directory holding per-reciter audio folders",
    )
    timing_index_url: str = Field(
        default="https://android.quran.com/data/databases/ayahinfo/ayahinfo_1024.zip",
        description="Remote URL of the verse-timing index database",
    )
    timing_index_filename: str = Field(
        default="ayahinfo.db",
        description="Local file name of the verse-timing index",
    )
    reciters_file: Optional[Path] = Field(
        default=None,
        description="JSON catalogue of reciters",
    )
    page_table_file: Optional[Path] = Field(
        default=None,
        description="CSV table of page start verses",
    )
    settings_file: Path = Field(
        default=Path("data") / "settings.json",
        description="JSON file backing the persisted user settings",
    )
    stop_debounce_seconds: float = Field(
        default=0.5,
        description="Delay before trusting a stopped/error notification",
        ge=0.0,
    )
    page_change_delay_seconds: float = Field(
        default=0.5,
        description="Delay after a page change before selecting a verse",
        ge=0.0,
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        description="Total HTTP timeout for a download",
        gt=0.0,
    )
    http_connect_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP connect timeout",
        gt=0.0,
    )
    download_chunk_size: int = Field(
        default=64 * 1024,
        description="Streaming chunk size in bytes",
        gt=0,
    )
    album_label: str = Field(
        default="Quran",
        description="Album label attached to every track",
    )
    audio_extension: str = Field(
        default="mp3",
        description="File extension of downloaded audio files",
    )

    @property
    def timing_index_path(self) -> Path:
        """Local path of the verse-timing index."""
        return self.audio_root / self.timing_index_filename


_settings: Optional[TartilSettings] = None


def get_settings() -> TartilSettings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = TartilSettings()
    return _settings


def configure(**overrides) -> TartilSettings:
    """
    Override settings programmatically.

    Args:
        **overrides: Field values replacing the current settings

    Returns:
        The new settings instance (also returned by get_settings afterwards)

    Raises:
        ConfigurationError: If an override is invalid
    """
    global _settings
    unknown = set(overrides) - set(TartilSettings.model_fields)
    if unknown:
        raise ConfigurationError("Unknown setting", setting_name=sorted(unknown)[0])

    try:
        _settings = TartilSettings(**{**get_settings().model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e.errors()[0]['msg']}") from e
    return _settings


def reset_settings() -> None:
    """Drop programmatic overrides; the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
