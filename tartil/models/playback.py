"""
Playback state and track data models.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from tartil.models.verse import VerseRef


class AudioState(str, Enum):
    """Playback state as seen by the rest of the application."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class EngineState(str, Enum):
    """Playback state as reported by the native audio engine."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"
    UNKNOWN = "unknown"
    ERROR = "error"

    @property
    def is_stopped_like(self) -> bool:
        """Whether this state may mean playback has ended."""
        return self in (EngineState.STOPPED, EngineState.UNKNOWN, EngineState.ERROR)


class TrackDescriptor(BaseModel):
    """
    A resolved, playable track handed to the audio engine.

    Attributes:
        path: Local audio file
        title: Human-readable title
        artist: Reciter display name
        album: Collection label
        artwork: Optional artwork location
        tag: Opaque metadata (serialized AudioRequest)
    """

    path: Path = Field(..., description="Local audio file")
    title: str = Field(..., description="Human-readable title")
    artist: str = Field(..., description="Reciter display name")
    album: str = Field(..., description="Collection label")
    artwork: Optional[str] = Field(default=None, description="Optional artwork location")
    tag: Optional[str] = Field(default=None, description="Opaque metadata (serialized AudioRequest)")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"TrackDescriptor({self.title!r}, {self.path})"


class DownloadRange(BaseModel):
    """Inclusive span of verses whose audio a request needs locally."""

    from_ayah: VerseRef = Field(..., description="First verse (inclusive)")
    to_ayah: VerseRef = Field(..., description="Last verse (inclusive)")

    model_config = {"frozen": True}

    @property
    def surahs(self) -> range:
        """Surah numbers spanned by this range."""
        return range(self.from_ayah.surah, self.to_ayah.surah + 1)

    def __str__(self) -> str:
        return f"{self.from_ayah}-{self.to_ayah}"


class AssetStatus(BaseModel):
    """
    Which assets a request already has locally.

    Attributes:
        has_timing_index: Verse-timing index present
        has_gapless_database: Gapless database present (always True for per-verse reciters)
        has_all_files: Every required audio file present
        missing_files: Audio files still to fetch
    """

    has_timing_index: bool = Field(..., description="Verse-timing index present")
    has_gapless_database: bool = Field(..., description="Gapless database present")
    has_all_files: bool = Field(..., description="Every required audio file present")
    missing_files: list[Path] = Field(default_factory=list, description="Audio files still to fetch")

    @property
    def is_complete(self) -> bool:
        """Whether nothing needs downloading."""
        return self.has_timing_index and self.has_gapless_database and self.has_all_files
