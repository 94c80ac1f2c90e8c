"""
ترتيل (Tartil): Quran recitation playback core.

Usage:
    from tartil.audio import AudioOrchestrator
    from tartil.data import load_catalog, load_locator
    from tartil.storage import AudioPreferences, JsonSettingsStore

    preferences = AudioPreferences(JsonSettingsStore("settings.json"))
    orchestrator = AudioOrchestrator(engine, load_catalog(), load_locator(), preferences)
    orchestrator.attach()

    # Downloads what verse 2:255 needs, then hands the track to the engine
    await orchestrator.play_from_ayah(2, 255)
"""

from tartil.models import (
    AssetStatus,
    AudioDownloadAmount,
    AudioRequest,
    AudioState,
    EngineState,
    Reciter,
    RepeatAmount,
    RepeatInfo,
    TrackDescriptor,
    VerseRef,
)
from tartil.config import TartilSettings, get_settings, configure
from tartil.exceptions import (
    TartilError,
    ConfigurationError,
    QuranDataError,
    ReciterNotFoundError,
    InvalidAudioRequestError,
    AudioDownloadError,
)

__version__ = "0.1.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "VerseRef",
    "RepeatAmount",
    "RepeatInfo",
    "AudioDownloadAmount",
    "AudioRequest",
    "Reciter",
    "AudioState",
    "EngineState",
    "TrackDescriptor",
    "AssetStatus",
    # Config
    "TartilSettings",
    "get_settings",
    "configure",
    # Exceptions
    "TartilError",
    "ConfigurationError",
    "QuranDataError",
    "ReciterNotFoundError",
    "InvalidAudioRequestError",
    "AudioDownloadError",
]
