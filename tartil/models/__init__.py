"""
Pydantic data models for the tartil library.

These models represent the core data structures used throughout the library:
- VerseRef: A reference to a single verse (ayah 0 = invocation)
- RepeatInfo / RepeatAmount: Repeat policy
- AudioRequest / AudioDownloadAmount: A serializable play intent
- Reciter: Reciter reference data
- AudioState / EngineState: Application and engine playback states
- TrackDescriptor: A playable track handed to the audio engine
- DownloadRange / AssetStatus: Download planning results
"""

from tartil.models.verse import INVOCATION_AYAH, VerseRef
from tartil.models.repeat import INFINITE_REPEAT, RepeatAmount, RepeatInfo
from tartil.models.request import AudioDownloadAmount, AudioRequest
from tartil.models.reciter import Reciter
from tartil.models.playback import (
    AssetStatus,
    AudioState,
    DownloadRange,
    EngineState,
    TrackDescriptor,
)

__all__ = [
    "INVOCATION_AYAH",
    "VerseRef",
    "INFINITE_REPEAT",
    "RepeatAmount",
    "RepeatInfo",
    "AudioDownloadAmount",
    "AudioRequest",
    "Reciter",
    "AssetStatus",
    "AudioState",
    "DownloadRange",
    "EngineState",
    "TrackDescriptor",
]
