"""
Track handoff.

Turns a satisfied audio request into a track descriptor and hands it to the
audio engine.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from tartil._logging import log_playback_handoff, log_warning
from tartil.audio.downloads import DownloadCoordinator
from tartil.audio.engine import AudioEngine
from tartil.audio.paths import BISMILLAH_AYAH, AudioPaths
from tartil.config import TartilSettings, get_settings
from tartil.data.quran import get_surah_ayah_string
from tartil.exceptions import AudioDownloadError
from tartil.models import AudioRequest, Reciter, TrackDescriptor, VerseRef

BISMILLAH_TITLE = "Bismillah"


class StreamingHandler(ABC):
    """
    Plays a request by streaming instead of downloading it first.

    Extension point: the download-first path is the only one implemented by
    this package.
    """

    @abstractmethod
    async def play(self, request: AudioRequest) -> bool:
        """Start streamed playback; True if playback started."""
        pass


class NullStreamingHandler(StreamingHandler):
    """Default handler: streaming is unavailable, nothing is played."""

    async def play(self, request: AudioRequest) -> bool:
        log_warning("Streaming playback is not available", request=request.to_string())
        return False


class TrackHandoff:
    """
    Resolves requests to tracks and starts them on the engine.

    Args:
        engine: Audio engine receiving tracks
        coordinator: Download coordinator satisfying requests
        paths: Asset location resolver
        streaming: Handler used when streaming is preferred
        settings: Settings providing the album label
    """

    def __init__(
        self,
        engine: AudioEngine,
        coordinator: DownloadCoordinator,
        paths: AudioPaths | None = None,
        streaming: StreamingHandler | None = None,
        settings: TartilSettings | None = None,
    ):
        self._engine = engine
        self._coordinator = coordinator
        self._paths = paths or coordinator.checker.paths
        self._streaming = streaming or NullStreamingHandler()
        self._settings = settings or get_settings()

    async def resolve(self, request: AudioRequest) -> TrackDescriptor:
        """
        Download what a request needs and describe its first track.

        Raises:
            AudioDownloadError: If the assets could not be downloaded
        """
        if not await self._coordinator.download(request):
            raise AudioDownloadError(context={"request": request.to_string()})
        reciter = self._coordinator.checker.reciter_for(request)
        return self.build_track(request, reciter)

    def track_path(self, request: AudioRequest, reciter: Reciter) -> Path:
        """
        Local file playback starts from.

        The invocation plays from the first verse of the Quran for per-verse
        reciters, and from the surah file for gapless ones.
        """
        verse = request.current_ayah
        if verse.is_invocation:
            verse = verse.with_ayah(1) if reciter.is_gapless else BISMILLAH_AYAH
        return self._paths.local_path_for_ayah(verse, reciter)

    @staticmethod
    def track_title(verse: VerseRef) -> str:
        if verse.is_invocation:
            return BISMILLAH_TITLE
        return get_surah_ayah_string(verse)

    def build_track(self, request: AudioRequest, reciter: Reciter) -> TrackDescriptor:
        return TrackDescriptor(
            path=self.track_path(request, reciter),
            title=self.track_title(request.current_ayah),
            artist=reciter.name,
            album=self._settings.album_label,
            artwork=None,
            tag=request.to_string(),
        )

    def start(self, track: TrackDescriptor) -> None:
        """Set the track on the engine and start playback."""
        log_playback_handoff(str(track.path), track.title, track.tag or "")
        self._engine.set_track(track)
        self._engine.play()

    async def play_streaming(self, request: AudioRequest) -> bool:
        return await self._streaming.play(request)
