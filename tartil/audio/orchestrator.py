"""
Playback control surface.

AudioOrchestrator is the entry point UI code talks to. It owns the observable
playback state and wires the request builder, download coordinator, track
handoff, state reconciler and repeat controller around an injected engine.

Example:
    orchestrator = AudioOrchestrator(engine, catalog, locator, preferences)
    orchestrator.attach()
    await orchestrator.play_from_ayah(2, 255)
"""

from typing import Optional

from tartil._logging import get_logger
from tartil.audio.availability import AvailabilityChecker
from tartil.audio.downloads import DownloadCoordinator, FileDownloader
from tartil.audio.engine import AudioEngine
from tartil.audio.errors import ErrorPresenter, LoggingErrorPresenter
from tartil.audio.handoff import StreamingHandler, TrackHandoff
from tartil.audio.observable import ObservableValue, ReadingPosition
from tartil.audio.paths import AudioPaths
from tartil.audio.reconciler import PlaybackStateReconciler
from tartil.audio.repeat import RepeatController
from tartil.audio.requests import RequestBuilder
from tartil.config import TartilSettings, get_settings
from tartil.data.locator import VerseLocator
from tartil.data.reciters import ReciterCatalog
from tartil.exceptions import AudioDownloadError
from tartil.models import AudioRequest, AudioState, EngineState, VerseRef
from tartil.storage.settings import AudioPreferences

logger = get_logger("tartil.audio.orchestrator")

DOWNLOAD_ERROR_MESSAGE = "Something went wrong. Unable to download audio."


class AudioOrchestrator:
    """
    Coordinates Quran audio playback.

    Args:
        engine: Native audio engine
        catalog: Reciter catalogue
        locator: Verse/page lookup
        preferences: Persisted audio preferences
        downloader: HTTP downloader (one is created from settings when omitted)
        error_presenter: Receives user-visible error notices
        streaming: Handler for streamed playback
        settings: Package settings
        position: Initial reading position
    """

    def __init__(
        self,
        engine: AudioEngine,
        catalog: ReciterCatalog,
        locator: VerseLocator,
        preferences: AudioPreferences,
        downloader: FileDownloader | None = None,
        error_presenter: ErrorPresenter | None = None,
        streaming: StreamingHandler | None = None,
        settings: TartilSettings | None = None,
        position: ReadingPosition | None = None,
    ):
        settings = settings or get_settings()
        self._engine = engine
        self._locator = locator
        self._preferences = preferences
        self._error_presenter = error_presenter or LoggingErrorPresenter()
        self._position = position or ReadingPosition()
        self._attached = False

        paths = AudioPaths(settings)
        self._downloader = downloader or FileDownloader(settings=settings)
        self._checker = AvailabilityChecker(catalog, locator, paths)
        self._coordinator = DownloadCoordinator(self._checker, self._downloader)
        self._builder = RequestBuilder(catalog, preferences, locator, self._position)
        self._handoff = TrackHandoff(
            engine, self._coordinator, paths=paths, streaming=streaming, settings=settings
        )
        self._reconciler = PlaybackStateReconciler(engine, locator, self._position, settings)
        self._repeat = RepeatController(
            preferences, engine, self._reconciler.audio_player_state, self.play
        )

    # Observable state

    @property
    def audio_player_state(self) -> ObservableValue[AudioState]:
        return self._reconciler.audio_player_state

    @property
    def is_downloading_audio(self) -> ObservableValue[bool]:
        return self._coordinator.is_downloading

    @property
    def audio_download_progress(self) -> ObservableValue[int]:
        return self._coordinator.progress

    @property
    def repeat_audio(self) -> ObservableValue[Optional[bool]]:
        return self._repeat.repeat_audio

    @property
    def current_page(self) -> ObservableValue[int]:
        return self._position.current_page

    @property
    def selected_ayah(self) -> ObservableValue[Optional[VerseRef]]:
        return self._position.selected_ayah

    @property
    def position(self) -> ReadingPosition:
        return self._position

    @property
    def checker(self) -> AvailabilityChecker:
        return self._checker

    @property
    def reconciler(self) -> PlaybackStateReconciler:
        return self._reconciler

    # Lifecycle

    def attach(self) -> None:
        """Start receiving engine state notifications."""
        if not self._attached:
            self._engine.add_state_listener(self._reconciler.notify)
            self._attached = True

    def detach(self) -> None:
        if self._attached:
            self._engine.remove_state_listener(self._reconciler.notify)
            self._attached = False

    async def aclose(self) -> None:
        """Detach from the engine and release pending tasks and HTTP resources."""
        self.detach()
        await self._reconciler.aclose()
        await self._downloader.aclose()

    async def __aenter__(self) -> "AudioOrchestrator":
        self.attach()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # Controls

    async def play(self) -> None:
        """Resume a paused track, or start playing from the current position."""
        if self._engine.state == EngineState.PAUSED:
            self._engine.play()
            return

        request = self._builder.build()
        if request is None:
            return
        if not self._locator.is_valid(request.current_ayah):
            logger.debug(f"Not playing invalid verse {request.current_ayah}")
            return
        await self.play_from_ayah(request.current_ayah.surah, request.current_ayah.ayah)

    async def play_from_ayah(self, surah: int, ayah: int) -> bool:
        """
        Play from an explicit verse.

        Returns:
            True if playback was started
        """
        try:
            verse = VerseRef(surah=surah, ayah=ayah)
        except ValueError as e:
            logger.debug(f"Not playing {surah}:{ayah}: {e}")
            return False

        request = self._builder.build(verse)
        if request is None:
            return False
        if self._preferences.prefer_streaming:
            return await self._handoff.play_streaming(request)
        return await self.download_and_play(request)

    async def download_and_play(self, request: Optional[AudioRequest]) -> bool:
        """
        Download what a request needs, then play it.

        Returns False without side effects when there is no request or a
        download is already running.
        """
        if request is None or self._coordinator.is_downloading.value:
            return False

        try:
            track = await self._handoff.resolve(request)
        except AudioDownloadError as e:
            logger.warning(f"Playback aborted: {e}")
            self._error_presenter.show_error(DOWNLOAD_ERROR_MESSAGE)
            return False

        self._handoff.start(track)
        return True

    def pause(self) -> None:
        self._engine.pause()

    def stop(self) -> None:
        self._engine.stop()

    async def next_track(self) -> None:
        await self._move_selection(forward=True)

    async def previous_track(self) -> None:
        await self._move_selection(forward=False)

    async def _move_selection(self, forward: bool) -> None:
        current = self._builder.resolve_start_verse()
        if current is None:
            return
        if forward:
            target = self._locator.get_next_ayah(current)
        else:
            target = self._locator.get_previous_ayah(current)

        self._position.current_page.value = self._locator.get_page_from_ayah(target)
        self._position.selected_ayah.value = target

        if self.audio_player_state.value == AudioState.PLAYING:
            self._engine.stop()
            await self.play()

    async def set_repeat(self, value: Optional[bool]) -> None:
        await self._repeat.set_repeat(value)

    async def reset_repeat_state(self) -> None:
        await self._repeat.reset_repeat_state()
