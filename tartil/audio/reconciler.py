"""
Playback state reconciliation.

Maps the audio engine's state-change notifications onto the application's
AudioState and keeps the reading position in step with the playing track.

Engines emit short stopped/error pulses between tracks, so a stopped-like
notification is only trusted after a confirmation delay: a pending stop is
scheduled, and committed only if the engine still reports a stopped-like
state when the delay ends. Any newer notification replaces the pending stop.
"""

import asyncio
from typing import Optional

from tartil._logging import get_logger, log_state_transition
from tartil.audio.engine import AudioEngine
from tartil.audio.observable import ObservableValue, ReadingPosition
from tartil.audio.paths import normalize_start
from tartil.config import TartilSettings, get_settings
from tartil.data.locator import VerseLocator
from tartil.exceptions import InvalidAudioRequestError
from tartil.models import AudioRequest, AudioState, EngineState

logger = get_logger("tartil.audio.reconciler")


class PlaybackStateReconciler:
    """
    State machine driven by engine notifications.

    States cycle between STOPPED, PLAYING and PAUSED for the lifetime of the
    session.

    Args:
        engine: Audio engine whose state is observed
        locator: Verse/page lookup for the playing verse
        position: Reading position updated from the playing track
        settings: Settings providing the confirmation delays
    """

    def __init__(
        self,
        engine: AudioEngine,
        locator: VerseLocator,
        position: ReadingPosition,
        settings: TartilSettings | None = None,
    ):
        settings = settings or get_settings()
        self._engine = engine
        self._locator = locator
        self._position = position
        self._stop_debounce = settings.stop_debounce_seconds
        self._page_change_delay = settings.page_change_delay_seconds
        self._pending_stop: Optional[asyncio.Task] = None
        self._tasks: set[asyncio.Task] = set()
        self.audio_player_state: ObservableValue[AudioState] = ObservableValue(
            AudioState.STOPPED, "audio_player_state"
        )
        self.audio_player_state.subscribe(log_state_transition)

    @property
    def has_pending_stop(self) -> bool:
        return self._pending_stop is not None and not self._pending_stop.done()

    def notify(self) -> None:
        """
        Engine listener: schedule handling of a state change.

        Must be called from the event loop thread.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("State change received outside the event loop, ignoring")
            return
        task = loop.create_task(self.on_state_changed())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def on_state_changed(self) -> None:
        """Handle one state-change notification."""
        state = self._engine.state

        if state.is_stopped_like:
            pending = self._schedule_stop_confirmation()
            await asyncio.wait({pending})
            return

        self._cancel_pending_stop()
        if state == EngineState.PAUSED:
            self.audio_player_state.value = AudioState.PAUSED
        elif state == EngineState.PLAYING:
            self.audio_player_state.value = AudioState.PLAYING
            await self._follow_playing_track()

    def _schedule_stop_confirmation(self) -> asyncio.Task:
        self._cancel_pending_stop()
        self._pending_stop = asyncio.get_running_loop().create_task(self._confirm_stop())
        return self._pending_stop

    def _cancel_pending_stop(self) -> None:
        if self._pending_stop is not None and not self._pending_stop.done():
            self._pending_stop.cancel()
        self._pending_stop = None

    async def _confirm_stop(self) -> None:
        await asyncio.sleep(self._stop_debounce)
        state = self._engine.state
        if state.is_stopped_like:
            self.audio_player_state.value = AudioState.STOPPED
        elif state == EngineState.PAUSED:
            self.audio_player_state.value = AudioState.PAUSED
        else:
            logger.debug(f"Transient stop, engine reports {state.value}")
            self.audio_player_state.value = AudioState.PLAYING

    async def _follow_playing_track(self) -> None:
        track = self._engine.get_track()
        if track is None or not track.tag:
            return

        try:
            request = AudioRequest.from_string(track.tag)
            page = self._locator.get_page_from_ayah(request.current_ayah)
        except (InvalidAudioRequestError, ValueError) as e:
            # Foreign or damaged tag; playback itself is unaffected
            logger.debug(f"Ignoring track metadata: {e}")
            return

        old_page = self._position.current_page.value
        self._position.current_page.value = page
        if old_page != page:
            await asyncio.sleep(self._page_change_delay)

        self._position.selected_ayah.value = normalize_start(request.current_ayah)

    async def aclose(self) -> None:
        """Cancel pending confirmations and in-flight notification handlers."""
        self._cancel_pending_stop()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)
