"""
Repeat toggle.
"""

from typing import Awaitable, Callable, Optional

from tartil._logging import get_logger
from tartil.audio.engine import AudioEngine
from tartil.audio.observable import ObservableValue
from tartil.models import AudioState
from tartil.storage.settings import AudioPreferences

logger = get_logger("tartil.audio.repeat")

PlayCallback = Callable[[], Awaitable[None]]


class RepeatController:
    """
    Owns the tri-state repeat flag and restarts playback when it changes.

    The flag is ``None`` until a value is known. Since repeat settings are
    baked into the playing request, a change only takes effect by restarting
    the current track at the same offset.

    Args:
        preferences: Persisted audio preferences
        engine: Audio engine to restart
        audio_state: Observable application playback state
        play: Coroutine function that starts playback from the current position
    """

    def __init__(
        self,
        preferences: AudioPreferences,
        engine: AudioEngine,
        audio_state: ObservableValue[AudioState],
        play: PlayCallback,
    ):
        self._preferences = preferences
        self._engine = engine
        self._audio_state = audio_state
        self._play = play
        self.repeat_audio: ObservableValue[Optional[bool]] = ObservableValue(
            preferences.repeat_preference, "repeat_audio"
        )

    async def set_repeat(self, value: Optional[bool]) -> None:
        if value == self.repeat_audio.value:
            return
        if value is not None:
            self._preferences.repeat_enabled = value
        self.repeat_audio.value = value
        await self.reset_repeat_state()

    async def reset_repeat_state(self) -> None:
        """Restart the playing track so it picks up the current repeat settings."""
        if self._audio_state.value != AudioState.PLAYING:
            return

        position = self._engine.position
        logger.debug(f"Restarting playback at {position:.2f}s for repeat change")
        self._engine.stop()
        await self._play()
        self._engine.position = position
