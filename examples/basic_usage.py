"""
Basic usage example for the tartil library.

This example demonstrates the core workflow:
1. Load the reciter catalogue and page table
2. Wire an AudioOrchestrator around an audio engine
3. Play from a verse and follow the playback state

Set TARTIL_RECITERS_FILE and TARTIL_PAGE_TABLE_FILE before running.
"""

import asyncio
from typing import Optional

from tartil._logging import configure_logging
from tartil.audio import AudioEngine, AudioOrchestrator
from tartil.config import get_settings
from tartil.data import load_catalog, load_locator
from tartil.models import EngineState, TrackDescriptor
from tartil.storage import AudioPreferences, JsonSettingsStore


class PrintingEngine(AudioEngine):
    """Stand-in engine that prints instead of playing audio."""

    def __init__(self):
        super().__init__()
        self._state = EngineState.STOPPED
        self._position = 0.0
        self._track: Optional[TrackDescriptor] = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def position(self) -> float:
        return self._position

    @position.setter
    def position(self, seconds: float) -> None:
        self._position = seconds

    def _set_state(self, state: EngineState) -> None:
        self._state = state
        self.notify_state_changed()

    def play(self) -> None:
        print(f"   ▶ {self._track}")
        self._set_state(EngineState.PLAYING)

    def pause(self) -> None:
        self._set_state(EngineState.PAUSED)

    def stop(self) -> None:
        self._set_state(EngineState.STOPPED)

    def get_track(self) -> Optional[TrackDescriptor]:
        return self._track

    def set_track(self, track: TrackDescriptor) -> None:
        self._track = track


async def play_verse(surah: int, ayah: int, reciter: str):
    """
    Play a verse with the given reciter.

    Args:
        surah: Surah number (1-114)
        ayah: Verse number
        reciter: Reciter display name from the catalogue
    """
    settings = get_settings()
    preferences = AudioPreferences(JsonSettingsStore(settings.settings_file))
    preferences.active_reciter = reciter

    engine = PrintingEngine()
    orchestrator = AudioOrchestrator(engine, load_catalog(), load_locator(), preferences)

    orchestrator.audio_player_state.subscribe(lambda old, new: print(f"   state: {new.value}"))
    orchestrator.audio_download_progress.subscribe(lambda old, new: print(f"   download: {new}%"))
    orchestrator.selected_ayah.subscribe(lambda old, new: print(f"   selected: {new}"))

    async with orchestrator:
        print(f"Playing {surah}:{ayah} ({reciter})")
        print("=" * 50)
        if not await orchestrator.play_from_ayah(surah, ayah):
            print("   Nothing to play")
            return

        # Let the reconciler follow the engine
        await asyncio.sleep(get_settings().page_change_delay_seconds + 0.1)

        print("\n⏭  Next verse")
        await orchestrator.next_track()
        await asyncio.sleep(0.1)

        orchestrator.stop()
        await asyncio.sleep(get_settings().stop_debounce_seconds + 0.1)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(play_verse(18, 10, "Minshawi Murattal"))
