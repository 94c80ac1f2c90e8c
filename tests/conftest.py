from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx
import pytest

from tartil.audio.engine import AudioEngine
from tartil.audio.errors import ErrorPresenter
from tartil.config import TartilSettings
from tartil.data.locator import QuranLocator
from tartil.data.reciters import ReciterCatalog
from tartil.models import EngineState, Reciter, TrackDescriptor, VerseRef
from tartil.storage.settings import AudioPreferences, MemorySettingsStore

# Start of each page in a shortened mushaf: 1:1 | 2:1 | 2:6 | 2:17 | 2:25 | 3:1 | 4:1 | 114:1
PAGE_STARTS = [
    VerseRef(surah=1, ayah=1),
    VerseRef(surah=2, ayah=1),
    VerseRef(surah=2, ayah=6),
    VerseRef(surah=2, ayah=17),
    VerseRef(surah=2, ayah=25),
    VerseRef(surah=3, ayah=1),
    VerseRef(surah=4, ayah=1),
    VerseRef(surah=114, ayah=1),
]

CDN = "https://cdn.test"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeEngine(AudioEngine):
    """Records calls; state changes are announced explicitly through ``emit``."""

    def __init__(self) -> None:
        super().__init__()
        self._state = EngineState.STOPPED
        self._position = 0.0
        self._track: Optional[TrackDescriptor] = None
        self.calls: list[str] = []

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def position(self) -> float:
        return self._position

    @position.setter
    def position(self, seconds: float) -> None:
        self.calls.append(f"seek:{seconds}")
        self._position = seconds

    def play(self) -> None:
        self.calls.append("play")
        self._state = EngineState.PLAYING

    def pause(self) -> None:
        self.calls.append("pause")
        self._state = EngineState.PAUSED

    def stop(self) -> None:
        self.calls.append("stop")
        self._state = EngineState.STOPPED
        self._position = 0.0

    def get_track(self) -> Optional[TrackDescriptor]:
        return self._track

    def set_track(self, track: TrackDescriptor) -> None:
        self.calls.append("set_track")
        self._track = track

    def emit(self, state: EngineState) -> None:
        self._state = state
        self.notify_state_changed()


class RecordingPresenter(ErrorPresenter):
    def __init__(self) -> None:
        self.messages: list[str] = []

    def show_error(self, message: str) -> None:
        self.messages.append(message)


class FakeServer:
    """httpx MockTransport handler serving a fixed set of URLs."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.requests: list[str] = []

    def add(self, url: str, content: bytes = b"audio-bytes") -> None:
        self.files[url] = content

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url not in self.files:
            return httpx.Response(404)
        return httpx.Response(200, content=self.files[url])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def settings(tmp_path: Path) -> TartilSettings:
    return TartilSettings(
        audio_root=tmp_path / "audio",
        timing_index_url=f"{CDN}/ayahinfo.db",
        settings_file=tmp_path / "settings.json",
        stop_debounce_seconds=0.05,
        page_change_delay_seconds=0.01,
    )


@pytest.fixture
def locator() -> QuranLocator:
    return QuranLocator(PAGE_STARTS)


@pytest.fixture
def verse_reciter() -> Reciter:
    return Reciter(
        id=0,
        name="Minshawi Murattal",
        local_path="minshawi",
        server_url=f"{CDN}/minshawi",
    )


@pytest.fixture
def gapless_reciter() -> Reciter:
    return Reciter(
        id=1,
        name="Husary Gapless",
        local_path="husary",
        server_url=f"{CDN}/husary",
        gapless_database_url=f"{CDN}/husary/husary.db",
        is_gapless=True,
    )


@pytest.fixture
def catalog(verse_reciter: Reciter, gapless_reciter: Reciter) -> ReciterCatalog:
    return ReciterCatalog([verse_reciter, gapless_reciter])


@pytest.fixture
def preferences(verse_reciter: Reciter) -> AudioPreferences:
    prefs = AudioPreferences(MemorySettingsStore())
    prefs.active_reciter = verse_reciter.name
    return prefs


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


def touch(path: Path, content: bytes = b"x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path
