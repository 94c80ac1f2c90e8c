from __future__ import annotations

import asyncio

import pytest

from conftest import CDN

from tartil.audio.downloads import FileDownloader
from tartil.audio.orchestrator import DOWNLOAD_ERROR_MESSAGE, AudioOrchestrator
from tartil.models import AudioRequest, AudioState, EngineState, VerseRef

pytestmark = pytest.mark.anyio


def v(surah: int, ayah: int) -> VerseRef:
    return VerseRef(surah=surah, ayah=ayah)


def serve_verses(server, settings, *verses: VerseRef) -> None:
    server.add(settings.timing_index_url)
    for verse in verses:
        server.add(f"{CDN}/minshawi/{verse.surah:03d}{verse.ayah:03d}.mp3")


@pytest.fixture
async def orchestrator(
    anyio_backend, engine, catalog, locator, preferences, presenter, settings, server
):
    orchestrator = AudioOrchestrator(
        engine,
        catalog,
        locator,
        preferences,
        downloader=FileDownloader(client=server.client(), settings=settings),
        error_presenter=presenter,
        settings=settings,
    )
    yield orchestrator
    await orchestrator.aclose()


async def test_play_from_ayah_downloads_then_plays(orchestrator, engine, server, settings) -> None:
    serve_verses(server, settings, *(v(1, ayah) for ayah in range(1, 8)))

    assert await orchestrator.play_from_ayah(1, 1)

    assert engine.calls == ["set_track", "play"]
    track = engine.get_track()
    assert track.title == "الفاتحة 1:1"
    assert track.artist == "Minshawi Murattal"
    assert track.album == "Quran"
    assert track.path == settings.audio_root / "minshawi" / "001" / "001.mp3"
    assert track.path.exists()
    assert AudioRequest.from_string(track.tag).current_ayah == v(1, 1)
    assert orchestrator.audio_download_progress.value == 100
    assert not orchestrator.is_downloading_audio.value


async def test_invocation_plays_opening_verse(orchestrator, engine, server, settings) -> None:
    serve_verses(server, settings, v(1, 1), *(v(2, ayah) for ayah in range(1, 6)))

    assert await orchestrator.play_from_ayah(2, 0)

    track = engine.get_track()
    assert track.title == "Bismillah"
    assert track.path == settings.audio_root / "minshawi" / "001" / "001.mp3"


async def test_download_failure_is_reported_once(orchestrator, engine, presenter, server, settings) -> None:
    serve_verses(server, settings, v(1, 1), v(1, 2))

    assert not await orchestrator.play_from_ayah(1, 1)

    assert presenter.messages == [DOWNLOAD_ERROR_MESSAGE]
    assert engine.calls == []
    assert not orchestrator.is_downloading_audio.value


async def test_request_refused_while_downloading(orchestrator, engine, presenter, server) -> None:
    orchestrator.is_downloading_audio.value = True
    progress = orchestrator.audio_download_progress.value
    request = AudioRequest(reciter_id=0, current_ayah=v(1, 1))

    assert not await orchestrator.download_and_play(request)
    assert not await orchestrator.download_and_play(None)

    assert server.requests == []
    assert engine.calls == []
    assert presenter.messages == []
    assert orchestrator.is_downloading_audio.value
    assert orchestrator.audio_download_progress.value == progress


async def test_play_resumes_paused_engine(orchestrator, engine, server) -> None:
    engine.pause()
    engine.calls.clear()

    await orchestrator.play()

    assert engine.calls == ["play"]
    assert server.requests == []


async def test_play_starts_from_current_page(orchestrator, engine, server, settings) -> None:
    serve_verses(server, settings, v(1, 1), *(v(2, ayah) for ayah in range(1, 6)))
    orchestrator.current_page.value = 2

    await orchestrator.play()

    assert AudioRequest.from_string(engine.get_track().tag).current_ayah == v(2, 0)


async def test_play_ignores_invalid_selection(orchestrator, engine, server) -> None:
    orchestrator.selected_ayah.value = v(1, 8)

    await orchestrator.play()

    assert server.requests == []
    assert engine.calls == []


async def test_play_without_reciter_does_nothing(orchestrator, engine, preferences, server) -> None:
    preferences.active_reciter = None

    await orchestrator.play()
    assert not await orchestrator.play_from_ayah(2, 255)

    assert server.requests == []
    assert engine.calls == []


async def test_next_track_while_paused_only_moves_selection(orchestrator, engine, server) -> None:
    orchestrator.audio_player_state.value = AudioState.PAUSED
    orchestrator.selected_ayah.value = v(1, 7)

    await orchestrator.next_track()

    assert orchestrator.selected_ayah.value == v(2, 1)
    assert orchestrator.current_page.value == 2
    assert engine.calls == []
    assert server.requests == []

    await orchestrator.next_track()
    assert orchestrator.selected_ayah.value == v(2, 2)


async def test_previous_track_does_not_wrap(orchestrator) -> None:
    orchestrator.selected_ayah.value = v(1, 1)

    await orchestrator.previous_track()

    assert orchestrator.selected_ayah.value == v(1, 1)


async def test_next_track_while_playing_restarts(orchestrator, engine, server, settings) -> None:
    serve_verses(server, settings, v(2, 5))
    orchestrator.audio_player_state.value = AudioState.PLAYING
    orchestrator.selected_ayah.value = v(2, 4)

    await orchestrator.next_track()

    assert engine.calls == ["stop", "set_track", "play"]
    assert engine.get_track().title == "البقرة 2:5"


async def test_streaming_preference_skips_download(orchestrator, engine, preferences, server) -> None:
    preferences.prefer_streaming = True

    assert not await orchestrator.play_from_ayah(1, 1)

    assert server.requests == []
    assert engine.calls == []


async def test_pause_and_stop_pass_through(orchestrator, engine) -> None:
    orchestrator.pause()
    orchestrator.stop()

    assert engine.calls == ["pause", "stop"]
    assert orchestrator.audio_player_state.value == AudioState.STOPPED


async def test_attach_routes_engine_notifications(orchestrator, engine) -> None:
    orchestrator.attach()
    orchestrator.attach()
    engine.emit(EngineState.PAUSED)
    await asyncio.sleep(0.01)
    assert orchestrator.audio_player_state.value == AudioState.PAUSED

    orchestrator.detach()
    engine.emit(EngineState.PLAYING)
    await asyncio.sleep(0.01)
    assert orchestrator.audio_player_state.value == AudioState.PAUSED


async def test_repeat_toggle_is_persisted(orchestrator, preferences) -> None:
    await orchestrator.set_repeat(True)

    assert orchestrator.repeat_audio.value is True
    assert preferences.repeat_enabled is True
