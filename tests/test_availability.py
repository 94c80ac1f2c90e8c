from __future__ import annotations

import pytest

from conftest import touch

from tartil.audio.availability import AvailabilityChecker, is_complete_file
from tartil.audio.paths import AudioPaths, get_download_range
from tartil.models import (
    AudioDownloadAmount,
    AudioRequest,
    RepeatAmount,
    RepeatInfo,
    VerseRef,
)


def v(surah: int, ayah: int) -> VerseRef:
    return VerseRef(surah=surah, ayah=ayah)


def request_for(reciter, verse, amount=AudioDownloadAmount.PAGE, repeat=None) -> AudioRequest:
    return AudioRequest(
        reciter_id=reciter.id,
        current_ayah=verse,
        repeat=repeat or RepeatInfo(),
        download_amount=amount,
    )


@pytest.fixture
def paths(settings) -> AudioPaths:
    return AudioPaths(settings)


@pytest.fixture
def checker(catalog, locator, paths) -> AvailabilityChecker:
    return AvailabilityChecker(catalog, locator, paths)


def test_file_layout(paths, settings, verse_reciter, gapless_reciter) -> None:
    root = settings.audio_root
    assert paths.local_path_for_ayah(v(2, 5), verse_reciter) == root / "minshawi" / "002" / "005.mp3"
    assert paths.remote_url_for_ayah(v(2, 5), verse_reciter) == "https://cdn.test/minshawi/002005.mp3"
    assert paths.local_path_for_ayah(v(2, 5), gapless_reciter) == root / "husary" / "002.mp3"
    assert paths.remote_url_for_ayah(v(2, 5), gapless_reciter) == "https://cdn.test/husary/002.mp3"
    assert paths.gapless_database_path(gapless_reciter) == root / "husary" / "husary.db"
    assert paths.gapless_database_path(verse_reciter) is None


def test_range_covers_page(locator, verse_reciter) -> None:
    download_range = get_download_range(request_for(verse_reciter, v(2, 0)), locator)
    assert (download_range.from_ayah, download_range.to_ayah) == (v(2, 1), v(2, 5))


def test_range_widened_by_repeat(locator, verse_reciter) -> None:
    repeat = RepeatInfo(repeat_amount=RepeatAmount.FIVE_AYAH, repeat_count=2)
    download_range = get_download_range(request_for(verse_reciter, v(2, 3), repeat=repeat), locator)
    assert download_range.to_ayah == v(2, 7)


def test_range_not_narrowed_by_repeat(locator, verse_reciter) -> None:
    repeat = RepeatInfo(repeat_amount=RepeatAmount.ONE_AYAH, repeat_count=2)
    download_range = get_download_range(
        request_for(verse_reciter, v(2, 3), AudioDownloadAmount.SURAH, repeat), locator
    )
    assert download_range.to_ayah == v(2, 286)


def test_verse_files_include_invocation(checker, settings, verse_reciter) -> None:
    files = checker.required_files(request_for(verse_reciter, v(2, 0)))
    root = settings.audio_root / "minshawi"
    assert [f.path for f in files] == [
        root / "001" / "001.mp3",
        root / "002" / "001.mp3",
        root / "002" / "002.mp3",
        root / "002" / "003.mp3",
        root / "002" / "004.mp3",
        root / "002" / "005.mp3",
    ]


def test_fatiha_has_no_separate_invocation(checker, verse_reciter) -> None:
    files = checker.required_files(request_for(verse_reciter, v(1, 1)))
    assert len(files) == 7
    assert files[0].url.endswith("/001001.mp3")


def test_gapless_needs_surah_files(checker, gapless_reciter) -> None:
    request = request_for(gapless_reciter, v(2, 6))
    assert [f.url for f in checker.required_files(request)] == ["https://cdn.test/husary/002.mp3"]


def test_gapless_database_only_when_seeking(checker, gapless_reciter) -> None:
    assert checker.should_download_gapless_database(request_for(gapless_reciter, v(2, 6)))
    assert not checker.should_download_gapless_database(
        request_for(gapless_reciter, v(1, 1), AudioDownloadAmount.SURAH)
    )
    repeat = RepeatInfo(repeat_amount=RepeatAmount.SURAH, repeat_count=1)
    assert checker.should_download_gapless_database(
        request_for(gapless_reciter, v(1, 1), AudioDownloadAmount.SURAH, repeat)
    )


def test_gapless_database_not_refetched(checker, paths, gapless_reciter) -> None:
    touch(paths.gapless_database_path(gapless_reciter))
    assert not checker.should_download_gapless_database(request_for(gapless_reciter, v(2, 6)))


def test_check_reports_flags(checker, paths, verse_reciter) -> None:
    request = request_for(verse_reciter, v(1, 1))

    status = checker.check(request)
    assert not status.has_timing_index
    assert status.has_gapless_database
    assert not status.has_all_files
    assert len(status.missing_files) == 7

    touch(paths.timing_index_path)
    for audio_file in checker.required_files(request):
        touch(audio_file.path)

    status = checker.check(request)
    assert status.is_complete
    assert status.missing_files == []


def test_empty_file_is_incomplete(tmp_path) -> None:
    empty = touch(tmp_path / "empty.mp3", b"")
    assert not is_complete_file(empty)
    assert not is_complete_file(tmp_path / "missing.mp3")
    assert not is_complete_file(tmp_path)
    assert is_complete_file(touch(tmp_path / "full.mp3"))
