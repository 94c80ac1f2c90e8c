from __future__ import annotations

import pytest

from tartil.audio.observable import ReadingPosition
from tartil.audio.requests import RequestBuilder, normalize_invocation
from tartil.data.quran import TOTAL_SURAHS
from tartil.models import AudioDownloadAmount, RepeatAmount, RepeatInfo, VerseRef


def v(surah: int, ayah: int) -> VerseRef:
    return VerseRef(surah=surah, ayah=ayah)


@pytest.mark.parametrize("surah", range(1, TOTAL_SURAHS + 1))
def test_first_verse_starts_at_invocation(surah: int) -> None:
    normalized = normalize_invocation(v(surah, 1))
    if surah in (1, 9):
        assert normalized == v(surah, 1)
    else:
        assert normalized == v(surah, 0)


def test_other_verses_are_untouched() -> None:
    assert normalize_invocation(v(2, 2)) == v(2, 2)
    assert normalize_invocation(v(2, 0)) == v(2, 0)


@pytest.fixture
def position() -> ReadingPosition:
    return ReadingPosition(page=1)


@pytest.fixture
def builder(catalog, preferences, locator, position) -> RequestBuilder:
    return RequestBuilder(catalog, preferences, locator, position)


def test_no_reciter_builds_nothing(builder, preferences) -> None:
    preferences.active_reciter = None
    assert builder.build(v(2, 255)) is None

    preferences.active_reciter = "Nobody"
    assert builder.build(v(2, 255)) is None


def test_explicit_verse_is_used_as_is(builder) -> None:
    request = builder.build(v(2, 1))
    assert request is not None
    assert request.reciter_id == 0
    assert request.current_ayah == v(2, 1)
    assert request.current_repeat == 0
    assert request.repeat == RepeatInfo()
    assert request.download_amount == AudioDownloadAmount.PAGE


def test_selection_wins_over_page(builder, position) -> None:
    position.current_page.value = 3
    position.selected_ayah.value = v(2, 10)
    assert builder.build().current_ayah == v(2, 10)


def test_page_start_is_normalized(builder, position) -> None:
    position.current_page.value = 2
    assert builder.build().current_ayah == v(2, 0)

    position.current_page.value = 1
    assert builder.build().current_ayah == v(1, 1)


def test_selected_first_verse_is_kept(builder, position) -> None:
    position.current_page.value = 2
    position.selected_ayah.value = v(2, 1)
    assert builder.build().current_ayah == v(2, 1)


def test_unknown_page_builds_nothing(builder, position) -> None:
    position.current_page.value = 99
    assert builder.build() is None


def test_preferences_snapshot(builder, preferences, gapless_reciter) -> None:
    preferences.active_reciter = gapless_reciter.name
    preferences.repeat_enabled = True
    preferences.repeat_amount = RepeatAmount.FIVE_AYAH
    preferences.repeat_times = 3
    preferences.download_amount = AudioDownloadAmount.JUZ

    request = builder.build(v(18, 10))

    assert request.reciter_id == gapless_reciter.id
    assert request.repeat == RepeatInfo(repeat_amount=RepeatAmount.FIVE_AYAH, repeat_count=3)
    assert request.download_amount == AudioDownloadAmount.JUZ

    preferences.repeat_enabled = False
    assert builder.build(v(18, 10)).repeat == RepeatInfo()
