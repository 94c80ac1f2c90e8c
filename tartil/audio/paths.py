"""
Local and remote locations of audio assets.

Layout under the configured audio root::

    ayahinfo.db                         verse-timing index
    <reciter>/<gapless database file>   gapless reciters only
    <reciter>/001.mp3                   gapless: one file per surah
    <reciter>/001/001.mp3               per-verse: one file per verse

Remote per-verse files follow the ``{surah:03d}{ayah:03d}.mp3`` convention,
gapless files ``{surah:03d}.mp3``.
"""

from pathlib import Path
from typing import Iterator, NamedTuple, Optional

from tartil.config import TartilSettings, get_settings
from tartil.data.locator import VerseLocator
from tartil.data.quran import get_juz_from_ayah, has_invocation
from tartil.models import (
    AudioDownloadAmount,
    AudioRequest,
    DownloadRange,
    Reciter,
    RepeatAmount,
    VerseRef,
)

# Verse whose audio supplies the opening invocation for per-verse reciters
BISMILLAH_AYAH = VerseRef(surah=1, ayah=1)


class AudioFile(NamedTuple):
    """A remote audio file and where it is stored locally."""

    url: str
    path: Path


class AudioPaths:
    """
    Resolves asset locations for reciters and verses.

    Args:
        settings: Settings providing the audio root (default: global settings)
    """

    def __init__(self, settings: TartilSettings | None = None):
        self._settings = settings or get_settings()

    @property
    def audio_root(self) -> Path:
        return self._settings.audio_root

    @property
    def timing_index_path(self) -> Path:
        return self._settings.timing_index_path

    @property
    def timing_index_url(self) -> str:
        return self._settings.timing_index_url

    def reciter_root(self, reciter: Reciter) -> Path:
        """Directory holding a reciter's files."""
        return self.audio_root / reciter.local_path

    def gapless_database_path(self, reciter: Reciter) -> Optional[Path]:
        """Local path of a reciter's gapless database, if it has one."""
        filename = reciter.gapless_database_filename
        if not reciter.is_gapless or filename is None:
            return None
        return self.reciter_root(reciter) / filename

    def local_path_for_ayah(self, verse: VerseRef, reciter: Reciter) -> Path:
        """Local file holding the audio of a verse."""
        ext = self._settings.audio_extension
        if reciter.is_gapless:
            return self.reciter_root(reciter) / f"{verse.surah:03d}.{ext}"
        return self.reciter_root(reciter) / f"{verse.surah:03d}" / f"{verse.ayah:03d}.{ext}"

    def remote_url_for_ayah(self, verse: VerseRef, reciter: Reciter) -> str:
        """Remote URL of the file holding the audio of a verse."""
        ext = self._settings.audio_extension
        base = reciter.server_url.rstrip("/")
        if reciter.is_gapless:
            return f"{base}/{verse.surah:03d}.{ext}"
        return f"{base}/{verse.surah:03d}{verse.ayah:03d}.{ext}"

    def audio_file(self, verse: VerseRef, reciter: Reciter) -> AudioFile:
        return AudioFile(
            url=self.remote_url_for_ayah(verse, reciter),
            path=self.local_path_for_ayah(verse, reciter),
        )

    def required_files(
        self,
        reciter: Reciter,
        download_range: DownloadRange,
        locator: VerseLocator,
    ) -> list[AudioFile]:
        """
        Files a reciter needs locally to play a range.

        Gapless reciters need one file per surah spanned. Per-verse reciters
        need every verse file, plus the first verse of the Quran whenever the
        range starts a surah that opens with the invocation.
        """
        if reciter.is_gapless:
            return [
                self.audio_file(VerseRef(surah=surah, ayah=1), reciter)
                for surah in download_range.surahs
            ]

        files = []
        needs_bismillah = False
        for verse in iter_range(download_range, locator):
            if verse.ayah == 1 and has_invocation(verse.surah):
                needs_bismillah = True
            files.append(self.audio_file(verse, reciter))

        if needs_bismillah:
            bismillah = self.audio_file(BISMILLAH_AYAH, reciter)
            if bismillah not in files:
                files.insert(0, bismillah)
        return files


def iter_range(download_range: DownloadRange, locator: VerseLocator) -> Iterator[VerseRef]:
    """Yield every verse of an inclusive range in order."""
    verse = download_range.from_ayah
    while True:
        yield verse
        if verse >= download_range.to_ayah:
            return
        following = locator.get_next_ayah(verse, wrap=False)
        if following == verse:
            return
        verse = following


def normalize_start(verse: VerseRef) -> VerseRef:
    """Map the invocation sentinel to verse 1 of the same surah."""
    return verse.with_ayah(1) if verse.is_invocation else verse


def get_download_range(request: AudioRequest, locator: VerseLocator) -> DownloadRange:
    """
    Verses a request needs: from its current verse to the end of the
    look-ahead extent, widened to cover the repeated span.
    """
    start = normalize_start(request.current_ayah)
    end = _extent_end(start, request.download_amount, locator)

    repeat = request.repeat
    if repeat.is_enabled:
        end = max(end, _repeat_end(start, repeat.repeat_amount, locator))

    return DownloadRange(from_ayah=start, to_ayah=end)


def _extent_end(start: VerseRef, amount: AudioDownloadAmount, locator: VerseLocator) -> VerseRef:
    if amount == AudioDownloadAmount.SURAH:
        return locator.get_surah_bounds(start.surah)[1]
    if amount == AudioDownloadAmount.JUZ:
        return locator.get_juz_bounds(get_juz_from_ayah(start))[1]
    return locator.get_page_bounds(locator.get_page_from_ayah(start))[1]


def _repeat_end(start: VerseRef, amount: RepeatAmount, locator: VerseLocator) -> VerseRef:
    count = amount.ayah_count
    if count is not None:
        end = start
        for _ in range(count - 1):
            end = locator.get_next_ayah(end, wrap=False)
        return end
    if amount == RepeatAmount.PAGE:
        return _extent_end(start, AudioDownloadAmount.PAGE, locator)
    if amount == RepeatAmount.SURAH:
        return _extent_end(start, AudioDownloadAmount.SURAH, locator)
    if amount == RepeatAmount.JUZ:
        return _extent_end(start, AudioDownloadAmount.JUZ, locator)
    return start
