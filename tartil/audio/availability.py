"""
Asset availability checks.

Reports which of the assets a request needs (verse-timing index, gapless
database, audio files) already exist locally. Missing files are a normal
result, never an error.
"""

from pathlib import Path
from typing import Optional

from tartil.audio.paths import AudioFile, AudioPaths, get_download_range
from tartil.data.locator import VerseLocator
from tartil.data.quran import get_ayah_count
from tartil.data.reciters import ReciterCatalog
from tartil.models import AssetStatus, AudioRequest, Reciter


def is_complete_file(path: Optional[Path]) -> bool:
    """
    Whether a downloaded file is usable.

    Downloads are written to a ``.part`` file and renamed on success, so a
    non-empty regular file at the final path is complete.
    """
    if path is None:
        return False
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


class AvailabilityChecker:
    """
    Checks local availability of the assets behind an audio request.

    Args:
        catalog: Reciter catalogue used to resolve request reciter ids
        locator: Verse/page lookup used to plan the required range
        paths: Asset location resolver
    """

    def __init__(
        self,
        catalog: ReciterCatalog,
        locator: VerseLocator,
        paths: AudioPaths | None = None,
    ):
        self._catalog = catalog
        self._locator = locator
        self._paths = paths or AudioPaths()

    @property
    def paths(self) -> AudioPaths:
        return self._paths

    @property
    def locator(self) -> VerseLocator:
        return self._locator

    def reciter_for(self, request: AudioRequest) -> Reciter:
        return self._catalog.get(request.reciter_id)

    def has_timing_index(self) -> bool:
        return is_complete_file(self._paths.timing_index_path)

    def has_gapless_database(self, reciter: Reciter) -> bool:
        """Whether the gapless database is present (True for per-verse reciters)."""
        if not reciter.is_gapless:
            return True
        return is_complete_file(self._paths.gapless_database_path(reciter))

    def needs_verse_timings(self, request: AudioRequest) -> bool:
        """
        Whether playing a request means seeking inside surah files.

        True when the range starts after a surah's first verse, ends before a
        surah's last verse, or repeats a span.
        """
        download_range = get_download_range(request, self._locator)
        start, end = download_range.from_ayah, download_range.to_ayah
        if start.ayah > 1:
            return True
        if end.ayah < get_ayah_count(end.surah):
            return True
        return request.repeat.is_enabled

    def should_download_gapless_database(self, request: AudioRequest) -> bool:
        reciter = self.reciter_for(request)
        if not reciter.is_gapless or not reciter.gapless_database_url:
            return False
        if self.has_gapless_database(reciter):
            return False
        return self.needs_verse_timings(request)

    def required_files(self, request: AudioRequest) -> list[AudioFile]:
        reciter = self.reciter_for(request)
        download_range = get_download_range(request, self._locator)
        return self._paths.required_files(reciter, download_range, self._locator)

    def missing_files(self, request: AudioRequest) -> list[AudioFile]:
        return [f for f in self.required_files(request) if not is_complete_file(f.path)]

    def have_all_files(self, request: AudioRequest) -> bool:
        return not self.missing_files(request)

    def check(self, request: AudioRequest) -> AssetStatus:
        """
        Report the three availability flags for a request.

        Args:
            request: The request to check

        Returns:
            AssetStatus with the flags and the list of missing audio files
        """
        reciter = self.reciter_for(request)
        missing = self.missing_files(request)
        return AssetStatus(
            has_timing_index=self.has_timing_index(),
            has_gapless_database=self.has_gapless_database(reciter),
            has_all_files=not missing,
            missing_files=[f.path for f in missing],
        )
