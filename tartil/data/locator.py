"""
Verse and page lookup.

This module defines the interface the playback core uses to move between
verses and mushaf pages, and a table-driven implementation that reads page
start verses from a CSV file with ``page,sura_id,index`` columns.
"""

import csv
from abc import ABC, abstractmethod
from bisect import bisect_right
from pathlib import Path
from typing import Optional

from tartil.config import TartilSettings, get_settings
from tartil.data.quran import (
    SURAH_AYAH_COUNTS,
    TOTAL_JUZ,
    TOTAL_SURAHS,
    get_ayah_count,
    get_juz_start,
    has_invocation,
)
from tartil.exceptions import QuranDataError
from tartil.models import VerseRef

FIRST_AYAH = VerseRef(surah=1, ayah=1)
LAST_AYAH = VerseRef(surah=TOTAL_SURAHS, ayah=SURAH_AYAH_COUNTS[TOTAL_SURAHS])


class VerseLocator(ABC):
    """
    Abstract interface for verse/page lookup.

    Example:
        class MyLocator(VerseLocator):
            def get_page_from_ayah(self, verse: VerseRef) -> int:
                ...
    """

    @abstractmethod
    def get_page_from_ayah(self, verse: VerseRef) -> int:
        """Page number containing a verse (the invocation maps to verse 1)."""
        pass

    @abstractmethod
    def get_page_bounds(self, page: int) -> tuple[VerseRef, VerseRef]:
        """First and last verse printed on a page."""
        pass

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the mushaf."""
        pass

    def is_valid(self, verse: Optional[VerseRef]) -> bool:
        """Whether a verse reference points at a real verse or invocation."""
        if verse is None:
            return False
        if verse.surah < 1 or verse.surah > TOTAL_SURAHS:
            return False
        if verse.ayah == 0:
            return has_invocation(verse.surah)
        return verse.ayah <= get_ayah_count(verse.surah)

    def get_next_ayah(self, verse: VerseRef, wrap: bool = False) -> VerseRef:
        """
        Verse following ``verse``.

        At the last verse of the Quran this returns the same verse, or the
        first verse when ``wrap`` is set.
        """
        if verse.ayah < get_ayah_count(verse.surah):
            return verse.with_ayah(verse.ayah + 1)
        if verse.surah < TOTAL_SURAHS:
            return VerseRef(surah=verse.surah + 1, ayah=1)
        return FIRST_AYAH if wrap else verse

    def get_previous_ayah(self, verse: VerseRef, wrap: bool = False) -> VerseRef:
        """
        Verse preceding ``verse``.

        At the first verse of the Quran this returns the same verse, or the
        last verse when ``wrap`` is set.
        """
        if verse.ayah > 1:
            return verse.with_ayah(verse.ayah - 1)
        if verse.surah > 1:
            previous = verse.surah - 1
            return VerseRef(surah=previous, ayah=get_ayah_count(previous))
        return LAST_AYAH if wrap else verse

    def get_surah_bounds(self, surah_id: int) -> tuple[VerseRef, VerseRef]:
        """First and last verse of a surah."""
        return (
            VerseRef(surah=surah_id, ayah=1),
            VerseRef(surah=surah_id, ayah=get_ayah_count(surah_id)),
        )

    def get_juz_bounds(self, juz: int) -> tuple[VerseRef, VerseRef]:
        """First and last verse of a juz (1-30)."""
        start = get_juz_start(juz)
        if juz == TOTAL_JUZ:
            return start, LAST_AYAH
        return start, self.get_previous_ayah(get_juz_start(juz + 1))


class QuranLocator(VerseLocator):
    """
    Table-driven locator.

    Args:
        page_starts: First verse of every page, in page order
    """

    def __init__(self, page_starts: list[VerseRef]):
        if not page_starts:
            raise QuranDataError("Page table is empty")
        if page_starts[0] != FIRST_AYAH:
            raise QuranDataError("Page table must start at 1:1")
        for previous, current in zip(page_starts, page_starts[1:]):
            if current <= previous:
                raise QuranDataError(f"Page table is not ordered at {current}")

        self._starts = list(page_starts)
        self._keys = [(v.surah, v.ayah) for v in self._starts]

    @classmethod
    def from_csv(cls, csv_path: str | Path) -> "QuranLocator":
        """
        Load a locator from a page table CSV.

        Raises:
            QuranDataError: If the file is missing or malformed
        """
        return cls(load_page_table(csv_path))

    @property
    def page_count(self) -> int:
        return len(self._starts)

    def get_page_from_ayah(self, verse: VerseRef) -> int:
        key = (verse.surah, max(verse.ayah, 1))
        return max(bisect_right(self._keys, key), 1)

    def get_page_bounds(self, page: int) -> tuple[VerseRef, VerseRef]:
        if page < 1 or page > self.page_count:
            raise ValueError(f"Invalid page: {page}. Must be 1-{self.page_count}.")
        start = self._starts[page - 1]
        if page == self.page_count:
            return start, LAST_AYAH
        return start, self.get_previous_ayah(self._starts[page])


def load_page_table(csv_path: str | Path) -> list[VerseRef]:
    """
    Read page start verses from a CSV file.

    Args:
        csv_path: File with ``page``, ``sura_id`` and ``index`` columns

    Returns:
        Page start verses ordered by page number

    Raises:
        QuranDataError: If the file cannot be loaded
    """
    try:
        with open(csv_path, "r", encoding="utf-8") as f:
            rows = sorted(csv.DictReader(f), key=lambda row: int(row["page"]))
        return [VerseRef(surah=int(row["sura_id"]), ayah=int(row["index"])) for row in rows]
    except FileNotFoundError:
        raise QuranDataError(f"Page table CSV not found: {csv_path}")
    except (KeyError, ValueError) as e:
        raise QuranDataError(f"Failed to load page table: {e}")


def load_locator(settings: TartilSettings | None = None) -> QuranLocator:
    """
    Build the locator configured by ``TARTIL_PAGE_TABLE_FILE``.

    Raises:
        QuranDataError: If no page table is configured or it cannot be loaded
    """
    settings = settings or get_settings()
    if settings.page_table_file is None:
        raise QuranDataError(
            "Page table not configured. Set TARTIL_PAGE_TABLE_FILE to a CSV of page start verses."
        )
    return QuranLocator.from_csv(settings.page_table_file)
