"""
Quran data module for the tartil library.

Provides Quran reference data (surah names, verse counts, juz boundaries),
verse/page lookup and the reciter catalogue.
"""

from tartil.data.quran import (
    SURA_FIRST,
    SURA_TAWBA,
    get_ayah_count,
    get_juz_from_ayah,
    get_juz_start,
    get_surah_ayah_string,
    get_surah_name,
    has_invocation,
)
from tartil.data.locator import (
    QuranLocator,
    VerseLocator,
    load_locator,
    load_page_table,
)
from tartil.data.reciters import (
    NO_RECITER,
    ReciterCatalog,
    load_catalog,
    load_reciters,
)

__all__ = [
    "SURA_FIRST",
    "SURA_TAWBA",
    "get_ayah_count",
    "get_juz_from_ayah",
    "get_juz_start",
    "get_surah_ayah_string",
    "get_surah_name",
    "has_invocation",
    "QuranLocator",
    "VerseLocator",
    "load_locator",
    "load_page_table",
    "NO_RECITER",
    "ReciterCatalog",
    "load_catalog",
    "load_reciters",
]
