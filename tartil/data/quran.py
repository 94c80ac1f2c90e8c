"""
Quran reference data.

Surah names, verse counts and juz boundaries used to plan downloads and to
build track titles.
"""

from tartil.models import VerseRef

TOTAL_SURAHS = 114
TOTAL_JUZ = 30
TOTAL_AYAHS = 6236

# Surahs without an opening invocation marker
SURA_FIRST = 1
SURA_TAWBA = 9

# Surah names (1-114)
SURAH_NAMES = {
    1: "الفاتحة", 2: "البقرة", 3: "آل عمران", 4: "النساء", 5: "المائدة",
    6: "الأنعام", 7: "الأعراف", 8: "الأنفال", 9: "التوبة", 10: "يونس",
    11: "هود", 12: "يوسف", 13: "الرعد", 14: "إبراهيم", 15: "الحجر",
    16: "النحل", 17: "الإسراء", 18: "الكهف", 19: "مريم", 20: "طه",
    21: "الأنبياء", 22: "الحج", 23: "المؤمنون", 24: "النور", 25: "الفرقان",
    26: "الشعراء", 27: "النمل", 28: "القصص", 29: "العنكبوت", 30: "الروم",
    31: "لقمان", 32: "السجدة", 33: "الأحزاب", 34: "سبأ", 35: "فاطر",
    36: "يس", 37: "الصافات", 38: "ص", 39: "الزمر", 40: "غافر",
    41: "فصلت", 42: "الشورى", 43: "الزخرف", 44: "الدخان", 45: "الجاثية",
    46: "الأحقاف", 47: "محمد", 48: "الفتح", 49: "الحجرات", 50: "ق",
    51: "الذاريات", 52: "الطور", 53: "النجم", 54: "القمر", 55: "الرحمن",
    56: "الواقعة", 57: "الحديد", 58: "المجادلة", 59: "الحشر", 60: "الممتحنة",
    61: "الصف", 62: "الجمعة", 63: "المنافقون", 64: "التغابن", 65: "الطلاق",
    66: "التحريم", 67: "الملك", 68: "القلم", 69: "الحاقة", 70: "المعارج",
    71: "نوح", 72: "الجن", 73: "المزمل", 74: "المدثر", 75: "القيامة",
    76: "الإنسان", 77: "المرسلات", 78: "النبأ", 79: "النازعات", 80: "عبس",
    81: "التكوير", 82: "الانفطار", 83: "المطففين", 84: "الانشقاق", 85: "البروج",
    86: "الطارق", 87: "الأعلى", 88: "الغاشية", 89: "الفجر", 90: "البلد",
    91: "الشمس", 92: "الليل", 93: "الضحى", 94: "الشرح", 95: "التين",
    96: "العلق", 97: "القدر", 98: "البينة", 99: "الزلزلة", 100: "العاديات",
    101: "القارعة", 102: "التكاثر", 103: "العصر", 104: "الهمزة", 105: "الفيل",
    106: "قريش", 107: "الماعون", 108: "الكوثر", 109: "الكافرون", 110: "النصر",
    111: "المسد", 112: "الإخلاص", 113: "الفلق", 114: "الناس",
}

# Number of verses in each surah, index 0 unused
SURAH_AYAH_COUNTS = (
    0,
    7, 286, 200, 176, 120, 165, 206, 75, 129, 109,
    123, 111, 43, 52, 99, 128, 111, 110, 98, 135,
    112, 78, 118, 64, 77, 227, 93, 88, 69, 60,
    34, 30, 73, 54, 45, 83, 182, 88, 75, 85,
    54, 53, 89, 59, 37, 35, 38, 29, 18, 45,
    60, 49, 62, 55, 78, 96, 29, 22, 24, 13,
    14, 11, 11, 18, 12, 12, 30, 52, 52, 44,
    28, 28, 20, 56, 40, 31, 50, 40, 46, 42,
    29, 19, 36, 25, 22, 17, 19, 26, 30, 20,
    15, 21, 11, 8, 8, 19, 5, 8, 8, 11,
    11, 8, 3, 9, 5, 4, 7, 3, 6, 3,
    5, 4, 5, 6,
)

# First verse of each juz (1-30)
JUZ_STARTS = (
    (1, 1), (2, 142), (2, 253), (3, 93), (4, 24),
    (4, 148), (5, 82), (6, 111), (7, 88), (8, 41),
    (9, 93), (11, 6), (12, 53), (15, 1), (17, 1),
    (18, 75), (21, 1), (23, 1), (25, 21), (27, 56),
    (29, 46), (33, 31), (36, 28), (39, 32), (41, 47),
    (46, 1), (51, 31), (58, 1), (67, 1), (78, 1),
)


def _check_surah(surah_id: int) -> None:
    if surah_id < 1 or surah_id > TOTAL_SURAHS:
        raise ValueError(f"Invalid surah_id: {surah_id}. Must be 1-{TOTAL_SURAHS}.")


def get_ayah_count(surah_id: int) -> int:
    """
    Get the total number of ayahs in a surah.

    Args:
        surah_id: Surah number (1-114)

    Returns:
        Number of ayahs in the surah
    """
    _check_surah(surah_id)
    return SURAH_AYAH_COUNTS[surah_id]


def get_surah_name(surah_id: int) -> str:
    """
    Get the Arabic name of a surah.

    Args:
        surah_id: Surah number (1-114)

    Returns:
        Arabic name of the surah
    """
    _check_surah(surah_id)
    return SURAH_NAMES[surah_id]


def has_invocation(surah_id: int) -> bool:
    """Whether verse 1 of the surah is preceded by the opening invocation."""
    _check_surah(surah_id)
    return surah_id not in (SURA_FIRST, SURA_TAWBA)


def get_surah_ayah_string(verse: VerseRef) -> str:
    """Human-readable label for a verse, e.g. ``"الكهف 18:10"``."""
    return f"{get_surah_name(verse.surah)} {verse.surah}:{verse.ayah}"


def get_juz_start(juz: int) -> VerseRef:
    """First verse of a juz (1-30)."""
    if juz < 1 or juz > TOTAL_JUZ:
        raise ValueError(f"Invalid juz: {juz}. Must be 1-{TOTAL_JUZ}.")
    surah, ayah = JUZ_STARTS[juz - 1]
    return VerseRef(surah=surah, ayah=ayah)


def get_juz_from_ayah(verse: VerseRef) -> int:
    """Juz number containing a verse (the invocation belongs to verse 1)."""
    key = (verse.surah, max(verse.ayah, 1))
    juz = 1
    for index, start in enumerate(JUZ_STARTS, start=1):
        if start <= key:
            juz = index
        else:
            break
    return juz
