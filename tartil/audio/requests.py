"""
Playback request building.

Turns a play intent (an explicit verse, or "play from where I am") plus the
user's persisted audio preferences into a fully specified AudioRequest.
"""

from typing import Optional

from tartil._logging import get_logger
from tartil.audio.observable import ReadingPosition
from tartil.data.locator import VerseLocator
from tartil.data.quran import has_invocation
from tartil.data.reciters import NO_RECITER, ReciterCatalog
from tartil.models import AudioRequest, RepeatInfo, VerseRef
from tartil.storage.settings import AudioPreferences

logger = get_logger("tartil.audio.requests")


def normalize_invocation(verse: VerseRef) -> VerseRef:
    """
    Start a surah's first verse at its invocation.

    Verse 1 becomes verse 0 unless the surah has no invocation (surahs 1 and 9).
    """
    if verse.ayah == 1 and has_invocation(verse.surah):
        return verse.with_ayah(0)
    return verse


class RequestBuilder:
    """
    Builds audio requests from the reading position and preferences.

    Preferences are read once per build and snapshotted into the request.

    Args:
        catalog: Reciter catalogue resolving the selected reciter name
        preferences: Persisted audio preferences
        locator: Verse/page lookup
        position: Current page and selected verse
    """

    def __init__(
        self,
        catalog: ReciterCatalog,
        preferences: AudioPreferences,
        locator: VerseLocator,
        position: ReadingPosition,
    ):
        self._catalog = catalog
        self._preferences = preferences
        self._locator = locator
        self._position = position

    def resolve_start_verse(self) -> Optional[VerseRef]:
        """
        Verse that "play from here" starts at.

        The selected verse wins as is; otherwise the first verse of the
        current page, starting at the invocation when the page opens a surah.
        """
        verse = self._position.selected_ayah.value
        if verse is not None:
            return verse

        page = self._position.current_page.value
        try:
            start = self._locator.get_page_bounds(page)[0]
        except ValueError:
            logger.debug(f"No bounds for page {page}")
            return None
        return normalize_invocation(start)

    def build_repeat(self) -> RepeatInfo:
        if not self._preferences.repeat_enabled:
            return RepeatInfo()
        return RepeatInfo(
            repeat_amount=self._preferences.repeat_amount,
            repeat_count=self._preferences.repeat_times,
        )

    def build(self, verse: Optional[VerseRef] = None) -> Optional[AudioRequest]:
        """
        Build a request.

        Args:
            verse: Explicit starting verse; resolved from the position when omitted

        Returns:
            The request, or None when no reciter is selected or no verse resolves
        """
        reciter_id = self._catalog.get_reciter_id_by_name(self._preferences.active_reciter)
        if reciter_id == NO_RECITER:
            logger.info("No reciter selected, nothing to play")
            return None

        if verse is None:
            verse = self.resolve_start_verse()
            if verse is None:
                return None

        return AudioRequest(
            reciter_id=reciter_id,
            current_ayah=verse,
            repeat=self.build_repeat(),
            current_repeat=0,
            download_amount=self._preferences.download_amount,
        )
