"""
Repeat policy data models.
"""

from enum import Enum

from pydantic import BaseModel, Field

# Repeat count meaning "repeat until stopped"
INFINITE_REPEAT = -1


class RepeatAmount(str, Enum):
    """Granularity of the audio span that is repeated."""

    NONE = "none"
    ONE_AYAH = "one_ayah"
    THREE_AYAH = "three_ayah"
    FIVE_AYAH = "five_ayah"
    TEN_AYAH = "ten_ayah"
    PAGE = "page"
    SURAH = "surah"
    JUZ = "juz"

    @property
    def ayah_count(self) -> int | None:
        """Number of verses covered, for verse-counted amounts."""
        return _AYAH_COUNTS.get(self)


_AYAH_COUNTS = {
    RepeatAmount.ONE_AYAH: 1,
    RepeatAmount.THREE_AYAH: 3,
    RepeatAmount.FIVE_AYAH: 5,
    RepeatAmount.TEN_AYAH: 10,
}


class RepeatInfo(BaseModel):
    """
    Repeat policy copied into an audio request.

    The default instance means "no repeat".

    Attributes:
        repeat_amount: Span that is repeated
        repeat_count: How many times to repeat before advancing (-1 = forever)
    """

    repeat_amount: RepeatAmount = Field(
        default=RepeatAmount.NONE,
        description="Span that is repeated",
    )
    repeat_count: int = Field(
        default=0,
        description="How many times to repeat before advancing (-1 = forever)",
        ge=INFINITE_REPEAT,
    )

    model_config = {"frozen": True}

    @property
    def is_enabled(self) -> bool:
        """Whether this policy repeats anything at all."""
        return self.repeat_amount != RepeatAmount.NONE and self.repeat_count != 0

    @property
    def is_infinite(self) -> bool:
        """Whether the span repeats until playback is stopped."""
        return self.repeat_count == INFINITE_REPEAT

    def __str__(self) -> str:
        if not self.is_enabled:
            return "RepeatInfo(none)"
        count = "forever" if self.is_infinite else f"x{self.repeat_count}"
        return f"RepeatInfo({self.repeat_amount.value}, {count})"
