"""
Verse reference data model.
"""

from functools import total_ordering

from pydantic import BaseModel, Field

# Verse number used for the opening invocation that precedes verse 1
INVOCATION_AYAH = 0


@total_ordering
class VerseRef(BaseModel):
    """
    Reference to a single verse (ayah) of the Quran.

    Verse number 0 is the invocation sentinel: the opening invocation that
    precedes verse 1 of most surahs.

    Attributes:
        surah: Surah number (1-114)
        ayah: Verse number within the surah (0 for the invocation)
    """

    surah: int = Field(
        ...,
        description="Surah number (1-114)",
        ge=1,
        le=114,
    )
    ayah: int = Field(
        ...,
        description="Verse number within the surah (0 for the invocation)",
        ge=0,
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"surah": 2, "ayah": 255},
            ]
        },
    }

    @property
    def is_invocation(self) -> bool:
        """Whether this reference is the invocation sentinel."""
        return self.ayah == INVOCATION_AYAH

    def with_ayah(self, ayah: int) -> "VerseRef":
        """Copy of this reference pointing at another verse of the same surah."""
        return VerseRef(surah=self.surah, ayah=ayah)

    @classmethod
    def parse(cls, text: str) -> "VerseRef":
        """
        Parse a ``surah:ayah`` string.

        Raises:
            ValueError: If the text is not two colon-separated integers
        """
        surah, sep, ayah = text.strip().partition(":")
        if not sep:
            raise ValueError(f"Expected 'surah:ayah', got {text!r}")
        return cls(surah=int(surah), ayah=int(ayah))

    def __lt__(self, other: "VerseRef") -> bool:
        if not isinstance(other, VerseRef):
            return NotImplemented
        return (self.surah, self.ayah) < (other.surah, other.ayah)

    def __str__(self) -> str:
        return f"{self.surah}:{self.ayah}"

    def __repr__(self) -> str:
        return f"VerseRef(surah={self.surah}, ayah={self.ayah})"
