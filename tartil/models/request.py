"""
Audio request data model.

An AudioRequest describes one play intent. It is serialized into the audio
engine's opaque per-track metadata slot so the currently playing position can
be recovered from the track alone.

Serialized form (fields always in this order)::

    local://{reciter_id}/?currentAyah={surah}:{ayah}&repeatAmount={AMOUNT}
        &repeatCount={n}&currentRepeat={k}&amount={LOOKAHEAD}
"""

from enum import Enum
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, Field, ValidationError

from tartil.exceptions import InvalidAudioRequestError
from tartil.models.repeat import RepeatAmount, RepeatInfo
from tartil.models.verse import VerseRef

REQUEST_SCHEME = "local"

_FIELDS = ("currentAyah", "repeatAmount", "repeatCount", "currentRepeat", "amount")


class AudioDownloadAmount(str, Enum):
    """How much audio beyond the requested verse is fetched ahead of time."""

    PAGE = "page"
    SURAH = "surah"
    JUZ = "juz"


class AudioRequest(BaseModel):
    """
    A fully specified, serializable playback request.

    Attributes:
        reciter_id: Catalogue id of the reciter
        current_ayah: Verse playback starts from (ayah 0 = invocation)
        repeat: Repeat policy snapshotted at build time
        current_repeat: Zero-based repeat progress counter
        download_amount: Look-ahead amount to pre-fetch
    """

    reciter_id: int = Field(
        ...,
        description="Catalogue id of the reciter",
        ge=0,
    )
    current_ayah: VerseRef = Field(
        ...,
        description="Verse playback starts from (ayah 0 = invocation)",
    )
    repeat: RepeatInfo = Field(
        default_factory=RepeatInfo,
        description="Repeat policy snapshotted at build time",
    )
    current_repeat: int = Field(
        default=0,
        description="Zero-based repeat progress counter",
        ge=0,
    )
    download_amount: AudioDownloadAmount = Field(
        default=AudioDownloadAmount.PAGE,
        description="Look-ahead amount to pre-fetch",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "reciter_id": 3,
                    "current_ayah": {"surah": 18, "ayah": 0},
                    "repeat": {"repeat_amount": "one_ayah", "repeat_count": 2},
                    "current_repeat": 0,
                    "download_amount": "page",
                }
            ]
        },
    }

    def to_string(self) -> str:
        """Serialize to the compact metadata string."""
        return (
            f"{REQUEST_SCHEME}://{self.reciter_id}/"
            f"?currentAyah={self.current_ayah.surah}:{self.current_ayah.ayah}"
            f"&repeatAmount={self.repeat.repeat_amount.name}"
            f"&repeatCount={self.repeat.repeat_count}"
            f"&currentRepeat={self.current_repeat}"
            f"&amount={self.download_amount.name}"
        )

    @classmethod
    def from_string(cls, raw: str | None) -> "AudioRequest":
        """
        Parse the compact metadata string.

        Raises:
            InvalidAudioRequestError: If the string is empty, foreign or malformed
        """
        if not raw:
            raise InvalidAudioRequestError(raw, "empty metadata")

        parts = urlsplit(raw.strip())
        if parts.scheme != REQUEST_SCHEME:
            raise InvalidAudioRequestError(raw, f"unexpected scheme {parts.scheme!r}")
        if not parts.netloc.isdigit():
            raise InvalidAudioRequestError(raw, "reciter id is not a number")

        query = parse_qs(parts.query, keep_blank_values=True, strict_parsing=False)
        values = {}
        for name in _FIELDS:
            found = query.get(name)
            if not found or len(found) != 1:
                raise InvalidAudioRequestError(raw, f"missing or repeated field {name!r}")
            values[name] = found[0]

        try:
            return cls(
                reciter_id=int(parts.netloc),
                current_ayah=VerseRef.parse(values["currentAyah"]),
                repeat=RepeatInfo(
                    repeat_amount=RepeatAmount[values["repeatAmount"]],
                    repeat_count=int(values["repeatCount"]),
                ),
                current_repeat=int(values["currentRepeat"]),
                download_amount=AudioDownloadAmount[values["amount"]],
            )
        except KeyError as e:
            raise InvalidAudioRequestError(raw, f"unknown enum value {e}") from e
        except (ValueError, ValidationError) as e:
            raise InvalidAudioRequestError(raw, str(e).splitlines()[0]) from e

    def __str__(self) -> str:
        return self.to_string()
