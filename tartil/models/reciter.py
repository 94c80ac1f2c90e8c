"""
Reciter reference data model.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Reciter(BaseModel):
    """
    A reciter whose audio can be downloaded and played.

    Gapless reciters publish one continuous file per surah plus a timing
    database used to seek to individual verses. All other reciters publish
    one file per verse.

    Attributes:
        id: Catalogue id
        name: Display name
        local_path: Storage folder name under the audio root
        server_url: Base URL the audio files are served from
        gapless_database_url: URL of the verse timing database (gapless only)
        is_gapless: Whether audio is stored as one file per surah
    """

    id: int = Field(
        ...,
        description="Catalogue id",
        ge=0,
    )
    name: str = Field(
        ...,
        description="Display name",
        min_length=1,
    )
    local_path: str = Field(
        ...,
        description="Storage folder name under the audio root",
        min_length=1,
    )
    server_url: str = Field(
        ...,
        description="Base URL the audio files are served from",
    )
    gapless_database_url: Optional[str] = Field(
        default=None,
        description="URL of the verse timing database (gapless only)",
    )
    is_gapless: bool = Field(
        default=False,
        description="Whether audio is stored as one file per surah",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 0,
                    "name": "Minshawi Murattal",
                    "local_path": "minshawi_murattal",
                    "server_url": "https://everyayah.com/data/Minshawy_Murattal_128kbps",
                    "is_gapless": False,
                }
            ]
        },
    }

    @property
    def is_verse_level(self) -> bool:
        """Whether a single verse is the unit of download."""
        return not self.is_gapless

    @property
    def gapless_database_filename(self) -> Optional[str]:
        """File name the gapless database is stored under."""
        if not self.gapless_database_url:
            return None
        name = self.gapless_database_url.rstrip("/").rsplit("/", 1)[-1]
        return name or None

    def __str__(self) -> str:
        kind = "gapless" if self.is_gapless else "per-verse"
        return f"Reciter({self.id}, {self.name}, {kind})"
