"""
Reciter catalogue.

Loads reciter reference data from a JSON file and resolves the reciter name
stored in the user settings to a catalogue id.
"""

import json
from pathlib import Path
from typing import Iterator, Optional

from pydantic import ValidationError

from tartil.config import TartilSettings, get_settings
from tartil.exceptions import QuranDataError, ReciterNotFoundError
from tartil.models import Reciter

# Returned by get_reciter_id_by_name for unknown names
NO_RECITER = -1


class ReciterCatalog:
    """
    In-memory collection of reciters indexed by id and name.

    Args:
        reciters: Reciters to index
    """

    def __init__(self, reciters: list[Reciter]):
        self._by_id: dict[int, Reciter] = {}
        for reciter in reciters:
            if reciter.id in self._by_id:
                raise QuranDataError(f"Duplicate reciter id: {reciter.id}")
            self._by_id[reciter.id] = reciter
        self._by_name = {r.name.casefold(): r for r in reciters}

    @classmethod
    def from_json(cls, json_path: str | Path) -> "ReciterCatalog":
        """Load a catalogue from a JSON list of reciter objects."""
        return cls(load_reciters(json_path))

    def get(self, reciter_id: int) -> Reciter:
        """
        Get a reciter by id.

        Raises:
            ReciterNotFoundError: If the id is not in the catalogue
        """
        try:
            return self._by_id[reciter_id]
        except KeyError:
            raise ReciterNotFoundError(reciter_id) from None

    def find_by_name(self, name: Optional[str]) -> Optional[Reciter]:
        """Get a reciter by display name (case-insensitive), or None."""
        if not name:
            return None
        return self._by_name.get(name.casefold())

    def get_reciter_id_by_name(self, name: Optional[str]) -> int:
        """Catalogue id for a display name, or NO_RECITER when unknown."""
        reciter = self.find_by_name(name)
        return reciter.id if reciter else NO_RECITER

    def __iter__(self) -> Iterator[Reciter]:
        return iter(sorted(self._by_id.values(), key=lambda r: r.id))

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, reciter_id: object) -> bool:
        return reciter_id in self._by_id


def load_reciters(json_path: str | Path) -> list[Reciter]:
    """
    Read reciters from a JSON file.

    Args:
        json_path: File containing a list of reciter objects

    Returns:
        List of Reciter models

    Raises:
        QuranDataError: If the file cannot be loaded
    """
    try:
        with open(json_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise QuranDataError(f"Reciter catalogue not found: {json_path}")
    except json.JSONDecodeError as e:
        raise QuranDataError(f"Reciter catalogue is not valid JSON: {e}")

    if not isinstance(raw, list):
        raise QuranDataError("Reciter catalogue must be a JSON list")

    try:
        return [Reciter.model_validate(item) for item in raw]
    except ValidationError as e:
        raise QuranDataError(f"Invalid reciter entry: {e.errors()[0]['msg']}")


def load_catalog(settings: TartilSettings | None = None) -> ReciterCatalog:
    """
    Build the catalogue configured by ``TARTIL_RECITERS_FILE``.

    Raises:
        QuranDataError: If no catalogue is configured or it cannot be loaded
    """
    settings = settings or get_settings()
    if settings.reciters_file is None:
        raise QuranDataError(
            "Reciter catalogue not configured. Set TARTIL_RECITERS_FILE to a JSON file."
        )
    return ReciterCatalog.from_json(settings.reciters_file)
