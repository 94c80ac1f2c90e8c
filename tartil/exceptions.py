"""
Custom exceptions for the tartil library.

All exceptions inherit from TartilError for easy catching of library-specific errors.
"""

from typing import Any


class TartilError(Exception):
    """Base exception for all tartil errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ConfigurationError(TartilError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting_name:
            ctx["setting"] = setting_name
        super().__init__(message, ctx)
        self.setting_name = setting_name


class QuranDataError(TartilError):
    """Raised when Quran reference data cannot be loaded."""

    def __init__(self, message: str = "Failed to load Quran reference data.") -> None:
        super().__init__(message)


class ReciterNotFoundError(TartilError):
    """Raised when a reciter id or name is not in the catalogue."""

    def __init__(self, reciter: int | str) -> None:
        super().__init__("Unknown reciter", {"reciter": reciter})
        self.reciter = reciter


class InvalidAudioRequestError(TartilError):
    """Raised when a serialized audio request cannot be parsed."""

    def __init__(self, raw: str | None, reason: str) -> None:
        super().__init__(f"Invalid audio request: {reason}", {"raw": raw})
        self.raw = raw
        self.reason = reason


class AudioDownloadError(TartilError):
    """Raised when audio assets for a request could not be downloaded."""

    def __init__(
        self,
        message: str = "Unable to download audio.",
        url: str | None = None,
        destination: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        if destination:
            ctx["destination"] = destination
        super().__init__(message, ctx)
        self.url = url
        self.destination = destination
