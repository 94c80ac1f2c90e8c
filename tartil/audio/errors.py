"""
User-visible error notices.
"""

from abc import ABC, abstractmethod

from tartil._logging import log_error


class ErrorPresenter(ABC):
    """Shows a non-blocking error message to the user."""

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Display ``message``; must not block."""
        pass


class LoggingErrorPresenter(ErrorPresenter):
    """Presenter for headless use: errors go to the log."""

    def show_error(self, message: str) -> None:
        log_error(message)
