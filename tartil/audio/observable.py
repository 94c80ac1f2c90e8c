"""
Observable state fields.

Every externally visible piece of playback state is held in an
ObservableValue: assigning an equal value is a no-op, assigning a new value
notifies subscribers synchronously before the assignment returns.
"""

from typing import Callable, Generic, Optional, TypeVar

from tartil._logging import get_logger
from tartil.models import VerseRef

T = TypeVar("T")

logger = get_logger("tartil.audio.observable")

Listener = Callable[[T, T], None]


class ObservableValue(Generic[T]):
    """
    A value that publishes changes to subscribers.

    Listeners receive ``(old, new)``.

    Example:
        state = ObservableValue("stopped", name="audio_player_state")
        unsubscribe = state.subscribe(lambda old, new: print(old, "->", new))
        state.value = "playing"   # prints "stopped -> playing"
        state.value = "playing"   # no-op
        unsubscribe()
    """

    def __init__(self, initial: T, name: str = "value"):
        self._value = initial
        self._name = name
        self._listeners: list[Listener] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new: T) -> None:
        self.set(new)

    def set(self, new: T) -> bool:
        """
        Assign a value.

        Returns:
            True if the value changed and subscribers were notified
        """
        if new == self._value:
            return False
        old = self._value
        self._value = new
        logger.debug(f"{self._name}: {old!r} -> {new!r}")
        for listener in list(self._listeners):
            listener(old, new)
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:
        return f"ObservableValue({self._name}={self._value!r})"


class ReadingPosition:
    """
    Where the reader is: the current mushaf page and the selected verse.

    Both fields are observable so views can follow playback.
    """

    def __init__(self, page: int = 1, selected: Optional[VerseRef] = None):
        self.current_page: ObservableValue[int] = ObservableValue(page, "current_page")
        self.selected_ayah: ObservableValue[Optional[VerseRef]] = ObservableValue(
            selected, "selected_ayah"
        )

    def __repr__(self) -> str:
        return f"ReadingPosition(page={self.current_page.value}, selected={self.selected_ayah.value})"
