"""
Abstract base class for the native audio engine.

The playback core never plays audio itself. It hands tracks to an engine
implementing this interface and learns about playback progress only through
the engine's state-change notifications.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from tartil.models import EngineState, TrackDescriptor

StateListener = Callable[[], None]


class AudioEngine(ABC):
    """
    Abstract interface for a native audio engine.

    Implementations call :meth:`notify_state_changed` whenever their playback
    state changes; listeners then read :attr:`state` themselves.

    Example:
        class MyEngine(AudioEngine):
            @property
            def state(self) -> EngineState:
                ...
    """

    def __init__(self) -> None:
        self._state_listeners: list[StateListener] = []

    @property
    @abstractmethod
    def state(self) -> EngineState:
        """Current playback state."""
        pass

    @property
    @abstractmethod
    def position(self) -> float:
        """Playback offset into the current track, in seconds."""
        pass

    @position.setter
    @abstractmethod
    def position(self, seconds: float) -> None:
        pass

    @abstractmethod
    def play(self) -> None:
        """Start or resume playback of the current track."""
        pass

    @abstractmethod
    def pause(self) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @abstractmethod
    def get_track(self) -> Optional[TrackDescriptor]:
        """The current track, if any."""
        pass

    @abstractmethod
    def set_track(self, track: TrackDescriptor) -> None:
        """Replace the current track."""
        pass

    def add_state_listener(self, listener: StateListener) -> None:
        if listener not in self._state_listeners:
            self._state_listeners.append(listener)

    def remove_state_listener(self, listener: StateListener) -> None:
        if listener in self._state_listeners:
            self._state_listeners.remove(listener)

    def notify_state_changed(self) -> None:
        """Deliver a state-change notification to every listener."""
        for listener in list(self._state_listeners):
            listener()
