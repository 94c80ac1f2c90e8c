"""
Audio playback modules for the tartil library.

This package contains the playback core:
- Asset availability checks and downloads
- Request building and track handoff
- Engine state reconciliation and the repeat toggle
- The AudioOrchestrator control surface tying them together
"""

from tartil.audio.observable import ObservableValue, ReadingPosition
from tartil.audio.engine import AudioEngine
from tartil.audio.errors import ErrorPresenter, LoggingErrorPresenter
from tartil.audio.paths import AudioFile, AudioPaths, get_download_range
from tartil.audio.availability import AvailabilityChecker
from tartil.audio.downloads import DownloadCoordinator, FileDownloader
from tartil.audio.requests import RequestBuilder, normalize_invocation
from tartil.audio.handoff import NullStreamingHandler, StreamingHandler, TrackHandoff
from tartil.audio.reconciler import PlaybackStateReconciler
from tartil.audio.repeat import RepeatController
from tartil.audio.orchestrator import DOWNLOAD_ERROR_MESSAGE, AudioOrchestrator

__all__ = [
    # State
    "ObservableValue",
    "ReadingPosition",
    # Collaborators
    "AudioEngine",
    "ErrorPresenter",
    "LoggingErrorPresenter",
    "StreamingHandler",
    "NullStreamingHandler",
    # Assets
    "AudioFile",
    "AudioPaths",
    "get_download_range",
    "AvailabilityChecker",
    "DownloadCoordinator",
    "FileDownloader",
    # Playback
    "RequestBuilder",
    "normalize_invocation",
    "TrackHandoff",
    "PlaybackStateReconciler",
    "RepeatController",
    "AudioOrchestrator",
    "DOWNLOAD_ERROR_MESSAGE",
]
