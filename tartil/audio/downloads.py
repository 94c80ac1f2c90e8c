"""
Audio asset downloads.

FileDownloader streams single files over HTTP with httpx; the
DownloadCoordinator decides which assets a request still needs and fetches
them in order: verse-timing index, gapless database, audio files.
"""

import os
import shutil
import time
import zipfile
from pathlib import Path
from typing import Callable, Optional

import httpx

from tartil._logging import (
    get_logger,
    log_download_complete,
    log_download_failed,
    log_download_start,
)
from tartil.audio.availability import AvailabilityChecker, is_complete_file
from tartil.audio.observable import ObservableValue
from tartil.audio.paths import AudioFile, get_download_range
from tartil.config import TartilSettings, get_settings
from tartil.exceptions import AudioDownloadError, ReciterNotFoundError
from tartil.models import AudioRequest, Reciter

logger = get_logger("tartil.audio.downloads")

ByteProgress = Callable[[int, Optional[int]], None]
PercentProgress = Callable[[int], None]


class FileDownloader:
    """
    Downloads files over HTTP.

    Each file is streamed into ``<name>.part`` and renamed into place only
    after the byte count matches the server's Content-Length, so a file at
    its final path is always complete.

    Args:
        client: httpx client to use (created lazily when omitted)
        settings: Settings providing timeouts and chunk size
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: TartilSettings | None = None,
    ):
        self._settings = settings or get_settings()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    self._settings.http_timeout_seconds,
                    connect=self._settings.http_connect_timeout_seconds,
                ),
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this downloader created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FileDownloader":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def download_file(
        self,
        url: str,
        destination: Path,
        on_progress: ByteProgress | None = None,
    ) -> bool:
        """
        Download one file.

        Args:
            url: Remote file
            destination: Final local path
            on_progress: Called with (bytes received, total bytes or None)

        Returns:
            True on success. On failure nothing is left at ``destination``.
        """
        destination = Path(destination)
        part = destination.with_name(destination.name + ".part")
        log_download_start(url, str(destination))
        started = time.monotonic()

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            async with self._get_client().stream("GET", url) as response:
                response.raise_for_status()
                total = _content_length(response)
                received = 0
                with open(part, "wb") as f:
                    async for chunk in response.aiter_bytes(self._settings.download_chunk_size):
                        f.write(chunk)
                        received += len(chunk)
                        if on_progress:
                            on_progress(response.num_bytes_downloaded, total)
                downloaded = response.num_bytes_downloaded

            if received == 0:
                raise AudioDownloadError("Empty response", url=url)
            # Content-Length counts the encoded body
            if total is not None and downloaded != total:
                raise AudioDownloadError(
                    "Incomplete download",
                    url=url,
                    context={"expected": total, "received": downloaded},
                )
            os.replace(part, destination)
        except (httpx.HTTPError, OSError, AudioDownloadError) as e:
            part.unlink(missing_ok=True)
            log_download_failed(url, str(e))
            return False

        log_download_complete(str(destination), received, time.monotonic() - started)
        return True

    async def download_batch(
        self,
        files: list[AudioFile],
        on_progress: PercentProgress | None = None,
    ) -> bool:
        """
        Download files one after another, skipping complete ones.

        Stops at the first failure.

        Args:
            files: Files to fetch
            on_progress: Called with the overall percentage (0-100)

        Returns:
            True if every file is present afterwards
        """
        count = len(files)
        for index, audio_file in enumerate(files):
            if is_complete_file(audio_file.path):
                continue

            def file_progress(received: int, total: Optional[int], index=index) -> None:
                if on_progress and total:
                    on_progress(int((index + min(received / total, 1.0)) * 100 / count))

            if not await self.download_file(audio_file.url, audio_file.path, file_progress):
                return False
            if on_progress:
                on_progress(int((index + 1) * 100 / count))

        if on_progress:
            on_progress(100)
        return True


def _content_length(response: httpx.Response) -> Optional[int]:
    raw = response.headers.get("Content-Length")
    return int(raw) if raw and raw.isdigit() else None


def extract_database(archive_path: Path, destination: Path) -> None:
    """
    Extract the first ``.db`` member of a zip archive to ``destination``.

    Raises:
        AudioDownloadError: If the archive is unreadable, holds no database or
            cannot be written out
    """
    part = destination.with_name(destination.name + ".part")
    try:
        with zipfile.ZipFile(archive_path) as zf:
            members = [m for m in zf.infolist() if m.filename.endswith(".db")]
            if not members:
                raise AudioDownloadError("Archive contains no database", destination=str(destination))
            with zf.open(members[0]) as src, open(part, "wb") as dst:
                shutil.copyfileobj(src, dst)
            os.replace(part, destination)
    except zipfile.BadZipFile as e:
        raise AudioDownloadError(f"Corrupt archive: {e}", destination=str(destination)) from e
    except OSError as e:
        part.unlink(missing_ok=True)
        raise AudioDownloadError(f"Cannot extract database: {e}", destination=str(destination)) from e


class DownloadCoordinator:
    """
    Fetches the minimal set of assets needed to play a request.

    Steps run in order and the first failure aborts the rest:

    1. verse-timing index, when missing
    2. gapless database, when the reciter is gapless and the request seeks
       inside surah files
    3. missing audio files (surah files for gapless reciters, verse files
       otherwise)

    Only one download runs at a time; ``download`` returns False without
    doing anything while another is in flight.

    Args:
        checker: Availability checker for the request
        downloader: HTTP file downloader
    """

    def __init__(self, checker: AvailabilityChecker, downloader: FileDownloader):
        self._checker = checker
        self._downloader = downloader
        self._paths = checker.paths
        self.is_downloading: ObservableValue[bool] = ObservableValue(False, "is_downloading_audio")
        self.progress: ObservableValue[int] = ObservableValue(0, "audio_download_progress")

    @property
    def checker(self) -> AvailabilityChecker:
        return self._checker

    async def download(self, request: AudioRequest) -> bool:
        """
        Download whatever a request is missing.

        Args:
            request: The request to satisfy

        Returns:
            True if every asset is present afterwards
        """
        if self.is_downloading.value:
            logger.info(f"Download already in progress, ignoring request {request}")
            return False

        self.is_downloading.value = True
        self.progress.value = 0
        try:
            return await self._download(request)
        finally:
            self.is_downloading.value = False

    async def _download(self, request: AudioRequest) -> bool:
        try:
            reciter = self._checker.reciter_for(request)
        except ReciterNotFoundError as e:
            log_download_failed(str(request), str(e))
            return False

        result = True
        if not self._checker.has_timing_index():
            result = await self.download_timing_index()

        if result and self._checker.should_download_gapless_database(request):
            result = await self.download_gapless_database(reciter)

        if result and not self._checker.have_all_files(request):
            try:
                self._paths.reciter_root(reciter).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                log_download_failed(reciter.server_url, str(e))
                return False

            if reciter.is_gapless:
                result = await self.download_gapless_range(request)
            else:
                result = await self.download_range(request)

        if result:
            self.progress.value = 100
        return result

    async def download_timing_index(self) -> bool:
        url = self._paths.timing_index_url
        destination = self._paths.timing_index_path
        if not url.lower().endswith(".zip"):
            return await self._downloader.download_file(url, destination, self._byte_progress)

        archive = destination.with_name(destination.name + ".zip")
        if not await self._downloader.download_file(url, archive, self._byte_progress):
            return False
        try:
            extract_database(archive, destination)
        except AudioDownloadError as e:
            log_download_failed(url, str(e))
            return False
        finally:
            archive.unlink(missing_ok=True)
        return True

    async def download_gapless_database(self, reciter: Reciter) -> bool:
        destination = self._paths.gapless_database_path(reciter)
        if destination is None or not reciter.gapless_database_url:
            return False
        return await self._downloader.download_file(
            reciter.gapless_database_url, destination, self._byte_progress
        )

    async def download_gapless_range(self, request: AudioRequest) -> bool:
        """Fetch the surah files spanned by a gapless request."""
        missing = self._checker.missing_files(request)
        logger.info(
            f"Downloading {len(missing)} surah file(s) for range "
            f"{get_download_range(request, self._checker.locator)}"
        )
        return await self._downloader.download_batch(missing, self._set_progress)

    async def download_range(self, request: AudioRequest) -> bool:
        """Fetch the verse files of a per-verse request."""
        missing = self._checker.missing_files(request)
        logger.info(f"Downloading {len(missing)} verse file(s) for {request.current_ayah}")
        return await self._downloader.download_batch(missing, self._set_progress)

    def _byte_progress(self, received: int, total: Optional[int]) -> None:
        if total:
            self._set_progress(int(min(received / total, 1.0) * 100))

    def _set_progress(self, percent: int) -> None:
        self.progress.value = max(0, min(percent, 100))
