"""Command line interface for tartil.

Checks and fetches the audio assets behind a playback request.
Emits JSONL events to stdout for desktop integration.
"""

import argparse
import asyncio
import json
import sys
import time

from tartil._logging import configure_logging, disable_logging, enable_debug_logging
from tartil.audio import AvailabilityChecker, DownloadCoordinator, FileDownloader
from tartil.config import get_settings
from tartil.data import NO_RECITER, load_catalog, load_locator
from tartil.exceptions import TartilError
from tartil.models import (
    AudioDownloadAmount,
    AudioRequest,
    RepeatAmount,
    RepeatInfo,
    VerseRef,
)


def emit(event: dict) -> None:
    print(json.dumps(event, ensure_ascii=False))
    sys.stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tartil", description="Quran recitation audio assets")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr")
    parser.add_argument("--quiet", action="store_true", help="Suppress all logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("status", "Report which assets a request still needs"),
        ("fetch", "Download the assets a request needs"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--reciter", required=True, help="Reciter name from the catalogue")
        sub.add_argument("--verse", required=True, help="Starting verse as SURAH:AYAH")
        sub.add_argument(
            "--amount",
            default=AudioDownloadAmount.PAGE.name,
            choices=[a.name for a in AudioDownloadAmount],
            help="Look-ahead extent to cover",
        )
        sub.add_argument(
            "--repeat-amount",
            default=RepeatAmount.NONE.name,
            choices=[a.name for a in RepeatAmount],
            help="Repeat extent to cover",
        )
        sub.add_argument("--repeat-count", type=int, default=0, help="Repeat count (-1 = forever)")

    return parser


def build_request(args: argparse.Namespace, catalog) -> AudioRequest:
    reciter_id = catalog.get_reciter_id_by_name(args.reciter)
    if reciter_id == NO_RECITER:
        raise TartilError(f"Unknown reciter: {args.reciter}")
    try:
        verse = VerseRef.parse(args.verse)
        repeat = RepeatInfo(
            repeat_amount=RepeatAmount[args.repeat_amount],
            repeat_count=args.repeat_count,
        )
    except ValueError as e:
        raise TartilError(f"Invalid request: {e}")
    return AudioRequest(
        reciter_id=reciter_id,
        current_ayah=verse,
        repeat=repeat,
        download_amount=AudioDownloadAmount[args.amount],
    )


def run_status(checker: AvailabilityChecker, request: AudioRequest) -> int:
    status = checker.check(request)
    emit({
        "type": "status",
        "request": request.to_string(),
        "has_timing_index": status.has_timing_index,
        "has_gapless_database": status.has_gapless_database,
        "has_all_files": status.has_all_files,
        "missing_files": [str(p) for p in status.missing_files],
        "complete": status.is_complete,
    })
    return 0


async def run_fetch(checker: AvailabilityChecker, request: AudioRequest) -> int:
    start_time = time.time()
    emit({"type": "job_start", "request": request.to_string()})

    async with FileDownloader() as downloader:
        coordinator = DownloadCoordinator(checker, downloader)
        coordinator.progress.subscribe(
            lambda _old, new: emit({"type": "progress", "percent": new})
        )
        ok = await coordinator.download(request)

    emit({
        "type": "job_done" if ok else "job_error",
        "request": request.to_string(),
        "seconds": round(time.time() - start_time, 2),
    })
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.quiet:
        disable_logging()
    elif args.verbose:
        enable_debug_logging()
    else:
        configure_logging()

    try:
        settings = get_settings()
        catalog = load_catalog(settings)
        locator = load_locator(settings)
        request = build_request(args, catalog)
    except TartilError as exc:
        emit({"type": "error", "message": str(exc)})
        return 2

    checker = AvailabilityChecker(catalog, locator)
    if args.command == "status":
        return run_status(checker, request)
    return asyncio.run(run_fetch(checker, request))


if __name__ == "__main__":
    raise SystemExit(main())
