from __future__ import annotations

import json
from pathlib import Path

import pytest

from tartil._logging import disable_logging
from tartil.cli import main
from tartil.config import reset_settings


@pytest.fixture
def configured(tmp_path: Path, monkeypatch, verse_reciter):
    reciters = tmp_path / "reciters.json"
    reciters.write_text(json.dumps([verse_reciter.model_dump()]), encoding="utf-8")
    pages = tmp_path / "pages.csv"
    pages.write_text("page,sura_id,index\n1,1,1\n2,2,1\n3,2,6\n", encoding="utf-8")

    monkeypatch.setenv("TARTIL_RECITERS_FILE", str(reciters))
    monkeypatch.setenv("TARTIL_PAGE_TABLE_FILE", str(pages))
    monkeypatch.setenv("TARTIL_AUDIO_ROOT", str(tmp_path / "audio"))
    reset_settings()
    yield tmp_path
    reset_settings()
    disable_logging()


def read_events(capsys) -> list[dict]:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines()]


def test_status_lists_missing_files(configured, capsys) -> None:
    assert main(["status", "--reciter", "minshawi murattal", "--verse", "1:1"]) == 0

    [event] = read_events(capsys)
    assert event["type"] == "status"
    assert event["request"].startswith("local://0/?currentAyah=1:1")
    assert not event["complete"]
    assert len(event["missing_files"]) == 7


def test_unknown_reciter(configured, capsys) -> None:
    assert main(["--quiet", "status", "--reciter", "Nobody", "--verse", "1:1"]) == 2

    [event] = read_events(capsys)
    assert event["type"] == "error"


def test_bad_verse(configured, capsys) -> None:
    assert main(["--verbose", "fetch", "--reciter", "Minshawi Murattal", "--verse", "1:99x"]) == 2
    assert read_events(capsys)[0]["type"] == "error"
