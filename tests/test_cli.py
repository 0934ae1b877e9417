"""Tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from smartsheet_typed import __main__ as cli
from smartsheet_typed.client import SmartsheetClient
from smartsheet_typed.config import get_settings
from smartsheet_typed.transport import LocalFileTransport


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SMARTSHEET_API_TOKEN", raising=False)
    monkeypatch.delenv("SMARTSHEET_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()


@pytest.fixture
def golden_client(monkeypatch: pytest.MonkeyPatch, golden_dir: Path) -> None:
    monkeypatch.setattr(
        cli,
        "SmartsheetClient",
        lambda: SmartsheetClient(transport=LocalFileTransport(golden_dir)),
    )


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "schema.json"
    path.write_text(
        json.dumps(
            {
                "project_id": {"title": "Project ID #", "type": "TEXT_NUMBER", "primary": True},
                "status": {
                    "title": "Status",
                    "type": "PICKLIST",
                    "options": ["Active", "Inactive"],
                },
            }
        )
    )
    return path


def run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


@pytest.mark.usefixtures("golden_client")
class TestCommands:
    def test_sheets(self, capsys: pytest.CaptureFixture[str]):
        assert run(["sheets"]) == 0
        out = capsys.readouterr().out
        assert "1001\tProjects" in out
        assert "1002\tBudget" in out

    def test_columns(self, capsys: pytest.CaptureFixture[str]):
        assert run(["columns", "1001"]) == 0
        out = capsys.readouterr().out
        assert "Projects (2 rows)" in out
        assert "Project ID #" in out

    def test_check_by_name(self, schema_file: Path, capsys: pytest.CaptureFixture[str]):
        assert run(["check", str(schema_file), "--name", "Projects"]) == 0
        out = capsys.readouterr().out
        assert "matches the schema" in out
        assert "2 row(s) decoded" in out

    def test_check_strict_fails(self, schema_file: Path):
        assert run(["check", str(schema_file), "--id", "1001", "--strict"]) == 1

    def test_check_unknown_sheet(self, schema_file: Path):
        assert run(["check", str(schema_file), "--name", "Archive"]) == 1


def test_missing_token_exits_with_error():
    assert run(["sheets"]) == 1
