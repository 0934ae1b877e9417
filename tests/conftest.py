"""Shared test fixtures for smartsheet_typed."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from smartsheet_typed.client import SmartsheetClient
from smartsheet_typed.columns import ColumnType
from smartsheet_typed.schema import ColumnDefinition, define_column
from smartsheet_typed.transport import Body, LocalFileTransport, Params

GOLDEN_DIR = Path(__file__).parent / "golden"


class MockTransport(LocalFileTransport):
    """Golden-file transport that records calls and answers writes from a table."""

    def __init__(
        self,
        golden_dir: Path,
        responses: dict[tuple[str, str], Any] | None = None,
    ) -> None:
        super().__init__(golden_dir)
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, str, Any, Params | None]] = []
        self.closed = False

    async def get(self, path: str, params: Params | None = None) -> Any:
        self.calls.append(("GET", path, None, params))
        if ("GET", path) in self.responses:
            return self.responses[("GET", path)]
        return await super().get(path, params)

    async def post(self, path: str, body: Body) -> Any:
        self.calls.append(("POST", path, body, None))
        return self.responses[("POST", path)]

    async def put(self, path: str, body: Body, params: Params | None = None) -> Any:
        self.calls.append(("PUT", path, body, params))
        return self.responses[("PUT", path)]

    async def close(self) -> None:
        self.closed = True

    def calls_for(self, method: str) -> list[tuple[str, str, Any, Params | None]]:
        return [call for call in self.calls if call[0] == method]


@pytest.fixture
def golden_dir() -> Path:
    return GOLDEN_DIR


@pytest.fixture
def local_transport() -> LocalFileTransport:
    return LocalFileTransport(GOLDEN_DIR)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport(GOLDEN_DIR)


@pytest.fixture
def client(mock_transport: MockTransport) -> SmartsheetClient:
    return SmartsheetClient(transport=mock_transport)


@pytest.fixture
def projects_schema() -> dict[str, ColumnDefinition]:
    """Schema matching the golden "Projects" sheet (without its Notes column)."""
    return {
        "project_id": define_column("Project ID #", ColumnType.TEXT_NUMBER, primary=True),
        "status": define_column(
            "Status", ColumnType.PICKLIST, options=["Active", "Inactive"]
        ),
        "due": define_column("Due", ColumnType.DATE),
        "done": define_column("Done", ColumnType.CHECKBOX),
    }
