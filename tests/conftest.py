from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import pytest

from services.api.queries import BRAND_QUERY, CHART_QUERY, STATE_QUERY, STATION_QUERY, YEAR_QUERY
from utils.config import Settings
from utils.db import StoreError

INDEX_HTML = "<!DOCTYPE html><html><body>dashboard</body></html>"


class FakeDatabase:
    """In-memory stand-in for utils.db.Database, keyed by SQL statement."""

    def __init__(self, rows: Optional[dict[str, list[dict[str, Any]]]] = None, fail_on: Optional[str] = None):
        self.rows = rows or {}
        self.fail_on = fail_on
        self.queries: list[str] = []
        self.opened = False
        self.closed = False

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.closed = True

    async def fetch_all(self, query: str) -> list[dict[str, Any]]:
        self.queries.append(query)
        if self.fail_on is not None and (self.fail_on == "*" or self.fail_on == query):
            raise StoreError("connection refused")
        return [dict(row) for row in self.rows.get(query, [])]


def scenario_rows() -> dict[str, list[dict[str, Any]]]:
    """Rows the store returns for registrations
    ("ca ", "Tesla", 2024-03-15, electric), ("CA", "tesla", 2024-03-20, electric)
    and ("TX", "Ford", 2023-11-01, diesel), plus two charging stations.
    """
    return {
        CHART_QUERY: [{"state": "CA", "brand": "TESLA", "month": "2024-03", "registrations": 2}],
        BRAND_QUERY: [{"brand": "TESLA"}],
        STATE_QUERY: [{"state": "CA"}],
        YEAR_QUERY: [{"year": "2024"}],
        STATION_QUERY: [
            {"name": "Downtown Supercharger", "latitude": Decimal("34.0522"), "longitude": Decimal("-118.2437"), "state": "CA"},
            {"name": "Lakeside Plaza", "latitude": 30.2672, "longitude": -97.7431, "state": "TX"},
        ],
    }


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase(scenario_rows())


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (tmp_path / "app.js").write_text("console.log('ev');", encoding="utf-8")
    return tmp_path


@pytest.fixture
def test_settings(static_dir: Path) -> Settings:
    return Settings(STATIC_DIR=str(static_dir), ENVIRONMENT="development")
