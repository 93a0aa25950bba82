"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Any, List

from factorymatch.database import init_database
from storage.repositories.factories import FactoryRepository


def make_row(id: int, **fields) -> Dict[str, Any]:
    """Factory row as returned by the repository, approved unless overridden."""
    row = {
        "id": id,
        "name": f"Factory {id}",
        "email": None,
        "phone": None,
        "country": None,
        "city": None,
        "industry": [],
        "materials": [],
        "capabilities": None,
        "notes": None,
        "scale": None,
        "approved": True,
        "created_at": datetime(2024, 1, 1) + timedelta(days=id),
    }
    row.update(fields)
    return row


@pytest.fixture
def aluminum_invention() -> Dict[str, Any]:
    """Arabic intake: aluminum parts made by injection."""
    return {
        "name": "قطع غيار",
        "description": "نحتاج تصنيع قطع من الألمنيوم بالحقن",
        "type": "",
        "country": "",
        "materials": [],
    }


@pytest.fixture
def metal_factory_row() -> Dict[str, Any]:
    """Approved metal factory with injection and aluminum capabilities."""
    return make_row(
        1,
        name="مصنع الدلتا",
        industry=["metal"],
        capabilities="خط حقن وتشكيل ألمنيوم",
    )


@pytest.fixture
def unrelated_rows() -> List[Dict[str, Any]]:
    """Approved factories with nothing in common with a generic query."""
    return [make_row(i, name=f"Workshop {i}", industry=["misc"]) for i in range(1, 5)]


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Initialized temporary SQLite database."""
    path = tmp_path / "factories.db"
    init_database(path)
    return path


@pytest.fixture
def repository(db_path) -> FactoryRepository:
    return FactoryRepository(db_path)


class RecordingRepository:
    """In-memory stand-in for FactoryRepository that records fetch arguments."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = rows
        self.fetch_calls: List[Dict[str, Any]] = []
        self.deleted: List[Any] = []

    def fetch_all(self, approved=None, newest_first=False):
        self.fetch_calls.append({"approved": approved, "newest_first": newest_first})
        rows = [r for r in self.rows if approved is None or r.get("approved") == approved]
        if newest_first:
            rows = sorted(rows, key=lambda r: r["created_at"], reverse=True)
        return rows

    def delete_factories(self, ids):
        self.deleted.extend(ids)
        before = len(self.rows)
        self.rows = [r for r in self.rows if r["id"] not in ids]
        return before - len(self.rows)


@pytest.fixture
def recording_repository():
    return RecordingRepository
