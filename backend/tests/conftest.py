"""Shared pytest fixtures and configuration."""

import os
import sys
import pytest

# Add parent directory to path so we can import shared modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from shared.exceptions import DatabaseError  # noqa: E402


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Clean environment variables before each test."""
    # Clear any existing Supabase settings
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY_PARAM", raising=False)
    monkeypatch.delenv("SUPABASE_TIMEOUT", raising=False)
    monkeypatch.delenv("WARRIORS_TABLE", raising=False)


class FakeWarriorsClient:
    """In-memory stand-in for SupabaseClient over a list of warrior rows."""

    def __init__(self, rows=None, fail_on=None):
        self.rows = rows or []
        self.fail_on = fail_on
        self.calls = []

    def _matching(self, filters):
        filters = filters or {}
        return [
            row for row in self.rows
            if all(row.get(column) == value for column, value in filters.items())
        ]

    def _record(self, name):
        self.calls.append(name)
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise DatabaseError("simulated failure", status_code=503, detail="relation busy")

    def count(self, table, filters=None):
        self._record(("count", table, tuple(sorted((filters or {}).items()))))
        return len(self._matching(filters))

    def select(self, table, columns, filters=None, order=None):
        self._record(("select", table, columns))
        return [{columns: row.get(columns)} for row in self._matching(filters)]


@pytest.fixture
def warriors():
    """Three active warriors (alive, alive, dead) and two inactive."""
    return [
        {"is_active": True, "status": "alive"},
        {"is_active": True, "status": "alive"},
        {"is_active": True, "status": "dead"},
        {"is_active": False, "status": "alive"},
        {"is_active": False, "status": None},
    ]


@pytest.fixture
def fake_client_factory():
    """Return a factory building FakeWarriorsClient instances."""
    return FakeWarriorsClient


# Mark all tests in tests/ as unit tests by default
def pytest_collection_modifyitems(items):
    """Automatically mark tests based on location."""
    for item in items:
        # Add 'unit' marker to all tests by default
        if "integration" not in item.keywords and "slow" not in item.keywords:
            item.add_marker(pytest.mark.unit)
