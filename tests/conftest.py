"""Pytest configuration and shared fixtures.

This module provides fixtures for testing shelfkeeper, including record
stores for every backend, catalogs, rosters and library services.
"""

from pathlib import Path
from typing import Generator

import pytest

from shelfkeeper.catalog import Catalog, ItemRecord
from shelfkeeper.config import reset_config
from shelfkeeper.roster import MemberRecord, Roster
from shelfkeeper.service import LibraryService, reset_service
from shelfkeeper.storage import (
    JsonRecordStore,
    MemoryRecordStore,
    RecordStore,
    SqliteRecordStore,
)


# ============================================================================
# Global State
# ============================================================================


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset the global config and service around each test."""
    reset_service()
    reset_config()
    yield
    reset_service()
    reset_config()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory for file-based stores."""
    return tmp_path / "library"


@pytest.fixture
def json_store(data_dir: Path) -> JsonRecordStore:
    """Create a JSON record store in a temporary directory."""
    return JsonRecordStore(data_dir)


@pytest.fixture
def sqlite_store(data_dir: Path) -> Generator[SqliteRecordStore, None, None]:
    """Create a SQLite record store in a temporary directory."""
    with SqliteRecordStore(data_dir) as store:
        yield store


@pytest.fixture
def memory_store() -> MemoryRecordStore:
    """Create an in-memory record store."""
    return MemoryRecordStore()


@pytest.fixture(params=["json", "sqlite", "memory"])
def store(request, data_dir: Path) -> Generator[RecordStore, None, None]:
    """Record store for each backend."""
    if request.param == "json":
        backend = JsonRecordStore(data_dir)
    elif request.param == "sqlite":
        backend = SqliteRecordStore(data_dir)
    else:
        backend = MemoryRecordStore()
    with backend as store:
        yield store


# ============================================================================
# Component Fixtures
# ============================================================================


@pytest.fixture
def catalog(memory_store: MemoryRecordStore) -> Catalog:
    """Create an empty catalog."""
    return Catalog(memory_store)


@pytest.fixture
def roster(memory_store: MemoryRecordStore) -> Roster:
    """Create an empty roster."""
    return Roster(memory_store)


@pytest.fixture
def service(json_store: JsonRecordStore) -> Generator[LibraryService, None, None]:
    """Create a library service backed by JSON files."""
    svc = LibraryService(json_store)
    yield svc
    svc.close()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_item_records() -> list[ItemRecord]:
    """Item records covering every loan state."""
    return [
        ItemRecord(title="Dune", author="Frank Herbert"),
        ItemRecord(title="Neuromancer", author="William Gibson", available=False),
        ItemRecord(
            title="Solaris",
            author="Stanisław Lem",
            available=False,
            waitlist=[3, 1, 2],
        ),
    ]


@pytest.fixture
def sample_member_records() -> list[MemberRecord]:
    """Member records, including a duplicate ID."""
    return [
        MemberRecord(id=1, name="Ada"),
        MemberRecord(id=2, name="Grace"),
        MemberRecord(id=1, name="Ada Again"),
    ]
