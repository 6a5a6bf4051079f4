"""Pytest configuration for test isolation.

Log output and the local SQLite database go to per-test temporary
locations, and the cached ``AppConfig`` singleton is reset so each test
sees the environment it sets up.  Backend access goes through
``tests.helpers.supabase_stub.StubSupabase``; no network is used.
"""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

import mymoney.config as config_module
from mymoney.database import DatabaseManager
from mymoney.logger import StructuredLogger
from mymoney.schema import initialize_schema
from mymoney.services import ServiceContainer, create_services
from mymoney.services.local_storage import LocalStorageService
from tests.helpers.supabase_stub import StubSupabase


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point configuration at the test's own temporary directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_FILE", os.fspath(tmp_path / "logs" / "mymoney.log"))
    monkeypatch.setenv("LOCAL_DB_PATH", os.fspath(tmp_path / "local.db"))
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "")
    monkeypatch.setattr(config_module, "_config_instance", None)


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger(name="mymoney.tests", stream=io.StringIO())


@pytest.fixture
def stub() -> StubSupabase:
    return StubSupabase()


def _open(client: StubSupabase | None, logger: StructuredLogger) -> DatabaseManager:
    manager = DatabaseManager(
        supabase_client=client, sqlite_path=Path(":memory:"), logger=logger,
    )
    initialize_schema(manager.sqlite, logger)
    return manager


@pytest.fixture
def db(stub: StubSupabase, logger: StructuredLogger) -> Iterator[DatabaseManager]:
    manager = _open(stub, logger)
    yield manager
    manager.close()


@pytest.fixture
def offline_db(logger: StructuredLogger) -> Iterator[DatabaseManager]:
    manager = _open(None, logger)
    yield manager
    manager.close()


@pytest.fixture
def services(db: DatabaseManager) -> ServiceContainer:
    return create_services(db)


@pytest.fixture
def offline_services(offline_db: DatabaseManager) -> ServiceContainer:
    return create_services(offline_db)


@pytest.fixture
def storage(db: DatabaseManager, logger: StructuredLogger) -> LocalStorageService:
    return LocalStorageService(db=db, logger=logger)
