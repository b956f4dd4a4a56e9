"""Shared fixtures: every test gets its own data file under tmp_path."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from string_analyzer.main import create_app
from string_analyzer.service import StringAnalyzerService
from string_analyzer.store import StringStore


@pytest.fixture
def data_file(tmp_path) -> str:
    return str(tmp_path / "data" / "strings.json")


@pytest.fixture
def store(data_file: str) -> StringStore:
    store = StringStore(data_file)
    store.initialize()
    return store


@pytest.fixture
def service(store: StringStore) -> StringAnalyzerService:
    return StringAnalyzerService(store)


@pytest.fixture
def client(data_file: str):
    app = create_app(data_file)
    with TestClient(app) as test_client:
        yield test_client
