"""
Test configuration and fixtures.
Every store writes under pytest's tmp_path; nothing touches the real data directory.
"""
import pytest
from fastapi.testclient import TestClient

from competitor_dashboard.db import build_stores
from competitor_dashboard.main import create_app


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def fallback_dir(tmp_path):
    return tmp_path / "fallback"


@pytest.fixture
def stores(data_dir, fallback_dir):
    return build_stores(data_dir, fallback_dir)


@pytest.fixture
def client(stores):
    with TestClient(create_app(stores)) as c:
        yield c
