"""Shared pytest fixtures for Deskboard tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from fastapi.testclient import TestClient
from PyQt6.QtWidgets import QApplication

from deskboard.api.app import create_app
from deskboard.client import build_stores
from deskboard.client.remote import ApiClient
from deskboard.client.snapshot import MemorySnapshotStore
from deskboard.database.db import configure_engine, init_db
from deskboard.settings import Settings
from deskboard.timer.engine import PomodoroTimer

from helpers import SwitchableSession

API_BASE = "http://testserver/api"


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def timer(qapp):
    """Fresh PomodoroTimer with the default 25/5 durations."""
    return PomodoroTimer(parent=None)


@pytest.fixture
def api():
    """TestClient for the REST API (database already configured)."""
    return TestClient(create_app(init_database=False))


@pytest.fixture
def network(api):
    """HTTP session that can be switched offline mid-test."""
    return SwitchableSession(api)


@pytest.fixture
def api_client(network):
    return ApiClient(API_BASE, session=network)


@pytest.fixture
def snapshots():
    return MemorySnapshotStore()


@pytest.fixture
def stores(network, snapshots):
    """Stores wired to the test API; flip ``network.online`` to simulate outages."""
    settings = Settings(api_base_url=API_BASE)
    return build_stores(settings, session=network, snapshots=snapshots)


@pytest.fixture
def offline_stores(network, snapshots):
    """Stores whose first load can never reach the API."""
    network.online = False
    settings = Settings(api_base_url=API_BASE)
    return build_stores(settings, session=network, snapshots=snapshots)
