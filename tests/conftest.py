"""Pytest configuration and fixtures."""

import copy
import os
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from show_shaper.agents import CommandTranslator
from show_shaper.clients import ShowsClient
from show_shaper.core import create_container
from show_shaper.core.config import Settings
from show_shaper.core.json import safe_json_dumps
from show_shaper.handlers import DesignService
from show_shaper.services import InMemoryDesignStore


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["SHAPER_LOG_LEVEL"] = "DEBUG"
    os.environ["GEMINI_API_KEY"] = "test-api-key"


# ============================================================================
# Design Fixtures
# ============================================================================

STARTER: dict[str, Any] = {
    "styles": {"theme": "light", "fontScale": 1, "spacing": "normal"},
    "layout": {"columns": 1, "order": ["table1", "chart1", "kpi1"]},
    "components": [
        {"id": "table1", "type": "table", "props": {"sortBy": "rating", "limit": 50}},
        {"id": "chart1", "type": "chart", "props": {"kind": "bar", "groupBy": "genres"}},
        {"id": "kpi1", "type": "kpi", "props": {"label": "Total Shows"}},
    ],
}


def make_design(*ids: str, component_type: str = "kpi", **styles: Any) -> dict[str, Any]:
    """Plain design dict with one component per id, rendered in id order."""
    return {
        "styles": {"theme": "light", "fontScale": 1, **styles},
        "layout": {"columns": 1, "order": list(ids)},
        "components": [{"id": i, "type": component_type, "props": {}} for i in ids],
    }


@pytest.fixture
def starter() -> dict[str, Any]:
    """Starter dashboard: table1, chart1, kpi1."""
    return copy.deepcopy(STARTER)


@pytest.fixture
def table_only() -> dict[str, Any]:
    return {
        "styles": {"theme": "light", "fontScale": 1},
        "layout": {"columns": 1, "order": ["table1"]},
        "components": [{"id": "table1", "type": "table", "props": {"sortBy": "rating", "limit": 50}}],
    }


@pytest.fixture
def table_and_chart() -> dict[str, Any]:
    return {
        "styles": {"theme": "light", "fontScale": 1},
        "layout": {"columns": 2, "order": ["table1", "chart1"]},
        "components": [
            {"id": "table1", "type": "table", "props": {"sortBy": "rating"}},
            {"id": "chart1", "type": "chart", "props": {"kind": "bar"}},
        ],
    }


# ============================================================================
# Translator Fixtures
# ============================================================================

def commands_text(*commands: dict[str, Any]) -> str:
    return safe_json_dumps({"commands": list(commands)})


@pytest.fixture
def mock_generator():
    """Mock text generator answering with a single dark-theme command."""
    mock = MagicMock()
    mock.generate.return_value = commands_text(
        {"op": "set_style", "path": "styles", "value": {"theme": "dark"}}
    )
    return mock


@pytest.fixture
def translator(mock_generator):
    """Translator with mocked generator and no cache."""
    return CommandTranslator(generator=mock_generator, enable_cache=False)


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def store():
    return InMemoryDesignStore()


@pytest.fixture
def service(store, translator):
    return DesignService(store=store, translator=translator, history_cap=10)


# ============================================================================
# Show Catalog Fixtures
# ============================================================================

RAW_SHOWS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Under the Dome",
        "genres": ["Drama", "Science-Fiction", "Thriller"],
        "rating": {"average": 6.5},
        "premiered": "2013-06-24",
        "image": {"medium": "https://static.example/1.jpg", "original": "https://static.example/1o.jpg"},
        "language": "English",
    },
    {
        "id": 2,
        "name": "Person of Interest",
        "genres": ["Action", "Crime", "Science-Fiction"],
        "rating": {"average": 8.8},
        "premiered": "2011-09-22",
        "image": None,
    },
    {
        "id": 3,
        "name": "Bitten",
        "genres": ["Drama"],
        "rating": {"average": None},
        "premiered": None,
    },
]


class CatalogStub:
    """httpx transport handler serving a canned show index."""

    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self.payload = copy.deepcopy(RAW_SHOWS) if payload is None else payload
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def catalog():
    return CatalogStub()


@pytest.fixture
def shows_client(catalog):
    """Show catalog client backed by the stub transport."""
    with ShowsClient(base_url="https://catalog.test", transport=httpx.MockTransport(catalog)) as client:
        yield client


@pytest.fixture
def test_settings():
    return Settings(gemini_api_key="test-api-key", enable_cache=False)


@pytest.fixture
def di_container(test_settings, mock_generator, shows_client):
    """Container with in-memory store, mocked generator and stubbed catalog."""
    return create_container(
        test_settings,
        store=InMemoryDesignStore(),
        generator=mock_generator,
        shows_client=shows_client,
    )


@pytest.fixture
def client(di_container):
    """HTTP client against a fresh app."""
    from show_shaper.main import create_app

    with TestClient(create_app(di_container)) as test_client:
        yield test_client


@pytest.fixture
def user_headers():
    return {"x-user-id": "user-1"}
