"""Show catalog client tests (stub transport)."""

from unittest.mock import patch

import httpx
import pybreaker
import pytest

from show_shaper.clients import ShowsClient
from show_shaper.core import DataSourceError
from show_shaper.core.config import Settings

from conftest import RAW_SHOWS, CatalogStub


def client_for(handler) -> ShowsClient:
    return ShowsClient(base_url="https://catalog.test/", transport=httpx.MockTransport(handler))


@pytest.mark.unit
def test_fetch_shows_requests_first_page(shows_client, catalog):
    assert shows_client.fetch_shows() == RAW_SHOWS

    request = catalog.requests[0]
    assert request.url.path == "/shows"
    assert request.url.params["page"] == "1"


@pytest.mark.unit
def test_http_error_raises_data_source_error():
    with pytest.raises(DataSourceError, match="503"):
        client_for(CatalogStub(status_code=503)).fetch_shows()


@pytest.mark.unit
def test_transport_error_raises_data_source_error():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DataSourceError, match="request failed"):
        client_for(unreachable).fetch_shows()


@pytest.mark.unit
def test_timeout_raises_data_source_error():
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DataSourceError):
        client_for(slow).fetch_shows()


@pytest.mark.unit
@pytest.mark.parametrize("payload", [{"shows": []}, "shows", 42])
def test_non_list_payload_raises_data_source_error(payload):
    with pytest.raises(DataSourceError, match="Expected a list"):
        client_for(CatalogStub(payload=payload)).fetch_shows()


@pytest.mark.unit
def test_invalid_json_raises_data_source_error():
    def garbled(request):
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(DataSourceError, match="invalid JSON"):
        client_for(garbled).fetch_shows()


@pytest.mark.unit
def test_from_settings():
    client = ShowsClient.from_settings(
        Settings(shows_api_url="https://shows.example/", shows_timeout=2.5)
    )

    assert client.base_url == "https://shows.example"
    assert client.timeout == 2.5
    client.close()


@pytest.mark.unit
def test_client_initializes_circuit_breaker(shows_client):
    assert isinstance(shows_client._breaker, pybreaker.CircuitBreaker)
    assert shows_client._breaker.name == "shows-http"
    assert shows_client._breaker.fail_max == 5


@pytest.mark.unit
def test_circuit_opens_after_repeated_failures():
    """Once open, calls fail fast without reaching the catalog."""
    catalog = CatalogStub(status_code=500)
    client = client_for(catalog)

    for _ in range(5):
        with pytest.raises(DataSourceError):
            client.fetch_shows()

    with pytest.raises(DataSourceError, match="circuit open"):
        client.fetch_shows()
    assert len(catalog.requests) == 5


@pytest.mark.unit
def test_breaker_state_change_is_logged(shows_client):
    listener = shows_client._breaker.listeners[0]

    with patch("show_shaper.clients.shows.logger") as mock_logger:
        listener.state_change(shows_client._breaker, "closed", "open")

    mock_logger.warning.assert_called_once()
    assert mock_logger.warning.call_args.args[0] == "breaker_state_change"
