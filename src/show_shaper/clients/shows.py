"""Show Catalog Client"""

import time
from typing import Any

import httpx
import pybreaker

from ..core import DataSourceError, get_logger
from ..core.config import Settings
from ..monitoring import metrics_collector

logger = get_logger(__name__)


class ShowsClient:
    """
    Client for the public TV show catalog with circuit breaker protection.
    Returns raw show objects; projection happens in the data service.
    """

    def __init__(
        self,
        base_url: str = "https://api.tvmaze.com",
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize catalog client with circuit breaker.

        Args:
            base_url: Catalog base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (mocked in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

        class BreakerListener(pybreaker.CircuitBreakerListener):
            """Listener for circuit breaker state changes."""

            def state_change(self, cb, old_state, new_state):
                logger.warning(
                    "breaker_state_change",
                    breaker=cb.name,
                    from_state=str(old_state),
                    to_state=str(new_state),
                )

        self._breaker = pybreaker.CircuitBreaker(
            fail_max=5,
            reset_timeout=30,
            name="shows-http",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", url=self.base_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShowsClient":
        return cls(base_url=settings.shows_api_url, timeout=settings.shows_timeout)

    def fetch_shows(self, page: int = 1) -> list[dict[str, Any]]:
        """
        Fetch one page of the show index.

        Raises:
            DataSourceError: On open circuit, transport or HTTP error, or a
                payload that is not a list
        """

        def _make_request() -> httpx.Response:
            response = self._client.get("/shows", params={"page": page})
            response.raise_for_status()
            return response

        start = time.perf_counter()
        try:
            response = self._breaker.call(_make_request)
            data = response.json()
        except pybreaker.CircuitBreakerError as e:
            self._record("circuit_open", start)
            logger.error("fetch_failed", error="Circuit breaker open - catalog unavailable")
            raise DataSourceError("Show catalog unavailable (circuit open)") from e
        except httpx.HTTPStatusError as e:
            self._record("http_error", start)
            logger.warning("fetch_http_error", status=e.response.status_code)
            raise DataSourceError(f"Show catalog returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._record("transport_error", start)
            logger.warning("fetch_transport_error", error=str(e))
            raise DataSourceError(f"Show catalog request failed: {e}") from e
        except ValueError as e:
            self._record("invalid_response", start)
            logger.warning("fetch_invalid_json", error=str(e))
            raise DataSourceError("Show catalog returned invalid JSON") from e

        if not isinstance(data, list):
            self._record("invalid_response", start)
            logger.error("invalid_response", type=type(data).__name__)
            raise DataSourceError(f"Expected a list of shows, got {type(data).__name__}")

        self._record("success", start)
        logger.debug("fetch_complete", page=page, shows=len(data))
        return data

    def _record(self, status: str, start: float) -> None:
        metrics_collector.record_data_fetch(status, time.perf_counter() - start)

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "ShowsClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
