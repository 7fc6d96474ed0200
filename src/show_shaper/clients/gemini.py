"""Gemini text-generation client"""

import time
from dataclasses import dataclass
from typing import Any

import google.generativeai as genai
import pybreaker
from google.api_core import exceptions as google_exceptions

from ..agents.translator import TextGenerator
from ..core import TranslatorError, get_logger
from ..core.config import Settings
from ..monitoring import metrics_collector

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters sent with every request"""

    temperature: float = 0.2
    max_output_tokens: int = 1024
    response_mime_type: str = "application/json"

    def to_sdk(self) -> genai.GenerationConfig:
        return genai.GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type=self.response_mime_type,
        )


class GeminiClient(TextGenerator):
    """
    Gemini ``generate_content`` wrapper.
    One request per call with a fixed timeout; no retries.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash-lite",
        generation: GenerationConfig | None = None,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Gemini API key; an empty key leaves the client unconfigured
            model: Model name
            generation: Sampling parameters
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.model = model
        self.generation = generation or GenerationConfig()
        self.timeout = timeout
        self._model: genai.GenerativeModel | None = None

        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(
                model_name=model,
                generation_config=self.generation.to_sdk(),
            )

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
            name="gemini-api",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", model=model, configured=self._model is not None)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            generation=GenerationConfig(
                temperature=settings.gemini_temperature,
                max_output_tokens=settings.gemini_max_tokens,
            ),
            timeout=settings.translator_timeout,
        )

    @property
    def configured(self) -> bool:
        return self._model is not None

    @staticmethod
    def build_contents(system_prompt: str, user_text: str) -> list[dict[str, Any]]:
        """Two user turns: the fixed instructions, then schema plus request."""
        return [
            {"role": "user", "parts": [system_prompt]},
            {"role": "user", "parts": [user_text]},
        ]

    def generate(self, system_prompt: str, user_text: str) -> str:
        """
        Send one generation request and return the first candidate's text.

        Raises:
            TranslatorError: On missing key, open circuit, timeout, API error,
                or a response without candidate text
        """
        if self._model is None:
            metrics_collector.record_translator_call(self.model, "unconfigured", 0.0)
            raise TranslatorError("Gemini API key is not configured")

        contents = self.build_contents(system_prompt, user_text)

        def _make_request() -> Any:
            return self._model.generate_content(contents, request_options={"timeout": self.timeout})

        start = time.perf_counter()
        try:
            response = self._breaker.call(_make_request)
        except pybreaker.CircuitBreakerError as e:
            self._record("circuit_open", start)
            logger.error("generate_failed", model=self.model, error="Circuit breaker open")
            raise TranslatorError("Gemini unavailable (circuit open)") from e
        except google_exceptions.DeadlineExceeded as e:
            self._record("timeout", start)
            logger.warning("generate_timeout", model=self.model, timeout=self.timeout)
            raise TranslatorError(f"Gemini request timed out after {self.timeout}s") from e
        except google_exceptions.GoogleAPICallError as e:
            self._record("api_error", start)
            logger.warning("generate_api_error", model=self.model, status=e.code, error=e.message)
            raise TranslatorError(f"Gemini returned {e.code}: {e.message}") from e
        except google_exceptions.GoogleAPIError as e:
            self._record("transport_error", start)
            logger.warning("generate_transport_error", model=self.model, error=str(e))
            raise TranslatorError(f"Gemini request failed: {e}") from e

        text = self.extract_text(response)
        if not text:
            self._record("empty", start)
            logger.warning("generate_empty", model=self.model)
            raise TranslatorError("Gemini response carried no candidate text")

        self._record("success", start)
        logger.debug("generate_complete", model=self.model, chars=len(text))
        return text

    @staticmethod
    def extract_text(response: Any) -> str | None:
        """First candidate's text, or None for blocked or empty responses."""
        try:
            text = response.text
        except (ValueError, AttributeError):
            return None
        return text if isinstance(text, str) else None

    def _record(self, status: str, start: float) -> None:
        metrics_collector.record_translator_call(self.model, status, time.perf_counter() - start)
