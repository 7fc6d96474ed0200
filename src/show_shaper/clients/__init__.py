"""External service clients."""

from .gemini import GeminiClient, GenerationConfig
from .shows import ShowsClient

__all__ = ["GeminiClient", "GenerationConfig", "ShowsClient"]
