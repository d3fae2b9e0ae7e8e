from typing import Any

from .base import GenerativeClient
from .providers import GeminiClient


def create_client(provider: str = "gemini", **config: Any) -> GenerativeClient:
    """Create a generative-language API client.

    This factory function hides the instantiation logic for different providers.
    The API key is not part of the configuration: it is passed per request.

    Args:
        provider: Provider type (only 'gemini' is supported)
        **config: Provider-specific configuration
            For Gemini:
                - base_url: str (default: 'https://generativelanguage.googleapis.com/v1beta')
                - default_model: str (default: 'gemini-2.5-flash')
                - timeout: httpx.Timeout (connect/write 30s, read 90s)
                - transport: httpx.AsyncBaseTransport | None

    Returns:
        Initialized client instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> client = create_client("gemini")
        >>> client = create_client("gemini", base_url="http://localhost:8080/v1beta")
    """
    if provider.lower() == "gemini":
        return GeminiClient(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
