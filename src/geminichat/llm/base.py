from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .models import GenerateResult, Turn


class GenerativeClient(ABC):
    """Abstract base class for generative-language API clients.

    This module hides the design decision of how the remote API is reached.
    Implementations must handle provider-specific details like:
    - URL layout and authentication
    - Request/response format conversion
    - Classifying failures into the ``geminichat.errors`` taxonomy

    Credentials and model ids are passed per call so the caller can read
    them from settings at request time.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            models = await client.list_models(api_key)
    """

    @abstractmethod
    async def list_models(self, api_key: str) -> list[str]:
        """List model ids that support content generation.

        Args:
            api_key: Provider API key

        Returns:
            Sorted, de-duplicated model ids without the ``models/`` prefix

        Raises:
            MissingCredentialError: If api_key is blank
            NetworkError: On I/O faults and timeouts
            RemoteError: On non-2xx responses or an empty body
            ParseError: If the body is not a well-formed catalog
        """

    @abstractmethod
    async def generate_content(
        self,
        api_key: str,
        model_id: str | None,
        user_text: str,
        history: Sequence[Turn] = (),
    ) -> GenerateResult:
        """Send prior turns plus a new user message and return the reply.

        Args:
            api_key: Provider API key
            model_id: Model to use (blank uses the default model)
            user_text: The new user message
            history: Prior turns, sent as-is before the new message

        Returns:
            GenerateResult with the reply text and reply turn

        Raises:
            ChatError: One of the taxonomy subclasses describing the failure
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "GenerativeClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
