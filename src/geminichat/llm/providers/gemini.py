"""Google Gemini REST client.

Talks to the Generative Language v1beta REST API directly with httpx so that
every response shape (candidates, blocked prompt, error body) can be mapped to
its own error class.
Reference: https://ai.google.dev/api/generate-content

Note: the API key travels as the ``key`` query parameter. Log lines use the
request path only so the key never reaches the logs.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ...errors import (
    BlockedError,
    EmptyReplyError,
    MalformedReplyError,
    MissingCredentialError,
    NetworkError,
    ParseError,
    RemoteError,
)
from ..base import GenerativeClient
from ..models import GenerateResult, Part, Role, Turn

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL_ID = "gemini-2.5-flash"
MODEL_NAME_PREFIX = "models/"
GENERATE_CONTENT_METHOD = "generateContent"

# Generation can take a while, so reads get a longer budget than connect/write
DEFAULT_TIMEOUT = httpx.Timeout(connect=30.0, read=90.0, write=30.0, pool=30.0)


def _describe(exc: Exception) -> str:
    # httpx timeouts often carry an empty message
    return str(exc) or type(exc).__name__


def extract_error_message(body: str | None) -> str | None:
    """Pull ``error.message`` out of an error body, if there is one.

    Failing to parse is not an error: the caller falls back to a coarse message.
    """
    if not body:
        return None
    try:
        message = json.loads(body)["error"]["message"]
    except (ValueError, KeyError, TypeError) as e:
        logger.debug("Could not parse error response body as JSON: %s", e)
        return None
    if isinstance(message, str) and message:
        return message
    return None


class GeminiClient(GenerativeClient):
    """Google Gemini REST client implementation.

    Hidden design decisions:
    - Endpoint layout (model id as path segment, key as query parameter)
    - Connect/write/read timeouts
    - Mapping of response shapes onto the error taxonomy
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        default_model: str = DEFAULT_MODEL_ID,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any
    ):
        """Initialize the Gemini client.

        Args:
            base_url: API root, without a trailing ``/models``
            default_model: Model used when a request names none
            timeout: httpx timeout configuration
            transport: Optional httpx transport (used by tests to fake the API)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._default_model = default_model
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            **client_kwargs
        )
        logger.debug("GeminiClient initialized for %s", base_url)

    @property
    def default_model(self) -> str:
        """Get the default model id."""
        return self._default_model

    @property
    def timeout(self) -> httpx.Timeout:
        """Get the timeout configuration of the underlying client."""
        return self._client.timeout

    async def list_models(self, api_key: str) -> list[str]:
        """List model ids that support generateContent, sorted."""
        if not api_key or not api_key.strip():
            logger.warning("listModels called without API key.")
            raise MissingCredentialError()

        logger.info("Attempting to list models from Gemini API.")
        try:
            response = await self._client.get("/models", params={"key": api_key})
        except httpx.RequestError as e:
            logger.error("Network error while fetching models: %s", _describe(e))
            raise NetworkError(f"Network error while fetching models: {_describe(e)}") from e

        body = response.text
        if not response.is_success or not body:
            raise self._remote_error("Error fetching models", response.status_code, body)

        try:
            payload = json.loads(body)
        except ValueError as e:
            logger.warning("Error parsing models response: %s", e)
            raise ParseError(f"Error parsing models response: {e}", body) from e

        model_ids = self._parse_catalog(payload, body)
        logger.info("Found %d usable models: %s", len(model_ids), model_ids)
        return model_ids

    def _parse_catalog(self, payload: Any, body: str) -> list[str]:
        """Filter the catalog to generateContent-capable models and strip prefixes."""
        if not isinstance(payload, dict):
            raise ParseError("Error parsing models response: expected a JSON object", body)

        models = payload.get("models") or []
        if not isinstance(models, list):
            raise ParseError("Error parsing models response: 'models' is not a list", body)

        model_ids: set[str] = set()
        for entry in models:
            if not isinstance(entry, dict):
                raise ParseError("Error parsing models response: model entry is not an object", body)
            methods = entry.get("supportedGenerationMethods") or []
            if not isinstance(methods, list) or GENERATE_CONTENT_METHOD not in methods:
                continue
            name = entry.get("name")
            if not isinstance(name, str):
                raise ParseError("Error parsing models response: model entry has no name", body)
            if name.startswith(MODEL_NAME_PREFIX):
                model_ids.add(name[len(MODEL_NAME_PREFIX):])

        return sorted(model_ids)

    async def generate_content(
        self,
        api_key: str,
        model_id: str | None,
        user_text: str,
        history: Sequence[Turn] = (),
    ) -> GenerateResult:
        """Send history plus one new user turn to generateContent."""
        if not api_key or not api_key.strip():
            raise MissingCredentialError()

        effective_model = model_id.strip() if model_id and model_id.strip() else self._default_model
        contents = [turn.to_wire() for turn in history]
        contents.append(Turn.user(user_text).to_wire())
        path = f"/models/{effective_model}:{GENERATE_CONTENT_METHOD}"

        logger.info("Generating content with model: %s", effective_model)
        logger.debug("POST %s with %d content entries", path, len(contents))
        try:
            response = await self._client.post(
                path,
                params={"key": api_key},
                json={"contents": contents},
            )
        except httpx.RequestError as e:
            logger.error("Network error during content generation: %s", _describe(e))
            raise NetworkError(f"Network Error: {_describe(e)}") from e

        body = response.text
        if not response.is_success or not body:
            raise self._remote_error("Error generating content", response.status_code, body)

        logger.debug("Successfully received content generation response.")
        try:
            payload = json.loads(body)
        except ValueError as e:
            logger.warning("Could not parse generateContent response: %s", e)
            raise ParseError(f"Internal Processing Error: {e}", body) from e

        if not isinstance(payload, dict):
            raise ParseError("Internal Processing Error: expected a JSON object", body)

        candidates = payload.get("candidates")
        if isinstance(candidates, list) and candidates:
            return self._parse_candidate(candidates[0], effective_model, body)

        if "promptFeedback" in payload:
            feedback = payload["promptFeedback"]
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            reason = reason or "Unknown reason"
            logger.warning("Request Blocked by API: %s", reason)
            logger.debug("Blocked response body: %s", body)
            raise BlockedError(str(reason), body)

        logger.warning("API Error: No candidates in response.")
        logger.debug("Empty response body: %s", body)
        raise EmptyReplyError(body)

    def _parse_candidate(self, candidate: Any, model: str, body: str) -> GenerateResult:
        """Extract candidates[0].content.parts[0].text and the full model turn."""
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            logger.warning("API Error: No content or parts in candidate.")
            raise MalformedReplyError("API Error: No content or parts in candidate.", body)

        first = parts[0]
        if not isinstance(first, dict) or not isinstance(first.get("text"), str):
            logger.warning("API Error: No text part in response content.")
            raise MalformedReplyError("API Error: No text part in response content.", body)

        text_parts = tuple(
            Part(text=part["text"])
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        return GenerateResult(
            reply_text=first["text"],
            reply_turn=Turn(role=Role.MODEL, parts=text_parts),
            model=model,
        )

    def _remote_error(self, prefix: str, status: int, body: str | None) -> RemoteError:
        """Build a RemoteError, using error.message from the body when present."""
        message = f"{prefix}: {status}"
        detail = extract_error_message(body)
        if detail:
            message = f"{message} Details: {detail}"
        logger.warning("%s", message)
        logger.debug("Error response body: %s", body if body else "No response body")
        return RemoteError(status, message, body or None)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
