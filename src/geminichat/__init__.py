"""
geminichat: a chat client for the Google Gemini generative-language API.

The conversation session owns an append-only transcript and commits a user
turn only together with its reply; the transport maps every response shape
onto a distinct error; replies render as HTML or in a Textual TUI.
"""

__version__ = "0.1.0"

from .errors import (
    BlockedError,
    BusyError,
    ChatError,
    EmptyReplyError,
    MalformedReplyError,
    MissingCredentialError,
    NetworkError,
    ParseError,
    RemoteError,
)
from .llm import DEFAULT_MODEL_ID, GenerateResult, GenerativeClient, Role, Turn, create_client
from .session import ChatSession
from .settings import CatalogRefresher, SettingsStore, create_settings_store

__all__ = [
    "DEFAULT_MODEL_ID",
    "BlockedError",
    "BusyError",
    "CatalogRefresher",
    "ChatError",
    "ChatSession",
    "EmptyReplyError",
    "GenerateResult",
    "GenerativeClient",
    "MalformedReplyError",
    "MissingCredentialError",
    "NetworkError",
    "ParseError",
    "RemoteError",
    "Role",
    "SettingsStore",
    "Turn",
    "create_client",
    "create_settings_store",
]
