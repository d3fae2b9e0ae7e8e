"""Provider factory functions for CLI.

Centralizes creation of the settings store, API client, session and catalog
refresher from environment variables. Hides configuration details from
command implementations.
"""

import os

from rich.console import Console

from ..llm import DEFAULT_BASE_URL, GenerativeClient, create_client
from ..session import ChatSession
from ..settings import (
    DEFAULT_SETTINGS_PATH,
    CatalogRefresher,
    SettingsStore,
    create_settings_store,
)

# Default console for output
_console = Console()


def get_settings_store() -> SettingsStore:
    """Create the settings store from environment variables.

    Returns:
        JSON file settings store

    Environment variables:
        GEMINICHAT_SETTINGS_PATH: Settings file (default: ~/.geminichat/settings.json)
        GEMINI_API_KEY: Used when the settings file holds no key (not saved)
    """
    return create_settings_store(
        "file",
        path=os.getenv("GEMINICHAT_SETTINGS_PATH", str(DEFAULT_SETTINGS_PATH)),
        credential_fallback=os.getenv("GEMINI_API_KEY"),
    )


def get_client() -> GenerativeClient:
    """Create the Gemini API client.

    Environment variables:
        GEMINI_API_BASE: API root (default: https://generativelanguage.googleapis.com/v1beta)
    """
    return create_client("gemini", base_url=os.getenv("GEMINI_API_BASE", DEFAULT_BASE_URL))


def get_log_level(explicit: str | None = None) -> str | None:
    """Resolve the log level from an option or GEMINICHAT_LOG_LEVEL."""
    return explicit or os.getenv("GEMINICHAT_LOG_LEVEL")


def require_credential(settings: SettingsStore, console: Console | None = None) -> str:
    """Get the API key, exiting with a hint if none is configured.

    Raises:
        SystemExit: If no API key is configured
    """
    import typer

    con = console or _console
    api_key = settings.get_credential()
    if not api_key:
        con.print(
            "[red]Error: Gemini API Key is not set.[/red] "
            "Run [bold]geminichat configure --api-key KEY[/bold] or set GEMINI_API_KEY."
        )
        raise typer.Exit(code=1)
    return api_key


def build_session(client: GenerativeClient, settings: SettingsStore) -> ChatSession:
    """Create a chat session bound to the given client and settings."""
    return ChatSession(client, settings)


def build_refresher(client: GenerativeClient, settings: SettingsStore) -> CatalogRefresher:
    """Create a catalog refresher bound to the given client and settings."""
    return CatalogRefresher(client, settings)
