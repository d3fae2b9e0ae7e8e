"""Settings module for geminichat.

Holds the API key, the selected model and the cached model catalog, which
outlive any single chat session.
"""

from .base import SettingsStore
from .catalog import CatalogRefresher, choose_model
from .factory import create_settings_store
from .in_memory import InMemorySettingsStore
from .json_file import DEFAULT_SETTINGS_PATH, JsonFileSettingsStore
from .models import SettingsState

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "CatalogRefresher",
    "InMemorySettingsStore",
    "JsonFileSettingsStore",
    "SettingsState",
    "SettingsStore",
    "choose_model",
    "create_settings_store",
]
