"""Factory for creating settings backends."""

from typing import Any

from .base import SettingsStore


def create_settings_store(
    backend: str = "file",
    **kwargs: Any
) -> SettingsStore:
    """Create a settings backend.

    Args:
        backend: Backend type ("file" or "memory")
        **kwargs: Backend-specific configuration

    Returns:
        SettingsStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemorySettingsStore
        return InMemorySettingsStore(**kwargs)

    elif backend == "file":
        from .json_file import JsonFileSettingsStore
        return JsonFileSettingsStore(**kwargs)

    raise ValueError(
        f"Unsupported settings backend: {backend}. "
        f"Supported backends: file, memory"
    )
