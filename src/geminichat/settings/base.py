"""Abstract base class for settings backends.

This module defines the interface the session, the catalog refresher and the
settings UI use to read and write configuration.
The abstraction hides:
- Storage format (JSON file, in-memory)
- Where the credential comes from
"""

from abc import ABC, abstractmethod

from ..llm import DEFAULT_MODEL_ID
from .models import SettingsState


class SettingsStore(ABC):
    """Abstract settings backend.

    Backends only load and save a whole ``SettingsState``; the accessors below
    apply the defaults and copy lists so callers never share mutable state
    with the store.
    """

    @abstractmethod
    def get_state(self) -> SettingsState:
        """Retrieve the current settings state."""

    @abstractmethod
    def save_state(self, state: SettingsState) -> None:
        """Persist a settings state."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    def get_credential(self) -> str:
        return self.get_state().api_key

    def set_credential(self, api_key: str) -> None:
        state = self.get_state()
        self.save_state(state.model_copy(update={"api_key": (api_key or "").strip()}))

    def get_selected_model(self) -> str:
        """Get the selected model id, falling back to the default."""
        selected = self.get_state().selected_model_id
        if not selected or not selected.strip():
            return DEFAULT_MODEL_ID
        return selected

    def set_selected_model(self, model_id: str | None) -> None:
        """Set the selected model id; blank stores the default."""
        if model_id is None or not model_id.strip():
            model_id = DEFAULT_MODEL_ID
        state = self.get_state()
        self.save_state(state.model_copy(update={"selected_model_id": model_id.strip()}))

    def get_cached_model_ids(self) -> list[str]:
        return list(self.get_state().available_model_ids)

    def set_cached_model_ids(self, model_ids: list[str]) -> None:
        state = self.get_state()
        self.save_state(state.model_copy(update={"available_model_ids": list(model_ids)}))
