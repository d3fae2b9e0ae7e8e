"""In-memory settings backend.

Data is lost when the application exits.
"""

from .base import SettingsStore
from .models import SettingsState


class InMemorySettingsStore(SettingsStore):
    """In-memory settings (process-only).

    Suitable for tests and for one-off commands that must not touch disk.
    """

    def __init__(self, state: SettingsState | None = None, **fields):
        self._state = state or SettingsState(**fields)

    def get_state(self) -> SettingsState:
        return self._state

    def save_state(self, state: SettingsState) -> None:
        self._state = state

    @property
    def backend_type(self) -> str:
        return "memory"
