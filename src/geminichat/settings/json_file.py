"""JSON file settings backend.

Stores the settings state as a JSON document readable only by the owner,
since it holds the API key.
"""

import logging
import os
from pathlib import Path

from .base import SettingsStore
from .models import SettingsState

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".geminichat" / "settings.json"


class JsonFileSettingsStore(SettingsStore):
    """File-backed settings.

    The file is read lazily on first access and rewritten on every change.
    A missing file means defaults. An unreadable or invalid file is logged and
    treated as defaults; it is only overwritten once something is saved.

    ``credential_fallback`` (typically ``GEMINI_API_KEY``) is returned by
    ``get_credential`` while the file holds no key. It is never written to disk.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_SETTINGS_PATH,
        credential_fallback: str | None = None
    ):
        self._path = Path(path).expanduser()
        self._credential_fallback = (credential_fallback or "").strip()
        self._state: SettingsState | None = None

    @property
    def path(self) -> Path:
        return self._path

    def get_state(self) -> SettingsState:
        if self._state is None:
            self._state = self._load()
        return self._state

    def _load(self) -> SettingsState:
        if not self._path.exists():
            logger.debug("No settings file at %s, using defaults", self._path)
            return SettingsState()
        try:
            return SettingsState.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self._path, e)
            return SettingsState()

    def save_state(self, state: SettingsState) -> None:
        """Write the state to a private temp file, then rename it over the old one.

        The key is never on disk with wider permissions than 0600, and readers
        see either the previous file or the new one.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        # O_EXCL after unlink: a leftover temp file must not keep its old mode
        tmp_path.unlink(missing_ok=True)
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(state.model_dump_json(indent=2))
            os.replace(tmp_path, self._path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        self._state = state
        logger.debug("Settings saved to %s", self._path)

    def get_credential(self) -> str:
        return super().get_credential() or self._credential_fallback

    @property
    def backend_type(self) -> str:
        return "file"
