"""Model catalog refresh.

Fetches the list of generateContent-capable models and stores it in the
settings backend. Only one refresh may run at a time; the fetched list
replaces the cached one.
"""

import logging

from ..errors import BusyError
from ..llm import DEFAULT_MODEL_ID, GenerativeClient
from .base import SettingsStore

logger = logging.getLogger(__name__)


def choose_model(model_ids: list[str], current: str | None) -> str:
    """Pick the model to select after the catalog changed.

    Keeps ``current`` if it is still offered, otherwise takes the first id,
    otherwise the default model.
    """
    if current and current in model_ids:
        return current
    if model_ids:
        return model_ids[0]
    return DEFAULT_MODEL_ID


class CatalogRefresher:
    """Refreshes the cached model catalog, one request at a time."""

    def __init__(self, client: GenerativeClient, settings: SettingsStore):
        self._client = client
        self._settings = settings
        self._refreshing = False

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    async def refresh(self, api_key: str | None = None) -> list[str]:
        """Fetch the catalog and write it to the settings store.

        Args:
            api_key: Key to use; the stored credential when None. The settings
                form passes the key being edited before it is saved.

        Returns:
            The fetched model ids

        Raises:
            BusyError: If a refresh is already in flight
            ChatError: Any transport failure; the cached list is left untouched
        """
        if self._refreshing:
            logger.info("Model fetch already in progress. Ignoring new request.")
            raise BusyError("Model list refresh already in progress.")

        key = self._settings.get_credential() if api_key is None else api_key
        self._refreshing = True
        try:
            model_ids = await self._client.list_models(key)
        finally:
            self._refreshing = False

        self._settings.set_cached_model_ids(model_ids)
        logger.info("Successfully fetched %d models", len(model_ids))
        return model_ids
