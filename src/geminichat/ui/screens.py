"""Modal screens for the TUI.

This module hides the design decisions about:
- Settings dialog layout (API key entry, model selection, refresh)
- When the model catalog is fetched implicitly (on open, and when a key
  is typed while nothing is cached)
- Keyboard shortcuts for dialogs

The dialog edits the settings store directly; it returns True when saved.
"""

import logging

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from ..errors import BusyError, ChatError
from ..llm import DEFAULT_MODEL_ID
from ..settings import CatalogRefresher, SettingsStore, choose_model

logger = logging.getLogger(__name__)


class SettingsScreen(ModalScreen[bool]):
    """Modal settings form: credential, model selection and catalog refresh."""

    CSS = """
    SettingsScreen {
        align: center middle;
        background: $background 70%;
    }

    #settings-dialog {
        width: 72;
        height: auto;
        border: tall $primary;
        background: $surface;
        padding: 1 2;
    }

    #settings-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #model-row {
        height: auto;
    }

    #model-select {
        width: 1fr;
    }

    #refresh-btn {
        margin-left: 1;
    }

    #settings-status {
        height: auto;
        color: $text-muted;
        margin: 1 0;
    }

    #settings-buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }

    #settings-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, settings: SettingsStore, refresher: CatalogRefresher) -> None:
        super().__init__()
        self._settings = settings
        self._refresher = refresher
        self._status_text = ""

    @staticmethod
    def _options(model_ids: list[str], selected: str) -> list[tuple[str, str]]:
        ids = list(model_ids)
        if selected not in ids:
            ids.append(selected)
        return [(model_id, model_id) for model_id in ids]

    def compose(self) -> ComposeResult:
        selected = self._settings.get_selected_model()
        cached = self._settings.get_cached_model_ids()
        with Vertical(id="settings-dialog"):
            yield Static("Gemini Settings", id="settings-title")
            yield Label("API Key")
            yield Input(
                value=self._settings.get_credential(),
                password=True,
                placeholder="Paste your Gemini API key",
                id="api-key-input",
            )
            yield Label("Model")
            with Horizontal(id="model-row"):
                yield Select(
                    self._options(cached, selected),
                    value=selected,
                    allow_blank=False,
                    id="model-select",
                )
                yield Button("Refresh Models", id="refresh-btn")
            yield Static("", id="settings-status")
            with Horizontal(id="settings-buttons"):
                yield Button("Save", id="save-btn", variant="success")
                yield Button("Cancel", id="cancel-btn", variant="error")

    def on_mount(self) -> None:
        """Fetch the catalog silently if the cache cannot show the selection."""
        api_key = self._settings.get_credential()
        cached = self._settings.get_cached_model_ids()
        selected = self._settings.get_selected_model()
        self._set_key_present(bool(api_key))
        if api_key and (not cached or selected not in cached):
            logger.info("API key present, cache insufficient. Triggering initial silent model fetch.")
            self._refresh_models(api_key, announce=False)

    @property
    def status_text(self) -> str:
        """Text currently shown under the model selector."""
        return self._status_text

    def _set_status(self, text: str) -> None:
        self._status_text = text
        self.query_one("#settings-status", Static).update(text)

    def _set_key_present(self, present: bool) -> None:
        # Without a key there is nothing to refresh or choose from
        self.query_one("#refresh-btn", Button).disabled = not present
        self.query_one("#model-select", Select).disabled = not present

    def on_input_changed(self, event: Input.Changed) -> None:
        """Follow edits of the API key field."""
        if event.input.id != "api-key-input":
            return
        api_key = event.value.strip()
        self._set_key_present(bool(api_key))
        if not api_key:
            select = self.query_one("#model-select", Select)
            select.set_options(self._options([], DEFAULT_MODEL_ID))
            select.value = DEFAULT_MODEL_ID
            self._set_status("Enter an API key to load models.")
        elif not self._settings.get_cached_model_ids() and not self._refresher.is_refreshing:
            logger.info("API key entered, no models cached. Triggering silent model fetch.")
            self._refresh_models(api_key, announce=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "refresh-btn":
            api_key = self.query_one("#api-key-input", Input).value.strip()
            if not api_key:
                self.notify("Please enter an API Key first.", severity="warning")
                return
            self._refresh_models(api_key, announce=True)
        elif button_id == "save-btn":
            self._save()
        elif button_id == "cancel-btn":
            self.dismiss(False)

    def _selected_model(self) -> str | None:
        value = self.query_one("#model-select", Select).value
        return value if isinstance(value, str) else None

    @work(group="catalog-refresh")
    async def _refresh_models(self, api_key: str, announce: bool) -> None:
        if self._refresher.is_refreshing:
            logger.info("Model fetch already in progress. Ignoring new request.")
            return

        button = self.query_one("#refresh-btn", Button)
        previous_status = self._status_text
        button.disabled = True
        self._set_status("Fetching models...")
        try:
            model_ids = await self._refresher.refresh(api_key)
        except BusyError:
            self._set_status(previous_status)
            return
        except ChatError as e:
            self._set_status(f"Failed to fetch models: {e}")
            if announce:
                self.notify(f"Failed to fetch models: {e}", severity="error", timeout=5)
            return
        finally:
            button.disabled = not self.query_one("#api-key-input", Input).value.strip()

        select = self.query_one("#model-select", Select)
        chosen = choose_model(model_ids, self._selected_model())
        select.set_options(self._options(model_ids, chosen))
        select.value = chosen
        self._set_status(f"{len(model_ids)} models available.")
        if announce:
            self.notify(f"Models refreshed ({len(model_ids)} found).", timeout=3)

    def _save(self) -> None:
        self._settings.set_credential(self.query_one("#api-key-input", Input).value)
        self._settings.set_selected_model(self._selected_model())
        logger.info("Settings saved; selected model: %s", self._settings.get_selected_model())
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
