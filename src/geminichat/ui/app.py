"""Main Textual TUI application.

Orchestrates the UI components and routes user input through a ChatSession.
"""

import asyncio
import logging
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..errors import BusyError, ChatError, MissingCredentialError
from ..llm import Turn
from ..logging_utils import PACKAGE_LOGGER
from ..rendering import Sender, render_document
from ..session import ChatSession
from ..settings import CatalogRefresher, SettingsStore
from .config import EXPORT_FILENAME, SEND_SHORTCUT, LogLevel
from .log_handler import DebugPanelHandler
from .screens import SettingsScreen
from .styles import APP_CSS
from .themes import GEMINI_NIGHT
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusBar

logger = logging.getLogger(__name__)


class GeminiChatApp(App):
    """Textual TUI for chatting with Gemini."""

    CSS = APP_CSS
    TITLE = "Gemini Chat"

    # Priority: these keys are also TextArea editing keys
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("f2", "open_settings", "Settings"),
        Binding("ctrl+e", "export_html", "Export HTML", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Reply", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        session: ChatSession,
        settings: SettingsStore,
        refresher: CatalogRefresher,
        log_level: str | None = None,
        export_path: str | Path | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._settings = settings
        self._refresher = refresher
        self._log_level = log_level
        self._export_path = Path(export_path or EXPORT_FILENAME)
        self._log_handler: DebugPanelHandler | None = None
        self._previous_logger_level: int | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        with Vertical(id="bottom-bar"):
            yield StatusBar(id="status-bar")
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(GEMINI_NIGHT)
        self.theme = "gemini-night"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
        self._attach_log_handler(log_panel)
        logger.info("TUI started")

        model = self._session.current_model
        self.sub_title = model
        self.query_one("#status-bar", StatusBar).set_model(model)

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_entry(
            Sender.SYSTEM,
            f"Welcome! Using model: {model}\nTip: Press {SEND_SHORTCUT} to send message",
        )
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach the log bridge so records stop targeting dead widgets."""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if self._log_handler is not None:
            package_logger.removeHandler(self._log_handler)
            self._log_handler = None
        if self._previous_logger_level is not None:
            package_logger.setLevel(self._previous_logger_level)
            self._previous_logger_level = None

    def _attach_log_handler(self, log_panel: DebugPanel) -> None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        self._previous_logger_level = package_logger.level
        package_logger.setLevel(log_panel.log_level)
        self._log_handler = DebugPanelHandler(log_panel)
        package_logger.addHandler(self._log_handler)

    def _set_loading(self, loading: bool) -> None:
        self.query_one("#status-bar", StatusBar).set_loading(loading)
        self.query_one("#chat-input-bar", ChatInputBar).set_enabled(not loading)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        try:
            task = self._session.submit(event.value)
        except MissingCredentialError as e:
            self.notify(f"{e} Press F2 to open settings.", severity="error", timeout=5)
            return
        except BusyError as e:
            self.notify(str(e), severity="warning", timeout=3)
            return
        if task is None:
            return

        self.query_one("#chat-history", ChatHistoryWidget).add_entry(Sender.USER, event.value.strip())
        status = self.query_one("#status-bar", StatusBar)
        status.set_model(self._session.last_model or self._session.current_model)
        self._set_loading(True)
        self._await_reply(task)

    @work(group="exchange")
    async def _await_reply(self, task: "asyncio.Task[Turn | None]") -> None:
        """Wait for the exchange off the message handler and show the outcome."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        try:
            reply = await task
        except ChatError as e:
            chat.add_entry(Sender.ERROR, str(e))
            self.notify(str(e)[:60], severity="error", timeout=5)
        except Exception as e:
            logger.exception("Internal error during content generation")
            chat.add_entry(Sender.ERROR, f"Internal Processing Error: {e}")
        else:
            if reply is not None:
                chat.add_entry(Sender.MODEL, reply.text)
        finally:
            self._set_loading(False)

    def action_clear_chat(self) -> None:
        """Clear the session and the chat history."""
        self._session.clear()
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.clear_history()
        chat.add_entry(Sender.SYSTEM, "Chat cleared.")

    def action_open_settings(self) -> None:
        """Open the settings dialog."""
        self.push_screen(SettingsScreen(self._settings, self._refresher), self._on_settings_closed)

    def _on_settings_closed(self, saved: bool | None) -> None:
        if not saved:
            return
        model = self._session.current_model
        self.sub_title = model
        self.query_one("#status-bar", StatusBar).set_model(model)
        self.notify("Settings saved", timeout=2)

    def action_export_html(self) -> None:
        """Write the displayed conversation to an HTML file."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        try:
            self._export_path.write_text(render_document(chat.entries), encoding="utf-8")
        except OSError as e:
            logger.error("Export failed: %s", e)
            self.notify(f"Export failed: {e}", severity="error", timeout=5)
            return
        self.notify(f"Transcript exported to {self._export_path}", timeout=3)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last model reply to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_reply()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Reply copied")
        else:
            self.notify("No reply to copy", severity="warning")


async def run_textual_tui(
    session: ChatSession,
    settings: SettingsStore,
    refresher: CatalogRefresher,
    log_level: str | None = None,
    export_path: str | Path | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session the UI drives
        settings: Settings store edited by the settings dialog
        refresher: Catalog refresher used by the settings dialog
        log_level: Log level for panel (debug/info/warning/error), None to hide
        export_path: Where Ctrl+E writes the HTML transcript
    """
    app = GeminiChatApp(
        session=session,
        settings=settings,
        refresher=refresher,
        log_level=log_level,
        export_path=export_path,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
