"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history browsing
- Status line formatting (model, loading state)
- Log rendering and scrolling
- Chat entry rendering
"""

from collections import deque
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..rendering import ChatEntry, Sender
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    LOG_TIMESTAMP_FORMAT,
    MODEL_LABEL_MAX_LENGTH,
    SEND_SHORTCUT,
    LogLevel,
)
from .formatting import render_terminal, sender_label, shorten_model_id


class ClickableMessage(Vertical):
    """A chat entry container that copies its raw content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class InputHistory:
    """Previously sent messages, browsed with up/down like a shell.

    Consecutive duplicates are stored once; the oldest entries are dropped
    past ``max_size``.
    """

    def __init__(self, max_size: int = INPUT_HISTORY_MAX_SIZE) -> None:
        self._items: deque[str] = deque(maxlen=max_size)
        self._cursor: int | None = None

    def __len__(self) -> int:
        return len(self._items)

    def add(self, value: str) -> None:
        if not self._items or self._items[-1] != value:
            self._items.append(value)
        self._cursor = None

    def older(self) -> str | None:
        """Step back one entry. None when there is no history."""
        if not self._items:
            return None
        if self._cursor is None:
            self._cursor = len(self._items) - 1
        elif self._cursor > 0:
            self._cursor -= 1
        return self._items[self._cursor]

    def newer(self) -> str | None:
        """Step forward one entry.

        Returns "" when stepping past the newest entry and None when not
        browsing at all.
        """
        if self._cursor is None:
            return None
        if self._cursor < len(self._items) - 1:
            self._cursor += 1
            return self._items[self._cursor]
        self._cursor = None
        return ""


class ChatInputBar(Horizontal):
    """Multi-line message input with a Send button.

    Ctrl+J sends (terminals do not report Ctrl+Enter). Up on the first
    character and Down on the last one browse the input history.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.history = InputHistory()

    @property
    def _text_area(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def compose(self):
        yield TextArea(id="chat-input", show_line_numbers=False)
        yield Button("Send", id="send-btn", variant="primary").with_tooltip(
            f"Send message ({SEND_SHORTCUT})"
        )

    def on_mount(self) -> None:
        text_area = self._text_area
        text_area.cursor_blink = False
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        text_area = self._text_area
        if event.key == "ctrl+j":
            self._submit()
        elif event.key == "up" and text_area.cursor_location == (0, 0):
            self._show(self.history.older())
        elif event.key == "down" and text_area.cursor_location == text_area.document.end:
            self._show(self.history.newer())
        else:
            return
        event.prevent_default()
        event.stop()

    def _show(self, value: str | None) -> None:
        if value is not None:
            self._text_area.text = value

    def _submit(self) -> None:
        if self.disabled:
            return
        value = self._text_area.text.strip()
        if not value:
            return
        self.history.add(value)
        self._text_area.text = ""
        self.post_message(self.Submitted(value))

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable input while a reply is pending."""
        self.disabled = not enabled
        if enabled:
            self.focus_input()

    def focus_input(self) -> None:
        self._text_area.focus()


class StatusBar(Static):
    """One-line status: current model and whether a reply is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._model_id = ""
        self._loading = False

    def on_mount(self) -> None:
        self._update_display()

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def loading(self) -> bool:
        return self._loading

    def set_model(self, model_id: str) -> None:
        self._model_id = model_id
        self.tooltip = f"Current Model: {model_id}"
        self._update_display()

    def set_loading(self, loading: bool) -> None:
        self._loading = loading
        self._update_display()

    def _update_display(self) -> None:
        text = Text.assemble(
            ("Model: ", "bold"),
            (shorten_model_id(self._model_id, MODEL_LABEL_MAX_LENGTH), "cyan"),
        )
        if self._loading:
            text.append("   Waiting for Gemini...", style="yellow")
        self.update(text)


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped records from the ``geminichat`` loggers.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "app": "cyan",
        "session": "green",
        "gemini": "magenta",
        "catalog": "bright_blue",
        "json_file": "bright_green",
        "screens": "bright_yellow",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=False,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def record(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (session, gemini, catalog, ...)
            message: Log message, shown literally
            level: Numeric log level
        """
        if level < self._log_level:
            return

        level_name = LogLevel.name(level)
        level_color = self.LEVEL_COLORS.get(LogLevel.from_string(level_name), "white")
        self.write(Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT), "dim"),
            " ",
            (f"{level_name:<7}", level_color),
            " ",
            (f"[{component}]", self.COMPONENT_COLORS.get(component, "white")),
            " ",
            message,
        ))

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history.

    Keeps the displayed entries (including system and error notices) so the
    conversation can be exported as HTML.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._entries: list[ChatEntry] = []

    @property
    def entries(self) -> list[ChatEntry]:
        return list(self._entries)

    def add_entry(self, sender: Sender, content: str) -> None:
        """Add an entry to the chat history and scroll to it."""
        entry = ChatEntry(sender=sender, content=content)
        self._entries.append(entry)
        self._render_entry(entry)
        self.border_subtitle = f"{len(self._entries)} messages"
        self.scroll_end(animate=False)

    def get_last_reply(self) -> str | None:
        """Get the last model reply."""
        for entry in reversed(self._entries):
            if entry.sender is Sender.MODEL:
                return entry.content
        return None

    def clear_history(self) -> None:
        """Remove all entries."""
        self._entries.clear()
        self.remove_children()
        self.border_subtitle = "Conversation history"

    def _render_entry(self, entry: ChatEntry) -> None:
        header = sender_label(entry.sender)
        header.append(f" [{entry.timestamp.strftime('%H:%M:%S')}]", style="dim")

        container = ClickableMessage(
            content=entry.content,
            classes=f"chat-message {entry.sender.key}-message",
        )
        container.compose_add_child(Static(header, classes="message-header"))
        if entry.sender is Sender.MODEL:
            container.compose_add_child(Markdown(entry.content, classes="message-content"))
        else:
            container.compose_add_child(
                Static(render_terminal(entry.content, entry.sender), classes="message-content")
            )
        self.mount(container)
