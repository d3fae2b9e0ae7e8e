"""Terminal UI module for geminichat.

Provides a Textual-based TUI around a ChatSession.

Module structure (each module hides a design decision):
- config.py: Constants and log levels
- formatting.py: Rich renderables for messages
- widgets.py: Custom widgets (chat history, input bar, status, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- screens.py: Modal settings dialog
- log_handler.py: logging -> log panel bridge
- app.py: Application orchestration (user interaction flow)
"""

from .app import GeminiChatApp, run_textual_tui
from .config import LogLevel
from .log_handler import DebugPanelHandler
from .screens import SettingsScreen
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "DebugPanelHandler",
    "GeminiChatApp",
    "LogLevel",
    "SettingsScreen",
    "StatusBar",
    "run_textual_tui",
]
