"""Bridge from the ``logging`` module to the debug panel."""

import logging

from .config import LOG_MAX_MESSAGE_LENGTH


class DebugPanelHandler(logging.Handler):
    """Logging handler that writes records into a DebugPanel.

    The panel does its own level filtering, so the handler passes every
    record through with the last dotted component of the logger name.
    """

    def __init__(self, panel, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if len(message) > LOG_MAX_MESSAGE_LENGTH:
                message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
            component = record.name.rsplit(".", 1)[-1]
            self._panel.record(component, message, record.levelno)
        except Exception:
            self.handleError(record)
