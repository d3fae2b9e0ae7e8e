"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import logging


class LogLevel:
    """Log level constants with numeric values for comparison.

    Same numbers as the ``logging`` module, so records can be filtered
    without translation: DEBUG < INFO < WARNING < ERROR.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        if level >= cls.ERROR:
            return "ERROR"
        if level >= cls.WARNING:
            return "WARNING"
        if level >= cls.INFO:
            return "INFO"
        return "DEBUG"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MODEL_LABEL_MAX_LENGTH = 30  # Characters of the model id shown in the status bar
SEND_SHORTCUT = "Ctrl+J"

# HTML export
EXPORT_FILENAME = "gemini-chat.html"
