"""Display-side data models.

Hides how chat entries are attributed and labelled.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..llm import Role


class Sender(Enum):
    """Who a displayed chat entry is attributed to."""

    USER = ("user", "You")
    MODEL = ("model", "Gemini")
    SYSTEM = ("system", "System")
    ERROR = ("error", "Error")

    def __init__(self, key: str, display_name: str):
        self.key = key
        self.display_name = display_name

    @classmethod
    def for_role(cls, role: Role) -> "Sender":
        return cls.MODEL if role == Role.MODEL else cls.USER


@dataclass
class ChatEntry:
    """A chat entry as displayed, which may be a turn or a notice."""

    sender: Sender
    content: str
    timestamp: datetime = field(default_factory=datetime.now)
