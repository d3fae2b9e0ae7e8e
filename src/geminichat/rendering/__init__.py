"""Rendering module for geminichat.

Turns chat messages into HTML fragments and pages. Stateless.
"""

from .html import (
    render_document,
    render_entry,
    render_markdown,
    render_message,
    render_plain,
    render_transcript,
    render_turn,
)
from .models import ChatEntry, Sender

__all__ = [
    "ChatEntry",
    "Sender",
    "render_document",
    "render_entry",
    "render_markdown",
    "render_message",
    "render_plain",
    "render_transcript",
    "render_turn",
]
