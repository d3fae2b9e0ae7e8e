"""Conversation session module for geminichat."""

from .session import ChatSession

__all__ = ["ChatSession"]
