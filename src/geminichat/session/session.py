"""Conversation session.

Owns the transcript of one chat view and runs exchanges against the API.

Hidden design decisions:
- Reject-busy policy: a second submit while an exchange is in flight fails
  with BusyError instead of queueing
- The user turn is committed together with the reply, never alone
- Generation stamping, so replies that arrive after clear() are dropped
- Credential and model are read from settings at submit time
"""

import asyncio
import logging

from ..errors import BusyError, ChatError, MissingCredentialError
from ..llm import GenerativeClient, Turn
from ..settings import SettingsStore

logger = logging.getLogger(__name__)


class ChatSession:
    """Append-only conversation with one outstanding exchange at most.

    All mutation happens on the event loop that runs the session; the
    transport call is awaited inside a task and its outcome is applied when
    the task resumes.

    Usage:
        session = ChatSession(client, settings)
        task = session.submit("Hello")
        reply = await task  # Turn, or None if clear() ran meanwhile
    """

    def __init__(self, client: GenerativeClient, settings: SettingsStore):
        self._client = client
        self._settings = settings
        self._transcript: list[Turn] = []
        self._pending: asyncio.Task | None = None
        self._generation = 0
        self._last_model: str | None = None

    @property
    def transcript(self) -> tuple[Turn, ...]:
        """Snapshot of the committed turns, oldest first."""
        return tuple(self._transcript)

    @property
    def is_busy(self) -> bool:
        """True while an exchange (possibly a stale one) is in flight."""
        return self._pending is not None

    @property
    def generation(self) -> int:
        """Incremented by every clear()."""
        return self._generation

    @property
    def current_model(self) -> str:
        """Model a submit would use right now."""
        return self._settings.get_selected_model()

    @property
    def last_model(self) -> str | None:
        """Model used by the most recent submit."""
        return self._last_model

    def submit(self, user_text: str) -> "asyncio.Task[Turn | None] | None":
        """Start one exchange.

        Must be called from a running event loop.

        Args:
            user_text: The user's message; surrounding whitespace is trimmed

        Returns:
            None if the message is blank (nothing is sent). Otherwise a task
            resolving to the reply turn, to None if the session was cleared
            before the reply arrived, or raising the exchange's ChatError.

        Raises:
            MissingCredentialError: If no API key is configured
            BusyError: If an exchange is already in flight
        """
        text = (user_text or "").strip()
        if not text:
            return None

        api_key = self._settings.get_credential()
        if not api_key or not api_key.strip():
            raise MissingCredentialError("Gemini API Key is not set. Please configure it in Settings.")

        if self._pending is not None:
            raise BusyError("A request is already in progress. Please wait for the reply.")

        model = self._settings.get_selected_model()
        self._last_model = model
        logger.info("Sending message with model: %s", model)

        task = asyncio.get_running_loop().create_task(
            self._exchange(self._generation, api_key, model, text, tuple(self._transcript))
        )
        self._pending = task
        return task

    async def send(self, user_text: str) -> Turn | None:
        """Submit and wait for the reply. Blank input returns None."""
        task = self.submit(user_text)
        if task is None:
            return None
        return await task

    async def _exchange(
        self,
        generation: int,
        api_key: str,
        model: str,
        text: str,
        history: tuple[Turn, ...],
    ) -> Turn | None:
        try:
            result = await self._client.generate_content(api_key, model, text, history)
        except ChatError as e:
            if generation != self._generation:
                logger.debug("Dropping failure of a cleared exchange: %s", e)
                return None
            logger.warning("Exchange failed (%s): %s", e.kind, e)
            raise
        finally:
            self._pending = None

        if generation != self._generation:
            logger.debug("Dropping reply of a cleared exchange")
            return None

        self._transcript.extend((Turn.user(text), result.reply_turn))
        logger.debug("Transcript now holds %d turns", len(self._transcript))
        return result.reply_turn

    def clear(self) -> None:
        """Empty the transcript. An in-flight reply will be discarded."""
        self._transcript.clear()
        self._generation += 1
        logger.info("Chat cleared.")
