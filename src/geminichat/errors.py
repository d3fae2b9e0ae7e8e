"""Error taxonomy for chat exchanges and catalog refreshes.

Every failure that reaches a caller is a ``ChatError`` subclass. The ``kind``
attribute tags the variant so the UI can pick a message without isinstance
chains, and ``str(error)`` is the text shown to the user. None of these are
retried automatically.
"""


class ChatError(Exception):
    """Base class for all exchange failures."""

    kind = "error"

    def __init__(self, message: str, raw_body: str | None = None):
        super().__init__(message)
        self.message = message
        self.raw_body = raw_body


class MissingCredentialError(ChatError):
    """No API key is configured."""

    kind = "missing_credential"

    def __init__(self, message: str = "API Key is missing."):
        super().__init__(message)


class NetworkError(ChatError):
    """I/O fault or timeout talking to the remote endpoint."""

    kind = "network"


class RemoteError(ChatError):
    """The provider answered with a non-2xx status or an empty body."""

    kind = "remote"

    def __init__(self, status: int, message: str, raw_body: str | None = None):
        super().__init__(message, raw_body)
        self.status = status


class ParseError(ChatError):
    """The response body is not well-formed JSON of the expected shape."""

    kind = "parse"


class MalformedReplyError(ChatError):
    """Well-formed JSON that lacks the candidate text."""

    kind = "malformed_reply"


class BlockedError(ChatError):
    """The provider's safety filter blocked the prompt."""

    kind = "blocked"

    def __init__(self, reason: str, raw_body: str | None = None):
        super().__init__(f"Request Blocked by API: {reason}", raw_body)
        self.reason = reason


class EmptyReplyError(ChatError):
    """No candidates and no prompt feedback."""

    kind = "empty_reply"

    def __init__(self, raw_body: str | None = None):
        super().__init__("API Error: No candidates in response.", raw_body)


class BusyError(ChatError):
    """A previous exchange or refresh is still in flight."""

    kind = "busy"
