"""HTML rendering of chat messages.

Hides the details of markdown parsing and escaping.

Only model output is parsed as markdown. Anything the user typed (and system
or error notices) is shown literally: ``&``, ``<`` and ``>`` are escaped and
line breaks become ``<br>``.
"""

import html
from collections.abc import Iterable

from markdown_it import MarkdownIt

from ..llm import Turn
from .models import ChatEntry, Sender

# CommonMark plus tables and strikethrough; raw HTML in model output is escaped
_markdown = MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])

DOCUMENT_CSS = """
body { font-family: sans-serif; word-wrap: break-word; margin: 1em; }
.message { margin-bottom: 10px; }
.sender { font-weight: bold; }
.message-user .sender { color: #1a73e8; }
.message-system .sender, .message-error .sender { color: #80868b; }
pre { padding: 8px; overflow-x: auto; background: #f1f3f4; }
blockquote { margin-left: 0; padding-left: 1em; border-left: 3px solid #dadce0; }
"""


def render_markdown(text: str) -> str:
    """Render model-authored markdown to HTML."""
    return _markdown.render(text)


def render_plain(text: str) -> str:
    """Render literal text as a single HTML paragraph."""
    escaped = html.escape(text, quote=False)
    escaped = escaped.replace("\r\n", "\n").replace("\n", "<br>")
    return f"<p>{escaped}</p>"


def render_message(text: str, sender: Sender) -> str:
    """Render a message body according to who wrote it."""
    if sender is Sender.MODEL:
        return render_markdown(text)
    return render_plain(text)


def render_turn(turn: Turn) -> str:
    """Render a transcript turn."""
    return render_message(turn.text, Sender.for_role(turn.role))


def render_entry(text: str, sender: Sender) -> str:
    """Render a message with its sender label, as one chat entry."""
    return (
        f'<div class="message message-{sender.key}">'
        f'<span class="sender">{sender.display_name}:</span> '
        f"{render_message(text, sender)}"
        "</div>"
    )


def render_document(entries: Iterable[ChatEntry], title: str = "Gemini Chat") -> str:
    """Render chat entries as a standalone HTML page."""
    body = "\n".join(render_entry(entry.content, entry.sender) for entry in entries)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>{DOCUMENT_CSS}</style>\n"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def render_transcript(turns: Iterable[Turn], title: str = "Gemini Chat") -> str:
    """Render committed turns as a standalone HTML page."""
    entries = [ChatEntry(sender=Sender.for_role(turn.role), content=turn.text) for turn in turns]
    return render_document(entries, title=title)
