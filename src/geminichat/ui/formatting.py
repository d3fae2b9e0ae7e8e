"""Terminal formatting of chat messages.

Hides how messages become Rich renderables. Mirrors the HTML rules in
``geminichat.rendering``: model output is markdown, everything else is shown
literally (no Rich markup is interpreted in user text).
"""

from rich.console import RenderableType
from rich.markdown import Markdown
from rich.text import Text

from ..rendering import Sender

SENDER_STYLES = {
    Sender.USER: "bold blue",
    Sender.MODEL: "bold magenta",
    Sender.SYSTEM: "dim",
    Sender.ERROR: "bold red",
}


def render_terminal(text: str, sender: Sender) -> RenderableType:
    """Render a message body for a Rich console or a Textual Static."""
    if sender is Sender.MODEL:
        return Markdown(text)
    return Text(text, style="red" if sender is Sender.ERROR else "", overflow="fold")


def sender_label(sender: Sender) -> Text:
    """Styled ``Name:`` label for a sender."""
    return Text(f"{sender.display_name}:", style=SENDER_STYLES[sender])


def shorten_model_id(model_id: str, max_length: int) -> str:
    """Trim long model ids for a status line, keeping the start."""
    if len(model_id) <= max_length:
        return model_id
    return model_id[: max_length - 3] + "..."
