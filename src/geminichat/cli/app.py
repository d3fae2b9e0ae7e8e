"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..errors import ChatError
from ..logging_utils import configure_logging
from ..rendering import Sender, render_transcript
from ..settings import create_settings_store
from ..ui.config import EXPORT_FILENAME
from ..ui.formatting import render_terminal, sender_label
from .providers import (
    build_refresher,
    build_session,
    get_client,
    get_log_level,
    get_settings_store,
    require_credential,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="geminichat",
    help="Chat with Google Gemini models from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LOG_LEVEL_HELP = "Log level: debug, info, warning or error (default: GEMINICHAT_LOG_LEVEL or warning)"


def _mask_key(api_key: str) -> str:
    if not api_key:
        return "[dim]not set[/dim]"
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:4]}...{api_key[-4:]}"


def _print_reply(text: str) -> None:
    console.print(sender_label(Sender.MODEL))
    console.print(render_terminal(text, Sender.MODEL))
    console.print()


@app.command()
def configure(
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        "-k",
        help="Gemini API key to store (empty string removes it)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model id to use for new requests"
    ),
):
    """Update and show the stored settings."""
    settings = get_settings_store()

    if api_key is not None:
        settings.set_credential(api_key)
        console.print("[green]API key saved.[/green]")

    if model is not None:
        settings.set_selected_model(model)
        cached = settings.get_cached_model_ids()
        if cached and settings.get_selected_model() not in cached:
            console.print(
                f"[yellow]Warning: {escape(model)} is not in the cached model list. "
                "Run 'geminichat models --refresh' to update it.[/yellow]"
            )
        console.print(f"[green]Selected model: {escape(settings.get_selected_model())}[/green]")

    table = Table(title="Settings", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Settings file", str(getattr(settings, "path", settings.backend_type)))
    table.add_row("API key", _mask_key(settings.get_credential()))
    table.add_row("Selected model", escape(settings.get_selected_model()))
    table.add_row("Cached models", str(len(settings.get_cached_model_ids())))
    console.print(table)


@app.command()
def models(
    refresh: bool = typer.Option(
        False,
        "--refresh",
        "-r",
        help="Fetch the model list from the API before showing it"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """List models that support content generation."""
    configure_logging(get_log_level(log_level))
    settings = get_settings_store()

    if refresh:
        require_credential(settings, console)

        async def _refresh():
            client = get_client()
            try:
                return await build_refresher(client, settings).refresh()
            finally:
                await client.close()

        try:
            with console.status("Fetching models..."):
                asyncio.run(_refresh())
        except ChatError as e:
            console.print(f"[red]Failed to fetch models: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)

    model_ids = settings.get_cached_model_ids()
    selected = settings.get_selected_model()
    if not model_ids:
        console.print("[yellow]No cached models.[/yellow] Run 'geminichat models --refresh'.")
        console.print(f"[dim]Selected model: {escape(selected)}[/dim]")
        return

    table = Table(title=f"Models ({len(model_ids)})")
    table.add_column("Model", style="cyan")
    table.add_column("Selected", justify="center")
    for model_id in model_ids:
        table.add_row(escape(model_id), "[green]*[/green]" if model_id == selected else "")
    console.print(table)
    if selected not in model_ids:
        console.print(f"[dim]Selected model {escape(selected)} is not in the list.[/dim]")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model id for this request only (default: selected model)"
    ),
    html: Path | None = typer.Option(
        None,
        "--html",
        help="Also write the exchange as an HTML page to this file"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """Send a single message and print the reply."""
    configure_logging(get_log_level(log_level))
    settings = get_settings_store()
    api_key = require_credential(settings, console)

    if model:
        # One-off override that must not touch the settings file
        settings = create_settings_store(
            "memory",
            state=settings.get_state().model_copy(
                update={"api_key": api_key, "selected_model_id": model}
            ),
        )

    async def _ask():
        client = get_client()
        session = build_session(client, settings)
        try:
            with console.status(f"Waiting for {escape(session.current_model)}..."):
                reply = await session.send(prompt)
            return session, reply
        finally:
            await client.close()

    try:
        session, reply = asyncio.run(_ask())
    except ChatError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if reply is None:
        console.print("[yellow]Nothing to send.[/yellow]")
        raise typer.Exit(code=1)

    _print_reply(reply.text)

    if html is not None:
        html.write_text(render_transcript(session.transcript), encoding="utf-8")
        console.print(f"[dim]Exchange written to {html}[/dim]")


@app.command()
def chat(
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """Interactive console chat."""
    configure_logging(get_log_level(log_level))
    settings = get_settings_store()
    require_credential(settings, console)

    async def _chat():
        client = get_client()
        session = build_session(client, settings)
        try:
            console.print("[bold cyan]Gemini Chat[/bold cyan]")
            console.print(f"[dim]Welcome! Using model: {escape(session.current_model)}[/dim]")
            console.print("[dim]Type 'clear' to start over, 'exit', 'quit', or 'q' to leave[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold blue]You:[/bold blue] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "clear":
                    session.clear()
                    console.print("[dim]Chat cleared.[/dim]\n")
                    continue

                try:
                    with console.status("Waiting for Gemini..."):
                        reply = await session.send(user_input)
                except ChatError as e:
                    console.print(sender_label(Sender.ERROR))
                    console.print(render_terminal(str(e), Sender.ERROR))
                    console.print()
                    continue

                if reply is not None:
                    _print_reply(reply.text)
        finally:
            await client.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    export_path: Path = typer.Option(
        Path(EXPORT_FILENAME),
        "--export-path",
        "-o",
        help="File written by the Export HTML action (Ctrl+E)"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        settings = get_settings_store()
        client = get_client()
        try:
            await run_textual_tui(
                session=build_session(client, settings),
                settings=settings,
                refresher=build_refresher(client, settings),
                log_level=get_log_level(log_level),
                export_path=export_path,
            )
        finally:
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
