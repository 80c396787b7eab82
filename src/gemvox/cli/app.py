"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from ..controllers import ChatController, Role, SpeakController, SubmitOutcome, ThemeController
from ..errors import PreferenceStoreError
from ..speech import Capability
from .providers import (
    console_debug_callback,
    get_permissions,
    get_preference_store,
    get_recognizer,
    get_synthesizer,
    require_llm,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="gemvox",
    help="Gemini chat with text-to-speech and speech input",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


PREFERENCES_HELP = "Preference store: 'sqlite' (persistent) or 'memory' (session-only)"
PREFERENCES_PATH_HELP = "Path for SQLite preference database"


@app.command(name="tui")
def tui_command(
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Gemini model (default: GEMINI_MODEL or gemini-2.0-flash)"
    ),
    preferences: str | None = typer.Option(None, "--preferences", "-p", help=PREFERENCES_HELP),
    preferences_path: str | None = typer.Option(None, "--preferences-path", help=PREFERENCES_PATH_HELP),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the two-tab chat/TTS interface."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = require_llm(console, model=model)
        store = None
        synthesizer = None

        try:
            store = get_preference_store(preferences, preferences_path)
            synthesizer = get_synthesizer(console)
            recognizer = get_recognizer()
            permissions = get_permissions()

            try:
                await store.connect()
            except PreferenceStoreError as e:
                console.print(f"[yellow]Warning: {e}; theme will not be saved[/yellow]")

            theme_controller = await ThemeController.load(store)

            # Ask for the microphone up front; the chat tab re-checks on every toggle
            status = await permissions.request(Capability.MICROPHONE)
            if not status.is_granted:
                console.print(f"[dim]Microphone {status.value}; speech input disabled[/dim]")

            chat = ChatController(
                reply_service=llm,
                synthesizer=synthesizer,
                recognizer=recognizer,
                permissions=permissions,
            )
            speaker = SpeakController(synthesizer)

            await run_textual_tui(
                chat=chat,
                speaker=speaker,
                theme=theme_controller,
                model_name=llm.model,
                log_level=log_level,
                debug_sources=[llm, synthesizer, recognizer],
            )
        finally:
            if synthesizer is not None:
                await synthesizer.close()
            if store is not None:
                await store.disconnect()
            await llm.close()

    asyncio.run(_tui())


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send to Gemini"),
    speak: bool = typer.Option(
        True,
        "--speak/--no-speak",
        help="Read the reply aloud"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Gemini model (default: GEMINI_MODEL or gemini-2.0-flash)"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Console log level: debug, info, warning, or error"
    ),
):
    """Send one prompt, print the reply and optionally speak it."""
    async def _ask() -> SubmitOutcome:
        llm = require_llm(console, model=model)
        synthesizer = None
        debug = console_debug_callback(console, log_level)

        try:
            if speak:
                synthesizer = get_synthesizer(console)
            chat = ChatController(
                reply_service=llm,
                synthesizer=synthesizer,
                recognizer=get_recognizer(),
                permissions=get_permissions(),
            )
            for source in (chat, llm, synthesizer):
                if source is not None:
                    source.set_debug_callback(debug)

            with console.status("[dim]Waiting for Gemini...[/dim]"):
                outcome = await chat.submit(prompt)
        finally:
            if synthesizer is not None:
                await synthesizer.close()
            await llm.close()

        replies = [m for m in chat.transcript if m.role is Role.ASSISTANT]
        if replies:
            style = "red" if outcome is SubmitOutcome.FAILED else "green"
            console.print(Panel(replies[-1].text, title="Gemini", border_style=style))
        return outcome

    outcome = asyncio.run(_ask())
    if outcome is SubmitOutcome.IGNORED:
        console.print("[yellow]Nothing to send: prompt is blank[/yellow]")
        raise typer.Exit(code=2)
    if outcome is SubmitOutcome.FAILED:
        raise typer.Exit(code=1)


@app.command()
def say(
    text: str = typer.Argument(..., help="Text to speak"),
):
    """Speak text aloud (en-US, normal pitch)."""
    async def _say():
        synthesizer = get_synthesizer(console)
        speaker = SpeakController(synthesizer)
        try:
            await speaker.speak(text)
        finally:
            await synthesizer.close()

    try:
        asyncio.run(_say())
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def theme(
    toggle: bool = typer.Option(
        False,
        "--toggle",
        "-t",
        help="Switch between light and dark before printing"
    ),
    preferences: str | None = typer.Option(None, "--preferences", "-p", help=PREFERENCES_HELP),
    preferences_path: str | None = typer.Option(None, "--preferences-path", help=PREFERENCES_PATH_HELP),
):
    """Show (or toggle) the saved light/dark theme."""
    async def _theme() -> bool:
        store = get_preference_store(preferences, preferences_path)
        debug = console_debug_callback(console, "warning")
        try:
            try:
                await store.connect()
            except PreferenceStoreError as e:
                debug("warning", "Prefs", str(e))
            controller = await ThemeController.load(store, debug_callback=debug)
            if toggle:
                controller.toggle()
                await controller.flush()
            return controller.current_value()
        finally:
            await store.disconnect()

    is_dark = asyncio.run(_theme())
    console.print(f"Theme: [bold]{'dark' if is_dark else 'light'}[/bold]")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
