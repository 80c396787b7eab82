"""Provider factory functions for CLI.

Centralizes creation of the reply service, speech engines and preference
store from environment variables. Hides configuration details from command
implementations.
"""

import os
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from ..diagnostics import DebugCallback
from ..llm import LLMProvider, create_llm_provider
from ..preferences import PreferenceStore, create_preference_store
from ..speech import (
    PermissionAuthority,
    SpeechRecognizer,
    SpeechSynthesizer,
    create_permission_authority,
    create_speech_recognizer,
    create_speech_synthesizer,
)
from ..ui.config import LogLevel

# Default console for output
_console = Console()

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_PREFERENCES_PATH = "~/.gemvox/preferences.db"

_FALSE_VALUES = ("0", "false", "no", "off")


def _env_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


def get_llm(console: Console | None = None, model: str | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output
        model: Model override (takes precedence over GEMINI_MODEL)

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (default: gemini)
        GEMINI_API_KEY: Gemini API key (GOOGLE_API_KEY is accepted too)
        GEMINI_MODEL: Gemini model (default: gemini-2.0-flash)
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "gemini").lower()

    if llm_provider in ("gemini", "google"):
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: GEMINI_API_KEY not set, chat disabled[/yellow]")
            return None
        model = model or os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
        return create_llm_provider("gemini", api_key=api_key, model=model)

    con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
    return None


def require_llm(console: Console | None = None, model: str | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        typer.Exit: If LLM provider is not configured
    """
    con = console or _console
    llm = get_llm(con, model=model)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def get_preference_store(
    backend: str | None = None,
    path: str | None = None,
) -> PreferenceStore:
    """Create the preference store.

    Environment variables:
        GEMVOX_PREFERENCES: Backend ('sqlite' or 'memory'; default: sqlite)
        GEMVOX_PREFERENCES_PATH: SQLite file (default: ~/.gemvox/preferences.db)
    """
    backend = backend or os.getenv("GEMVOX_PREFERENCES", "sqlite")
    config: dict[str, Any] = {}
    if backend == "sqlite":
        config["path"] = path or os.getenv("GEMVOX_PREFERENCES_PATH", DEFAULT_PREFERENCES_PATH)
    return create_preference_store(backend, **config)


def get_synthesizer(console: Console | None = None) -> SpeechSynthesizer:
    """Create the text-to-speech engine.

    Raises:
        typer.Exit: If no speech engine can be started

    Environment variables:
        GEMVOX_TTS_RATE: Words per minute
        GEMVOX_TTS_VOLUME: Volume 0.0-1.0
        GEMVOX_TTS_VOICE: Engine voice id
    """
    con = console or _console
    rate = os.getenv("GEMVOX_TTS_RATE")
    try:
        return create_speech_synthesizer(
            "pyttsx3",
            voice_id=os.getenv("GEMVOX_TTS_VOICE") or None,
            rate=int(rate) if rate else None,
            volume=_env_float("GEMVOX_TTS_VOLUME"),
        )
    except (ImportError, RuntimeError, OSError) as e:
        con.print(f"[red]Error: text-to-speech unavailable: {e}[/red]")
        raise typer.Exit(code=1)


def get_recognizer() -> SpeechRecognizer:
    """Create the speech recognizer.

    Environment variables:
        GEMVOX_STT_LANGUAGE: Recognition language (default: en-US)
        GEMVOX_STT_PHRASE_LIMIT: Max seconds per phrase (default: 5)
        GEMVOX_MIC_DEVICE: PyAudio input device index
    """
    device = os.getenv("GEMVOX_MIC_DEVICE")
    phrase_limit = _env_float("GEMVOX_STT_PHRASE_LIMIT")
    return create_speech_recognizer(
        "speech_recognition",
        language=os.getenv("GEMVOX_STT_LANGUAGE", "en-US"),
        phrase_time_limit=phrase_limit if phrase_limit is not None else 5.0,
        device_index=int(device) if device else None,
    )


def get_permissions() -> PermissionAuthority:
    """Create the microphone permission authority.

    Environment variables:
        GEMVOX_MIC_ENABLED: Set to 0/false to refuse microphone access
    """
    enabled = os.getenv("GEMVOX_MIC_ENABLED", "1").lower() not in _FALSE_VALUES
    return create_permission_authority(enabled=enabled)


def console_debug_callback(console: Console | None = None, level: str = "warning") -> DebugCallback:
    """Build a debug callback that prints to the console above a level threshold."""
    con = console or _console
    threshold = LogLevel.from_string(level)
    colors = {"debug": "dim", "info": "cyan", "warning": "yellow", "error": "red"}

    def _callback(msg_level: str, component: str, message: str) -> None:
        if LogLevel.from_string(msg_level) < threshold:
            return
        color = colors.get(msg_level, "white")
        con.print(f"[{color}]\\[{component}] {escape(message)}[/{color}]", highlight=False)

    return _callback
