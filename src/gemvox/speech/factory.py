"""Factories for speech engines and the permission authority."""

from typing import Any

from .base import PermissionAuthority, SpeechRecognizer, SpeechSynthesizer


def create_speech_recognizer(backend: str = "speech_recognition", **kwargs: Any) -> SpeechRecognizer:
    """Create a speech recognizer.

    Args:
        backend: Backend type ("speech_recognition")
        **kwargs: Backend-specific configuration (language, phrase_time_limit, device_index)

    Raises:
        ValueError: If backend type is not supported
    """
    if backend in ("speech_recognition", "google"):
        from .recognition import SpeechRecognitionListener
        return SpeechRecognitionListener(**kwargs)

    raise ValueError(
        f"Unsupported recognizer backend: {backend}. "
        f"Supported backends: speech_recognition"
    )


def create_speech_synthesizer(backend: str = "pyttsx3", **kwargs: Any) -> SpeechSynthesizer:
    """Create a speech synthesizer.

    Args:
        backend: Backend type ("pyttsx3")
        **kwargs: Backend-specific configuration (rate, volume, voice_id)

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "pyttsx3":
        from .synthesis import Pyttsx3Synthesizer
        return Pyttsx3Synthesizer(**kwargs)

    raise ValueError(
        f"Unsupported synthesizer backend: {backend}. "
        f"Supported backends: pyttsx3"
    )


def create_permission_authority(**kwargs: Any) -> PermissionAuthority:
    """Create the microphone permission authority for this platform."""
    from .permissions import MicrophonePermission
    return MicrophonePermission(**kwargs)
