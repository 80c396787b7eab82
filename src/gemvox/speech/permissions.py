"""Microphone permission for desktop terminals.

Desktop operating systems do not expose a runtime consent prompt to a
terminal program, so the capability is granted when the user has not
disabled the microphone and at least one input device is present.
"""

import asyncio

from .base import PermissionAuthority
from .models import Capability, PermissionStatus


class MicrophonePermission(PermissionAuthority):
    """Permission authority backed by PyAudio device discovery."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._granted = False

    async def status(self, capability: Capability) -> PermissionStatus:
        self._check_capability(capability)
        if not self._enabled:
            return PermissionStatus.RESTRICTED
        return PermissionStatus.GRANTED if self._granted else PermissionStatus.DENIED

    async def request(self, capability: Capability) -> PermissionStatus:
        self._check_capability(capability)
        if not self._enabled:
            return PermissionStatus.RESTRICTED
        if self._granted:
            return PermissionStatus.GRANTED

        names = await asyncio.to_thread(self._list_input_devices)
        self._granted = bool(names)
        return PermissionStatus.GRANTED if self._granted else PermissionStatus.DENIED

    @staticmethod
    def _list_input_devices() -> list[str]:
        try:
            import speech_recognition as sr
        except ImportError:
            return []
        try:
            return sr.Microphone.list_microphone_names()
        except (OSError, AttributeError):
            return []

    @staticmethod
    def _check_capability(capability: Capability) -> None:
        if capability is not Capability.MICROPHONE:
            raise ValueError(f"Unsupported capability: {capability}")
