from enum import Enum


class Capability(str, Enum):
    """Device capabilities that need user consent."""

    MICROPHONE = "microphone"


class PermissionStatus(str, Enum):
    """Result of a permission status check or request."""

    GRANTED = "granted"
    DENIED = "denied"
    RESTRICTED = "restricted"
    PERMANENTLY_DENIED = "permanently_denied"

    @property
    def is_granted(self) -> bool:
        return self is PermissionStatus.GRANTED
