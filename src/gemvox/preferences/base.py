"""Abstract base class for preference store backends.

The abstraction hides:
- Storage format (SQLite table, dict)
- Persistence mechanism (file, in-memory)
- Connection management
"""

from abc import ABC, abstractmethod


class PreferenceStore(ABC):
    """Abstract durable key-value store for boolean preferences."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store gracefully."""

    @abstractmethod
    async def get_bool(self, key: str) -> bool | None:
        """Return the stored flag, or None if the key was never written."""

    @abstractmethod
    async def set_bool(self, key: str, value: bool) -> None:
        """Persist a flag, overwriting any previous value."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "PreferenceStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
