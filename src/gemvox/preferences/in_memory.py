"""In-memory preference store.

Dict-based storage; values are lost when the process exits unless the
same instance is reused. Suitable for tests and --preferences memory.
"""

from .base import PreferenceStore


class InMemoryPreferenceStore(PreferenceStore):
    """Session-only preference store."""

    def __init__(self, initial: dict[str, bool] | None = None):
        self._values: dict[str, bool] = dict(initial or {})

    async def connect(self) -> None:
        """No-op for in-memory."""
        pass

    async def disconnect(self) -> None:
        """No-op for in-memory."""
        pass

    async def get_bool(self, key: str) -> bool | None:
        return self._values.get(key)

    async def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = bool(value)

    @property
    def backend_type(self) -> str:
        return "memory"
