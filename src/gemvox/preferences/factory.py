"""Factory for creating preference store backends."""

from typing import Any

from .base import PreferenceStore


def create_preference_store(
    backend: str = "sqlite",
    **kwargs: Any
) -> PreferenceStore:
    """Create a preference store backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration

    Returns:
        PreferenceStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryPreferenceStore
        return InMemoryPreferenceStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLitePreferenceStore
        return SQLitePreferenceStore(**kwargs)

    raise ValueError(
        f"Unsupported preference backend: {backend}. "
        f"Supported backends: memory, sqlite"
    )
