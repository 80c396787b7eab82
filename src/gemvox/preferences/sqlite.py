"""SQLite preference store.

Persists flags in a single key/value table using aiosqlite for async access.
"""

from datetime import datetime
from pathlib import Path

try:
    import aiosqlite
    AIOSQLITE_AVAILABLE = True
except ImportError:
    AIOSQLITE_AVAILABLE = False
    aiosqlite = None

from ..errors import PreferenceStoreError
from .base import PreferenceStore


class SQLitePreferenceStore(PreferenceStore):
    """SQLite-backed preference store.

    Values survive process restarts. The connection is opened lazily on
    first use if connect() was not called explicitly.
    """

    def __init__(self, path: str | Path = "~/.gemvox/preferences.db"):
        if not AIOSQLITE_AVAILABLE:
            raise ImportError(
                "SQLite preference backend requires aiosqlite. "
                "Install with: pip install aiosqlite"
            )

        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the schema."""
        if self._connection is not None:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
            await self._connection.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value INTEGER NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            await self._connection.commit()
        except (OSError, aiosqlite.Error) as e:
            raise PreferenceStoreError(f"Cannot open preferences at {self._db_path}: {e}") from e

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def get_bool(self, key: str) -> bool | None:
        await self.connect()
        try:
            async with self._connection.execute(
                "SELECT value FROM preferences WHERE key = ?",
                (key,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PreferenceStoreError(f"Cannot read preference '{key}': {e}") from e

        if row is None:
            return None
        return bool(row[0])

    async def set_bool(self, key: str, value: bool) -> None:
        await self.connect()
        try:
            await self._connection.execute("""
                INSERT INTO preferences (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, int(bool(value)), datetime.now().isoformat()))
            await self._connection.commit()
        except aiosqlite.Error as e:
            raise PreferenceStoreError(f"Cannot write preference '{key}': {e}") from e

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
