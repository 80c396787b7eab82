"""Observable, persisted light/dark theme flag."""

import asyncio
from collections.abc import Callable

from ..diagnostics import DebugCallback, DebugEmitter
from ..preferences import THEME_KEY, PreferenceStore

ThemeObserver = Callable[[bool], None]


class ThemeController(DebugEmitter):
    """Owns the dark-mode flag.

    toggle() updates observers synchronously and writes the new value to the
    preference store in the background. Writes are applied in toggle order,
    and a failed write is reported but never rolls the flag back.
    """

    def __init__(
        self,
        store: PreferenceStore,
        is_dark_mode: bool = False,
        key: str = THEME_KEY,
    ) -> None:
        self._store = store
        self._key = key
        self._is_dark_mode = is_dark_mode
        self._observers: list[ThemeObserver] = []
        self._persist_lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    @classmethod
    async def load(
        cls,
        store: PreferenceStore,
        key: str = THEME_KEY,
        debug_callback: DebugCallback | None = None,
    ) -> "ThemeController":
        """Create a controller from the stored flag, defaulting to light."""
        try:
            stored = await store.get_bool(key)
        except Exception as e:
            if debug_callback:
                debug_callback("warning", "Theme", f"Failed to read theme preference: {e}")
            stored = None

        controller = cls(store, is_dark_mode=bool(stored), key=key)
        controller.set_debug_callback(debug_callback)
        return controller

    @property
    def is_dark_mode(self) -> bool:
        return self._is_dark_mode

    def current_value(self) -> bool:
        return self._is_dark_mode

    def subscribe(self, observer: ThemeObserver) -> Callable[[], None]:
        """Register an observer. Returns a function that unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def toggle(self) -> bool:
        """Flip the flag, notify observers, then persist in the background.

        Must be called from a running event loop.
        """
        self._is_dark_mode = not self._is_dark_mode
        value = self._is_dark_mode
        for observer in list(self._observers):
            observer(value)

        task = asyncio.get_running_loop().create_task(self._persist(value))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return value

    async def flush(self) -> None:
        """Wait for every scheduled write to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    async def _persist(self, value: bool) -> None:
        async with self._persist_lock:
            try:
                await self._store.set_bool(self._key, value)
            except Exception as e:
                self._debug("warning", "Theme", f"Failed to save theme preference: {e}")
                return
        self._debug("debug", "Theme", f"Saved {self._key}={value}")
