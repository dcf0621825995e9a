"""
ProgressAccessor - Read-through cache of the progress record for screens.

Loads the record once, exposes it with a loading flag, and reloads in full
after every mutation. Observers can subscribe to be told about each reload.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from bhashapath.schemas import ProgressRecord

from .progress import ProgressStore


logger = logging.getLogger(__name__)


class AccessorState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


ProgressListener = Callable[[ProgressRecord], None]


class ProgressAccessor:
    """
    Single point through which presentation code reads progress.

    uninitialized --load()--> loading --> ready
    ready --complete_lesson()--> loading --> ready
    """

    def __init__(self, store: ProgressStore):
        self.store = store
        self.progress: Optional[ProgressRecord] = None
        self.state = AccessorState.UNINITIALIZED
        self._loaded_once = False
        self._listeners: list[ProgressListener] = []

    @property
    def loading(self) -> bool:
        """True until the first load has finished."""
        return not self._loaded_once

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """Register a listener called after every load. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load(self) -> ProgressRecord:
        """Fetch the record from the store, falling back to the default record."""
        self.state = AccessorState.LOADING
        try:
            record = await self.store.get_progress()
            self.progress = record or self.store.default_progress()
        finally:
            self._loaded_once = True
            self.state = AccessorState.READY

        self._notify()
        return self.progress

    refresh = load

    async def complete_lesson(self, lesson_id: str, score: float, time_spent: int) -> ProgressRecord:
        """Complete a lesson through the store, then reload."""
        previous = self.state
        self.state = AccessorState.LOADING
        try:
            await self.store.complete_lesson(lesson_id, score, time_spent)
        except Exception:
            self.state = previous
            raise
        return await self.load()

    async def update_progress(self, record: ProgressRecord) -> ProgressRecord:
        """Save a whole record and expose it without a reload."""
        await self.store.save_progress(record)
        self.progress = record
        self._loaded_once = True
        self.state = AccessorState.READY
        self._notify()
        return record

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener(self.progress)
            except Exception as e:
                logger.error(f"Progress listener {listener!r} failed: {e}")
