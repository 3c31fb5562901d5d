"""Fire-and-forget persistence on a single background thread."""

import logging
import threading
from typing import List, Optional

from models import Habit
from store import HabitStore

logger = logging.getLogger(__name__)


class BackgroundWriter:
    """Writes habit snapshots off the UI thread.

    Only the newest pending snapshot is kept, so a burst of toggles turns
    into one write. Writes never overlap. Failures are logged and dropped.
    """

    def __init__(self, store: HabitStore):
        self.store = store
        self._cond = threading.Condition()
        self._pending: Optional[List[Habit]] = None
        self._busy = False
        self._closed = False
        self._thread = threading.Thread(
            target=self._run, name="habit-writer", daemon=True
        )
        self._thread.start()

    def submit(self, habits: List[Habit]):
        with self._cond:
            if self._closed:
                logger.warning("Writer closed; dropping snapshot of %d habits", len(habits))
                return
            self._pending = list(habits)
            self._cond.notify_all()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until nothing is pending or in flight."""
        with self._cond:
            return self._cond.wait_for(
                lambda: self._pending is None and not self._busy, timeout
            )

    def close(self, timeout: Optional[float] = 5.0):
        self.flush(timeout)
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        self._thread.join(timeout)

    def _run(self):
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._pending is not None or self._closed)
                if self._pending is None:
                    return
                snapshot, self._pending = self._pending, None
                self._busy = True
            try:
                if not self.store.persist(snapshot):
                    logger.error("Habit snapshot was not saved; keeping in-memory state")
            except Exception:  # keep the writer alive for the next snapshot
                logger.exception("Unexpected error while saving habits")
            finally:
                with self._cond:
                    self._busy = False
                    self._cond.notify_all()
