"""
Drink log: ordered, persisted drink entries with add/delete and change listeners.
BAC is not cached here; callers recompute it from ``entries()`` on every read.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List

from drink_safer import drink_store
from drink_safer.drinks import DrinkEntry

logger = logging.getLogger(__name__)

Listener = Callable[[List[DrinkEntry]], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DrinkLog:
    db_path: str
    clock: Callable[[], datetime] = _utcnow
    _listeners: List[Listener] = field(default_factory=list)
    _ready: bool = False

    def _ensure_db(self) -> None:
        if self._ready:
            return
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        drink_store.init_db(self.db_path)
        self._ready = True

    def entries(self) -> List[DrinkEntry]:
        self._ensure_db()
        return drink_store.list_drinks(self.db_path)

    def __len__(self) -> int:
        return len(self.entries())

    def add_drink(self, drink_type: str, volume: float, alcohol_content: float) -> DrinkEntry:
        self._ensure_db()
        entry = DrinkEntry(
            id=uuid.uuid4().hex,
            timestamp=self.clock(),
            drink_type=drink_type,
            volume=float(volume),
            alcohol_content=float(alcohol_content),
        )
        drink_store.insert_drink(self.db_path, entry)
        logger.info("Logged drink %s: %s %.1f oz %.1f%%", entry.id[:8], drink_type, volume, alcohol_content)
        self._notify()
        return entry

    def delete_drinks(self, indices: Iterable[int]) -> List[DrinkEntry]:
        """Delete entries at the given display positions.

        Positions refer to the list as it was before this call. Positions out
        of range are ignored. Returns the removed entries.
        """
        current = self.entries()
        wanted = {i for i in indices if 0 <= i < len(current)}
        removed = [current[i] for i in sorted(wanted)]
        if not removed:
            return []
        drink_store.delete_drinks(self.db_path, [e.id for e in removed])
        logger.info("Deleted %d drink(s)", len(removed))
        self._notify()
        return removed

    def clear(self) -> None:
        self._ensure_db()
        if drink_store.delete_all(self.db_path):
            self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new entry list after every change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.entries()
        for listener in list(self._listeners):
            listener(snapshot)
