from collections.abc import Callable, Iterable
from datetime import datetime

from skyfreight.models.activity import ActivityEntry
from skyfreight.models.shipment import utcnow

DEFAULT_LIMIT = 200


class ActivityLog:
    """Bounded, newest-first feed of human-readable events."""

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.limit = limit
        self._clock = clock
        self._entries: list[ActivityEntry] = []

    def append(self, text: str) -> ActivityEntry:
        """Prepend a timestamped entry, dropping the oldest beyond the limit."""
        entry = ActivityEntry(time=self._clock(), text=text)
        self._entries.insert(0, entry)
        del self._entries[self.limit :]
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def list(self) -> list[ActivityEntry]:
        return [e.model_copy() for e in self._entries]

    def load(self, entries: Iterable[ActivityEntry]) -> None:
        """Replace the feed with persisted entries (assumed newest first)."""
        self._entries = list(entries)[: self.limit]

    def __len__(self) -> int:
        return len(self._entries)
