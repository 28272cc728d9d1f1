"""Memoized legislator lookups shared by every stage of one analysis run."""

import threading
from concurrent.futures import Future
from typing import Iterable

from party_line.loader import RecordLoader, scatter_gather
from party_line.models import Legislator


class LegislatorCache:
    """Maps legislator id -> Legislator, loading each id from disk at most once.

    Concurrent ``get`` calls for an id that is not cached yet wait on a single
    in-flight load instead of reading the file again.  Failed loads are not
    remembered, so the error surfaces to every caller that asked.
    """

    def __init__(self, loader: RecordLoader):
        self.loader = loader
        self._lock = threading.Lock()
        self._entries: dict[str, Future] = {}

    def get(self, leg_id: str) -> Legislator:
        with self._lock:
            entry = self._entries.get(leg_id)
            owner = entry is None
            if owner:
                entry = Future()
                self._entries[leg_id] = entry

        if owner:
            try:
                entry.set_result(self.loader.load_legislator(leg_id))
            except Exception as e:
                with self._lock:
                    self._entries.pop(leg_id, None)
                entry.set_exception(e)

        return entry.result()

    def get_many(self, leg_ids: Iterable[str], desc: str | None = None) -> list[Legislator]:
        """Resolve ids concurrently, in input order.

        When every id is already loaded the result comes straight from memory,
        without starting a thread pool.
        """
        leg_ids = list(leg_ids)
        cached = self._cached(leg_ids)
        if cached is not None:
            return cached
        return scatter_gather(
            self.get,
            leg_ids,
            max_workers=self.loader.max_workers,
            desc=desc,
            unit="legislator",
            progress=self.loader.progress and desc is not None,
        )

    def _cached(self, leg_ids: list[str]) -> list[Legislator] | None:
        """All of ``leg_ids`` from memory, or None if any still needs a load."""
        with self._lock:
            entries = [self._entries.get(leg_id) for leg_id in leg_ids]
        if any(e is None or not e.done() or e.exception() is not None for e in entries):
            return None
        return [e.result() for e in entries]

    def __contains__(self, leg_id: object) -> bool:
        with self._lock:
            entry = self._entries.get(leg_id)  # type: ignore[arg-type]
        return entry is not None and entry.done() and entry.exception() is None

    def __len__(self) -> int:
        with self._lock:
            entries = list(self._entries.values())
        return sum(1 for e in entries if e.done() and e.exception() is None)
