from threading import Lock
from typing import Dict, List

from .models import Match


class MatchCollection:
    """
    Result collection shared by every worker of a run.
    Each Job merges its whole batch under the lock, keyed by the Job's sequence
    number, so reading back in sequence order is independent of scheduling.
    """

    def __init__(self):
        self._lock = Lock()
        self._batches: Dict[int, List[Match]] = {}
        self._sealed = False

    def merge(self, sequence: int, matches: List[Match]) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("Result collection is sealed")
            self._batches.setdefault(sequence, []).extend(matches)

    def seal(self) -> None:
        """No more merges are accepted after this."""
        with self._lock:
            self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def ordered(self) -> List[Match]:
        """All matches, batch by batch in ascending sequence order."""
        with self._lock:
            return [m for seq in sorted(self._batches) for m in self._batches[seq]]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(batch) for batch in self._batches.values())
