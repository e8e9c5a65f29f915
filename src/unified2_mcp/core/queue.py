from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from .models import DecodedRecord


class RecordQueue:
    """
    Bounded hand off between a tail collector and whoever drains it.

    Records are not kept once drained. When full, the oldest record is
    dropped and counted so a slow consumer cannot grow memory without bound.
    """

    def __init__(self, maxlen: int = 10_000):
        self._records: Deque[DecodedRecord] = deque(maxlen=maxlen)
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._records)

    def put_many(self, records: List[DecodedRecord]) -> None:
        for r in records:
            if len(self._records) == self._records.maxlen:
                self.dropped += 1
            self._records.append(r)

    def drain(self, limit: Optional[int] = None) -> List[DecodedRecord]:
        """
        Remove and return up to limit records, oldest first.
        """
        n = len(self._records) if limit is None else min(limit, len(self._records))
        return [self._records.popleft() for _ in range(n)]
