"""
Log Records

Immutable record type plus the two buffers that hold records: the bounded
history (RecordBuffer) and the replay queue used while output is paused
(PauseBuffer).
"""

import math
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Any, Deque, Iterator, List, Optional, Tuple, Union, overload

from gaugelog.utils import first_line

DEFAULT_MAX_RECORD_SIZE = 10000


@dataclass(frozen=True)
class LogRecord:
    """One logged event."""
    id: int
    level: str
    prefix: str
    message: str
    raw_args: Tuple[Any, ...] = ()

    @property
    def first_line(self) -> str:
        return first_line(self.message)


class RecordBuffer:
    """
    Bounded, append-only history of emitted records.

    The bound is batched: nothing is dropped until the buffer grows more
    than 10% past max_size, at which point it is cut back to the most
    recent 90% of max_size. The length therefore never exceeds
    max_size * 1.1 and truncation does not happen on every append.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_RECORD_SIZE) -> None:
        self._lock = RLock()
        self._records: List[LogRecord] = []
        self.max_size = max_size

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"max_size must be at least 1, got {value}")
        self._max_size = int(value)

    def append(self, record: LogRecord) -> None:
        """Append a record, truncating the oldest entries when over the bound."""
        with self._lock:
            self._records.append(record)
            overflow = len(self._records) - self._max_size
            if overflow > self._max_size / 10:
                keep = math.floor(self._max_size * 0.9)
                self._records = self._records[-keep:]

    def last(self) -> Optional[LogRecord]:
        with self._lock:
            return self._records[-1] if self._records else None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def snapshot(self) -> List[LogRecord]:
        """Copy of the current contents, oldest first."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[LogRecord]:
        return iter(self.snapshot())

    @overload
    def __getitem__(self, index: int) -> LogRecord: ...

    @overload
    def __getitem__(self, index: slice) -> List[LogRecord]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[LogRecord, List[LogRecord]]:
        with self._lock:
            return self._records[index]

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"RecordBuffer(len={len(self)}, max_size={self._max_size})"


class PauseBuffer:
    """FIFO queue of records captured while output is paused."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._queue: Deque[LogRecord] = deque()

    def enqueue(self, record: LogRecord) -> None:
        with self._lock:
            self._queue.append(record)

    def drain(self) -> List[LogRecord]:
        """Remove and return every queued record in enqueue order."""
        with self._lock:
            records = list(self._queue)
            self._queue.clear()
            return records

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)
