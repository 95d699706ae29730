from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Holds a one-element list so that worker threads and child tasks, which run
# on a copy of the request context, add to the same accumulator.
_db_time_ms: ContextVar[list[float] | None] = ContextVar("techno_db_time_ms", default=None)


def add_db_time(delta_ms: float) -> None:
    bucket = _db_time_ms.get()
    if bucket is None:
        return
    bucket[0] += delta_ms


def get_db_time_ms() -> float | None:
    bucket = _db_time_ms.get()
    if bucket is None:
        return None
    return bucket[0]


@contextmanager
def db_timer() -> Iterator[None]:
    """Accumulate SQL execution time for the current request only."""
    token = _db_time_ms.set([0.0])
    try:
        yield
    finally:
        _db_time_ms.reset(token)
