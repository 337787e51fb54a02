from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Iterator, Optional

from .connection import DatabaseConnection


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Dictionary cursor on a fresh connection; one commit at the end, rollback on any error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
    except Exception:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        cur.close()
        conn.close()


def as_time(value: Any) -> Optional[time]:
    """Coerce a TIME column to ``datetime.time``.

    The connector hands TIME back as ``timedelta`` (seconds since midnight,
    possibly past 24h), as ``time``, or as an ``HH:MM[:SS]`` string.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes, second = divmod(int(value.total_seconds()) % (24 * 3600), 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second)
    if isinstance(value, str):
        fields = [int(p) for p in value.strip().split(":")]
        if not 2 <= len(fields) <= 3:
            raise ValueError(f"not a TIME value: {value!r}")
        return time(*fields)
    raise TypeError(f"cannot read {type(value).__name__} as TIME")
