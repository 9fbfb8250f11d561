"""
Identifier and timestamp sources.

The engine never reaches for a global random source or wall clock
directly; generators and editors take an ``id_factory`` and a ``clock``
so tests can swap in deterministic ones.
"""

import itertools
import uuid
from datetime import datetime, timezone
from typing import Callable

IdFactory = Callable[[], str]
Clock = Callable[[], str]


def new_id() -> str:
    """Random UUID4 string (default id factory)."""
    return str(uuid.uuid4())


def utc_now() -> str:
    """Current UTC time as ISO-8601 (default clock)."""
    return datetime.now(timezone.utc).isoformat()


def sequential_ids(prefix: str = "id") -> IdFactory:
    """Return a factory yielding ``prefix-1``, ``prefix-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def fixed_clock(value: str = "2024-01-01T00:00:00+00:00") -> Clock:
    return lambda: value
