"""Column helpers shared across ORM models."""
from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp.

    Edge and comment rows set ``created_at`` client-side as well so insertion
    order survives backends whose ``now()`` has one-second resolution.
    """

    return datetime.now(timezone.utc)


__all__ = ["utcnow"]
