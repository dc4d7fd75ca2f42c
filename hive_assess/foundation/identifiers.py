"""ID generation for stored records."""

from __future__ import annotations

from uuid import UUID, uuid4


def new_id() -> UUID:
    """Generate a new random UUID v4 for apiary, hive and inspection records."""
    return uuid4()
