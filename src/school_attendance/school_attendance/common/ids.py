from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque identifier for a newly created entity. Never reused."""
    return uuid.uuid4().hex
