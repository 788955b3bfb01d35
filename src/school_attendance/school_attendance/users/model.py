from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a school user (administrator or teacher).

    Note: Plain data object, no storage code here.
    """

    user_id: str
    name: str
    role: Role
    subject: Optional[str] = None
