from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassRoom:
    """Domain entity: a class section (e.g. "3 Sciences 1")."""

    class_id: str
    name: str
