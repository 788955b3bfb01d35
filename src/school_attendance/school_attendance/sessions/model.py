from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class Session:
    """Domain entity: one fixed daily teaching slot shared by the whole school."""

    session_id: int
    start_time: time
    end_time: time
    is_morning: bool

    @property
    def label(self) -> str:
        return f"{self.start_time.strftime('%H:%M')} - {self.end_time.strftime('%H:%M')}"
