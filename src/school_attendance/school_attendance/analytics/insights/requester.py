from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Mapping, Optional, Sequence

from ...attendance.model import AttendanceRecord
from ...core.constants import (
    INSIGHT_EMPTY_MESSAGE,
    INSIGHT_FALLBACK_MESSAGE,
    INSIGHT_LOADING_MESSAGE,
)
from .generator import InsightGenerator
from .prompt import build_prompt

logger = logging.getLogger(__name__)


def request_insight(
    records: Sequence[AttendanceRecord],
    generator: InsightGenerator,
    *,
    language: str = "English",
    class_names_by_student: Optional[Mapping[str, str]] = None,
) -> str:
    """One narrative for the dataset. Never raises.

    An empty dataset returns the welcome message without calling the generator.
    """

    if not records:
        return INSIGHT_EMPTY_MESSAGE

    prompt = build_prompt(records, language=language, class_names_by_student=class_names_by_student)
    try:
        text = generator.generate(prompt)
    except Exception:
        logger.warning("insight request failed; using fallback text", exc_info=True)
        return INSIGHT_FALLBACK_MESSAGE

    text = (text or "").strip()
    return text or INSIGHT_FALLBACK_MESSAGE


class InsightRequester:
    """Holds the dashboard narrative and refreshes it in the background.

    Each refresh gets a generation number. A finished request only replaces the
    text when its generation is still the latest one, so a slow answer for an
    old dataset can never overwrite the answer for a newer dataset.
    """

    def __init__(
        self,
        generator: InsightGenerator,
        *,
        language: str = "English",
        executor: Optional[Executor] = None,
    ):
        self._generator = generator
        self._language = language
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="insight")
        self._lock = threading.Lock()
        self._generation = 0
        self._completed_generation = 0
        self._text = INSIGHT_LOADING_MESSAGE

    def current(self) -> str:
        with self._lock:
            return self._text

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._completed_generation != self._generation

    def _apply(self, generation: int, text: str) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug("stale insight discarded generation=%d latest=%d", generation, self._generation)
                return False
            self._text = text
            self._completed_generation = generation
            return True

    def _run(self, generation: int, records: Sequence[AttendanceRecord], class_names: Mapping[str, str]) -> str:
        text = request_insight(
            records,
            self._generator,
            language=self._language,
            class_names_by_student=class_names,
        )
        self._apply(generation, text)
        return text

    def refresh(
        self,
        records: Sequence[AttendanceRecord],
        *,
        class_names_by_student: Optional[Mapping[str, str]] = None,
    ) -> "Future[str]":
        records = list(records)
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._text = INSIGHT_LOADING_MESSAGE

        if not records:
            self._apply(generation, INSIGHT_EMPTY_MESSAGE)
            done: Future[str] = Future()
            done.set_result(INSIGHT_EMPTY_MESSAGE)
            return done

        logger.info("insight requested generation=%d records=%d", generation, len(records))
        return self._executor.submit(self._run, generation, records, dict(class_names_by_student or {}))

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
