from __future__ import annotations

from abc import ABC, abstractmethod


class InsightError(Exception):
    """Raised by a generator when the remote service gives no usable answer."""


class InsightGenerator(ABC):
    """Text-generation backend: prompt in, narrative out (or an exception)."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        raise NotImplementedError
