"""Rule-based building blocks for phishing detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .signals import PageSignals

if TYPE_CHECKING:
    from ..config import EngineConfig


@dataclass(frozen=True)
class DetectionContext:
    """Shared context passed to each detection rule."""

    signals: PageSignals
    hostname: str
    base_domain: str
    is_https: bool


@dataclass(frozen=True)
class HeuristicFinding:
    """Outcome of a single detection rule."""

    name: str
    score: int = 0
    detected: bool = False
    reason: str = ""

    @property
    def reportable(self) -> bool:
        return self.detected and bool(self.reason)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "detected": self.detected,
            "reason": self.reason,
        }


class DetectionRule(Protocol):
    """Interface for detection rules."""

    name: str

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:  # pragma: no cover - interface
        ...
