"""Compliance scoring policies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from setback_engine.core.compliance.setbacks import DirectionalSetbacks


class ScoringPolicy(Protocol):
    def score(self, setbacks: DirectionalSetbacks, violations: Sequence[str]) -> int:
        ...


@dataclass(frozen=True)
class TieredScore:
    """Two-tier score: one value for a clean verdict, one for any violation."""

    compliant: int = 96
    non_compliant: int = 40

    def __post_init__(self) -> None:
        for value in (self.compliant, self.non_compliant):
            if not 0 <= value <= 100:
                raise ValueError(f"score must be within 0-100, got {value}")
        if self.non_compliant > self.compliant:
            raise ValueError("non_compliant score cannot exceed compliant score")

    def score(self, setbacks: DirectionalSetbacks, violations: Sequence[str]) -> int:
        return self.non_compliant if violations else self.compliant
