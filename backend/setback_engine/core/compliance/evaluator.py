"""Apply statutory thresholds to synthesized setbacks."""

from __future__ import annotations

from dataclasses import dataclass

from setback_engine.core.compliance.scoring import ScoringPolicy, TieredScore
from setback_engine.core.compliance.setbacks import DirectionalSetbacks
from setback_engine.core.compliance.thresholds import (
    NIGERIA_NATIONAL_BUILDING_CODE,
    ComplianceThresholds,
)
from setback_engine.core.status import ApplicationStatus


@dataclass(frozen=True)
class SetbackMeasurement:
    """Measured clearances (metres) and the violations they trigger."""

    front: float
    side: float
    rear: float
    compliant: bool
    violations: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "front": self.front,
            "side": self.side,
            "rear": self.rear,
            "compliant": self.compliant,
            "errors": list(self.violations),
        }


@dataclass(frozen=True)
class ComplianceVerdict:
    score: int
    measurement: SetbackMeasurement
    status: ApplicationStatus

    @property
    def compliant(self) -> bool:
        return self.measurement.compliant


class ComplianceEvaluator:
    """Scores DirectionalSetbacks against an injected threshold set.

    Evaluation never raises on well-formed input. The status it assigns is
    the automatic one (PENDING or REJECTED); reviewer decisions come later.
    """

    def __init__(
        self,
        thresholds: ComplianceThresholds = NIGERIA_NATIONAL_BUILDING_CODE,
        scoring: ScoringPolicy | None = None,
    ) -> None:
        self.thresholds = thresholds
        self.scoring = scoring or TieredScore()

    def violations(self, setbacks: DirectionalSetbacks) -> list[str]:
        """Ordered violation descriptions: frontage first, then side, then rear."""
        found: list[str] = []
        if setbacks.front < self.thresholds.front_min:
            found.append(f"Frontage violation: {setbacks.front:.1f}m")
        if setbacks.side < self.thresholds.side_min:
            found.append(f"Side/Rear violation: {setbacks.side:.1f}m")
        if self.thresholds.enforce_rear and setbacks.rear < self.thresholds.rear_min:
            found.append(f"Rear violation: {setbacks.rear:.1f}m")
        return found

    def evaluate(self, setbacks: DirectionalSetbacks) -> ComplianceVerdict:
        found = self.violations(setbacks)
        compliant = not found
        measurement = SetbackMeasurement(
            front=setbacks.front,
            side=setbacks.side,
            rear=setbacks.rear,
            compliant=compliant,
            violations=tuple(found),
        )
        return ComplianceVerdict(
            score=self.scoring.score(setbacks, found),
            measurement=measurement,
            status=ApplicationStatus.PENDING if compliant else ApplicationStatus.REJECTED,
        )
