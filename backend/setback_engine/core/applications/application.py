"""Application lifecycle.

    NOT_SUBMITTED ──compliant verdict──▶ PENDING ──approve──▶ APPROVED
          │                                 └─────reject────▶ REJECTED
          └────────non-compliant verdict──────────────────────▶ REJECTED

APPROVED and REJECTED are terminal. Repeating the decision that produced the
current terminal status is a no-op; anything else raises
InvalidTransitionError. Resubmission creates a new Application.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone

from loguru import logger

from setback_engine.core.compliance.engine import EngineConfig, analyze
from setback_engine.core.compliance.evaluator import ComplianceVerdict
from setback_engine.core.errors import InvalidTransitionError
from setback_engine.core.status import ApplicationStatus

_ID_ALPHABET = string.ascii_uppercase + string.digits
_ID_LENGTH = 9

# (current, target) pairs a reviewer may trigger
_REVIEWER_TRANSITIONS = {
    (ApplicationStatus.PENDING, ApplicationStatus.APPROVED),
    (ApplicationStatus.PENDING, ApplicationStatus.REJECTED),
}


def _utc_now() -> str:
    """Current UTC time as an ISO-8601 string (e.g. 2026-02-26T10:30:00Z)."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def new_application_id() -> str:
    """APP- followed by 9 random uppercase letters/digits."""
    return "APP-" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


@dataclass
class Application:
    plot_id: str
    id: str = field(default_factory=new_application_id)
    timestamp: str = field(default_factory=_utc_now)
    status: ApplicationStatus = ApplicationStatus.NOT_SUBMITTED
    verdict: ComplianceVerdict | None = None
    decided_by: str | None = None
    decided_at: str | None = None

    def record_verdict(self, verdict: ComplianceVerdict) -> None:
        """Apply the engine's automatic status. Allowed once, from NOT_SUBMITTED."""
        if self.status != ApplicationStatus.NOT_SUBMITTED:
            raise InvalidTransitionError(self.status.value, verdict.status.value)
        self.verdict = verdict
        self.status = verdict.status
        logger.info("Application {} for plot {} -> {}", self.id, self.plot_id, self.status.value)

    def approve(self, reviewer: str) -> None:
        self._decide(ApplicationStatus.APPROVED, reviewer)

    def reject(self, reviewer: str) -> None:
        self._decide(ApplicationStatus.REJECTED, reviewer)

    def decide(self, decision: ApplicationStatus | str, reviewer: str) -> None:
        """Apply a reviewer decision given as APPROVED or REJECTED."""
        target = ApplicationStatus(decision)
        if target not in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED):
            raise InvalidTransitionError(self.status.value, target.value)
        self._decide(target, reviewer)

    def _decide(self, target: ApplicationStatus, reviewer: str) -> None:
        if self.status == target:
            return
        if (self.status, target) not in _REVIEWER_TRANSITIONS:
            raise InvalidTransitionError(self.status.value, target.value)
        self.status = target
        self.decided_by = reviewer
        self.decided_at = _utc_now()
        logger.info("Application {} {} by {}", self.id, target.value.lower(), reviewer)

    def to_dict(self) -> dict:
        """Serialise to a plain dict for the API response."""
        verdict = self.verdict
        return {
            "application_id": self.id,
            "plot_id": self.plot_id,
            "status": self.status.value,
            "compliance_score": verdict.score if verdict else None,
            "timestamp": self.timestamp,
            "setbacks": verdict.measurement.to_dict() if verdict else None,
            "decided_by": self.decided_by,
            "decided_at": self.decided_at,
        }


def submit_application(
    plot_id: str,
    parcel_geometry,
    footprint_geometry,
    config: EngineConfig | None = None,
) -> Application:
    """Analyse a footprint against a parcel and open an Application for it.

    Geometry errors propagate before any Application is created.
    """
    verdict = analyze(parcel_geometry, footprint_geometry, config).verdict
    application = Application(plot_id=plot_id)
    application.record_verdict(verdict)
    return application
