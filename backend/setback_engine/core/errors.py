"""Error taxonomy for the setback compliance engine.

Every error is terminal for a single analysis call: nothing is retried and no
partial verdict is returned.
"""

from __future__ import annotations


class SetbackEngineError(ValueError):
    """Base class for all engine errors."""


class InvalidGeometryError(SetbackEngineError):
    """Raised when polygon input is absent, malformed, or of an unsupported type."""

    def __init__(self, reason: str, issues: list | None = None) -> None:
        super().__init__(f"Invalid geometry: {reason}")
        self.reason = reason
        self.issues = list(issues or [])


class GeometryMismatchError(SetbackEngineError):
    """Raised when a normalized polygon cannot support distance computation."""

    def __init__(self, role: str, reason: str) -> None:
        super().__init__(f"Degenerate {role} geometry: {reason}")
        self.role = role
        self.reason = reason


class PlotNotFoundError(SetbackEngineError, LookupError):
    """Raised by the registry layer when no record matches a plot key."""

    def __init__(self, plot_key: str) -> None:
        super().__init__(f"Plot ID not found in registry: {plot_key}")
        self.plot_key = plot_key


class ApplicationNotFoundError(SetbackEngineError, LookupError):
    """Raised when an application id is unknown to the application store."""

    def __init__(self, application_id: str) -> None:
        super().__init__(f"Application not found: {application_id}")
        self.application_id = application_id


class InvalidTransitionError(SetbackEngineError):
    """Raised when an application status change is not allowed."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot move application from {current} to {target}")
        self.current = current
        self.target = target
