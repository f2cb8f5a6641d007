"""Statutory setback thresholds.

Thresholds are fixed configuration, never mutable state. A jurisdiction
supplies its own ComplianceThresholds and the evaluator receives it by
injection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ComplianceThresholds:
    """Minimum clearances in metres."""

    front_min: float = 6.0
    side_min: float = 3.0
    rear_min: float = 3.0
    # Rear is historically reported under the side check only
    enforce_rear: bool = False

    def __post_init__(self) -> None:
        for name in ("front_min", "side_min", "rear_min"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite non-negative number, got {value}")


# National Building Code of Nigeria: 6.0 m frontage, 3.0 m side and rear
NIGERIA_NATIONAL_BUILDING_CODE = ComplianceThresholds()
