"""Ring coordinate validation, auto-closing, and repair.

This module catches bad survey geometry BEFORE it reaches the distance
analyzer, producing clear issue codes instead of cryptic topology exceptions.
Coordinates are (longitude, latitude) pairs, or planar (x, y) pairs when the
registry works in a projected system.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.polygon import orient
from shapely.validation import explain_validity, make_valid


class ValidationSeverity(Enum):
    ERROR = auto()    # blocks processing
    WARNING = auto()  # auto-fixable, continue with correction
    INFO = auto()     # informational only


@dataclass
class GeometryIssue:
    severity: ValidationSeverity
    code: str
    message: str
    location: tuple[float, float] | None = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.name,
            "code": self.code,
            "message": self.message,
            "location": list(self.location) if self.location is not None else None,
        }


@dataclass
class ValidationResult:
    polygon: Polygon | None
    issues: list[GeometryIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[GeometryIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]


# ── 1. Raw coordinate parsing ───────────────────────────────────────────

def parse_ring(raw) -> tuple[list[tuple[float, float]], list[GeometryIssue]]:
    """Coerce a raw GeoJSON ring into (x, y) float pairs.

    Extra ordinates (altitude) are ignored. Entries that are not at least
    a pair of numbers are reported as errors.
    """
    issues: list[GeometryIssue] = []
    coords: list[tuple[float, float]] = []

    if not isinstance(raw, (list, tuple)):
        issues.append(GeometryIssue(
            ValidationSeverity.ERROR,
            "NOT_A_RING",
            f"Expected a list of positions, got {type(raw).__name__}",
        ))
        return coords, issues

    for i, position in enumerate(raw):
        try:
            x, y = float(position[0]), float(position[1])
        except (TypeError, ValueError, IndexError, KeyError):
            issues.append(GeometryIssue(
                ValidationSeverity.ERROR,
                "NON_NUMERIC_COORD",
                f"Position {i} is not a numeric coordinate pair: {position!r}",
            ))
            continue
        coords.append((x, y))

    return coords, issues


# ── 2. Coordinate-level validation ──────────────────────────────────────

def validate_coordinates(coords: list[tuple[float, float]]) -> list[GeometryIssue]:
    """Check a ring's coordinate list for problems before building a polygon."""
    issues: list[GeometryIssue] = []

    if not coords:
        issues.append(GeometryIssue(
            ValidationSeverity.ERROR,
            "EMPTY_RING",
            "Coordinate list is empty",
        ))
        return issues

    for i, (x, y) in enumerate(coords):
        if not (math.isfinite(x) and math.isfinite(y)):
            issues.append(GeometryIssue(
                ValidationSeverity.ERROR,
                "NON_FINITE_COORD",
                f"Point {i} has non-finite coordinate ({x}, {y})",
            ))
    if issues:
        return issues

    for i in range(len(coords) - 1):
        if _points_equal(coords[i], coords[i + 1]):
            issues.append(GeometryIssue(
                ValidationSeverity.WARNING,
                "CONSECUTIVE_DUPLICATE",
                f"Points {i} and {i+1} are identical at ({coords[i][0]}, {coords[i][1]})",
                location=coords[i],
            ))

    # The closing vertex does not count as a distinct vertex; a ring that
    # revisits earlier positions still needs three different ones
    distinct = distinct_ring_vertices(coords)
    n_positions = len(set(distinct))
    if n_positions < 3:
        issues.append(GeometryIssue(
            ValidationSeverity.ERROR,
            "TOO_FEW_POINTS",
            f"Need at least 3 distinct vertices for a polygon, got {n_positions}",
        ))
        return issues

    if _all_collinear(distinct):
        issues.append(GeometryIssue(
            ValidationSeverity.WARNING,
            "ALL_COLLINEAR",
            "All points are collinear, polygon has zero area",
        ))

    return issues


# ── 3. Auto-closing rings ───────────────────────────────────────────────

def auto_close_ring(
    coords: list[tuple[float, float]],
) -> tuple[list[tuple[float, float]], list[GeometryIssue]]:
    """Ensure a coordinate ring is closed by appending the first vertex.

    Returns (closed_coords, issues).
    """
    issues: list[GeometryIssue] = []

    if len(coords) < 3 or _points_equal(coords[0], coords[-1]):
        return coords, issues

    issues.append(GeometryIssue(
        ValidationSeverity.WARNING,
        "AUTO_CLOSED",
        "Ring was open, appended the first vertex as closing vertex",
        location=coords[-1],
    ))
    return coords + [coords[0]], issues


# ── 4. Full ring validation + repair ────────────────────────────────────

def validate_ring(raw, auto_fix: bool = True) -> ValidationResult:
    """Full validation pipeline for one exterior ring.

    Steps:
    1. Parse positions into float pairs
    2. Validate coordinates (NaN, duplicates, distinct vertex count)
    3. Drop consecutive duplicates and auto-close
    4. Build the Shapely polygon and repair self-intersections
    5. Re-wind the exterior counter-clockwise

    Zero-area rings are returned unrepaired with a warning; the distance
    analyzer decides whether they can be measured.
    """
    coords, all_issues = parse_ring(raw)
    if any(i.severity == ValidationSeverity.ERROR for i in all_issues):
        return ValidationResult(polygon=None, issues=all_issues)

    coord_issues = validate_coordinates(coords)
    all_issues.extend(coord_issues)
    if any(i.severity == ValidationSeverity.ERROR for i in coord_issues):
        return ValidationResult(polygon=None, issues=all_issues)

    closed_coords, close_issues = auto_close_ring(_deduplicate_consecutive(coords))
    all_issues.extend(close_issues)

    poly = Polygon(closed_coords)

    if not poly.is_valid:
        repaired = largest_polygon(make_valid(poly))
        if repaired is None:
            # Collinear ring, nothing polygonal to recover
            all_issues.append(GeometryIssue(
                ValidationSeverity.WARNING,
                "ZERO_AREA",
                "Ring encloses no area",
            ))
        else:
            all_issues.append(GeometryIssue(
                ValidationSeverity.WARNING if auto_fix else ValidationSeverity.ERROR,
                "INVALID_GEOMETRY",
                f"Shapely reports: {explain_validity(poly)}",
            ))
            if not auto_fix:
                return ValidationResult(polygon=None, issues=all_issues)

            poly = Polygon(repaired.exterior.coords)
            all_issues.append(GeometryIssue(
                ValidationSeverity.INFO,
                "AUTO_REPAIRED",
                "Polygon was repaired with make_valid(), largest part kept",
            ))

    if poly.area > 0 and poly.exterior.is_ccw is False:
        all_issues.append(GeometryIssue(
            ValidationSeverity.INFO,
            "CW_ORIENTATION",
            "Ring was clockwise, reversed to CCW (RFC 7946 exterior orientation)",
        ))
    poly = orient(poly, sign=1.0)

    return ValidationResult(polygon=poly, issues=all_issues)


def largest_polygon(geom) -> Polygon | None:
    """Pick the largest polygonal part of an arbitrary geometry."""
    if isinstance(geom, Polygon):
        return None if geom.is_empty else geom

    parts: list[Polygon] = []
    for part in getattr(geom, "geoms", []):
        if isinstance(part, Polygon) and not part.is_empty:
            parts.append(part)
        elif isinstance(part, MultiPolygon):
            parts.extend(p for p in part.geoms if not p.is_empty)
    if not parts:
        return None
    return max(parts, key=lambda p: p.area)


# ── Helpers ─────────────────────────────────────────────────────────────

def distinct_ring_vertices(coords: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Consecutive-deduplicated vertices with the closing vertex removed."""
    unique = _deduplicate_consecutive(coords)
    if len(unique) > 1 and _points_equal(unique[0], unique[-1]):
        unique = unique[:-1]
    return unique


def _points_equal(a: tuple[float, float], b: tuple[float, float], eps: float = 1e-12) -> bool:
    return abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps


def _deduplicate_consecutive(coords: list[tuple[float, float]]) -> list[tuple[float, float]]:
    if not coords:
        return []
    result = [coords[0]]
    for c in coords[1:]:
        if not _points_equal(c, result[-1]):
            result.append(c)
    return result


def _all_collinear(points: list[tuple[float, float]]) -> bool:
    """Check if all points lie on a single line using the cross product."""
    if len(points) < 3:
        return True
    x0, y0 = points[0]
    x1, y1 = points[1]
    for x2, y2 in points[2:]:
        cross = (x1 - x0) * (y2 - y0) - (y1 - y0) * (x2 - x0)
        if abs(cross) > 1e-18:
            return False
    return True
