"""Geometry normalization for survey and GeoJSON inputs.

Registry exports and uploaded footprints arrive as Polygons, MultiPolygons,
Features or FeatureCollections, wound in either direction. Everything
downstream works on one simple, counter-clockwise shapely Polygon.
"""

from __future__ import annotations

from enum import Enum

from loguru import logger
from shapely.geometry import Polygon

from setback_engine.core.errors import InvalidGeometryError
from setback_engine.core.geometry.validation import GeometryIssue, validate_ring

SUPPORTED_TYPES = {"Polygon", "MultiPolygon"}


class MultiPolygonStrategy(str, Enum):
    """Which constituent of a MultiPolygon becomes the working polygon."""
    FIRST = "first"      # input order; survey exports put the main parcel first
    LARGEST = "largest"  # largest enclosed area


def extract_geometry(raw) -> dict | None:
    """Unwrap a Feature, FeatureCollection or geo-interface object to a geometry dict."""
    if raw is None:
        return None
    if hasattr(raw, "__geo_interface__") and not isinstance(raw, dict):
        raw = raw.__geo_interface__
    if not isinstance(raw, dict):
        raise InvalidGeometryError(f"expected a GeoJSON object, got {type(raw).__name__}")

    kind = raw.get("type")
    if kind == "Feature":
        return extract_geometry(raw.get("geometry"))
    if kind == "FeatureCollection":
        features = raw.get("features") or []
        if not features:
            raise InvalidGeometryError("FeatureCollection has no features")
        return extract_geometry(features[0])
    return raw


def normalize_geometry(
    raw,
    strategy: MultiPolygonStrategy = MultiPolygonStrategy.FIRST,
) -> Polygon:
    """Canonicalize arbitrary polygonal input into one CCW-wound Polygon.

    Raises InvalidGeometryError when the input is absent, is not a Polygon or
    MultiPolygon, or its exterior ring has fewer than 3 distinct vertices.
    Interior rings are dropped; only the exterior takes part in measurement.
    """
    geom = extract_geometry(raw)
    if geom is None:
        raise InvalidGeometryError("geometry is missing")

    kind = geom.get("type")
    if kind not in SUPPORTED_TYPES:
        raise InvalidGeometryError(
            f"unsupported geometry type {kind!r}, expected one of {sorted(SUPPORTED_TYPES)}"
        )

    coordinates = geom.get("coordinates")
    if not coordinates:
        raise InvalidGeometryError("empty coordinate list")

    if kind == "Polygon":
        return _normalize_polygon_rings(coordinates)

    parts = [rings for rings in coordinates if rings]
    if not parts:
        raise InvalidGeometryError("MultiPolygon has no parts")

    if strategy == MultiPolygonStrategy.FIRST:
        if len(parts) > 1:
            logger.warning(
                "MultiPolygon has {} parts, keeping the first and dropping {}",
                len(parts), len(parts) - 1,
            )
        return _normalize_polygon_rings(parts[0])

    candidates = [_normalize_polygon_rings(rings) for rings in parts]
    chosen = max(candidates, key=lambda p: p.area)
    if len(candidates) > 1:
        logger.warning(
            "MultiPolygon has {} parts, keeping the largest ({} vertices)",
            len(candidates), len(chosen.exterior.coords) - 1,
        )
    return chosen


def is_normalized(polygon: Polygon) -> bool:
    """True when normalizing the polygon again would not change it."""
    if not isinstance(polygon, Polygon) or polygon.is_empty:
        return False
    if polygon.interiors:
        return False
    renormalized = normalize_geometry(polygon)
    return list(renormalized.exterior.coords) == list(polygon.exterior.coords)


def _normalize_polygon_rings(rings) -> Polygon:
    if not isinstance(rings, (list, tuple)) or not rings:
        raise InvalidGeometryError("polygon has no rings")

    if len(rings) > 1:
        logger.debug("Dropping {} interior ring(s)", len(rings) - 1)

    result = validate_ring(rings[0])
    _log_issues(result.issues)
    if not result.valid:
        raise InvalidGeometryError(
            "; ".join(i.message for i in result.errors),
            issues=result.issues,
        )
    return result.polygon


def _log_issues(issues: list[GeometryIssue]) -> None:
    for issue in issues:
        logger.debug("Geometry issue {}: {}", issue.code, issue.message)
