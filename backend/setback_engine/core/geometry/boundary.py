"""Boundary distance analysis between a parcel and a building footprint.

The parcel is treated as its boundary LINE (a chain of edge segments), not a
filled area. Each footprint vertex is measured against every edge and the
closest edge wins. Distances are unsigned: a vertex 2 m outside the parcel
measures the same as one 2 m inside. No inside/outside or line-of-sight
correction is applied; the value is a conservative proximity measure only.
"""

from __future__ import annotations

from shapely.geometry import LineString, Point, Polygon

from setback_engine.core.errors import GeometryMismatchError
from setback_engine.core.geometry.projection import LocalProjection, PlanarProjection


def boundary_segments(polygon: Polygon) -> list[LineString]:
    """Explode a polygon's exterior ring into its edge segments.

    Zero-length edges (repeated vertices) are skipped.
    """
    coords = list(polygon.exterior.coords)
    segments = []
    for start, end in zip(coords, coords[1:]):
        if start[:2] == end[:2]:
            continue
        segments.append(LineString([start[:2], end[:2]]))
    return segments


def footprint_vertices(polygon: Polygon) -> list[Point]:
    """Distinct vertices of the exterior ring (closing vertex excluded)."""
    coords = list(polygon.exterior.coords)[:-1]
    return [Point(c[:2]) for c in coords]


def check_measurable(polygon, role: str) -> None:
    """Raise GeometryMismatchError unless the polygon supports distance computation."""
    if not isinstance(polygon, Polygon) or polygon.is_empty:
        raise GeometryMismatchError(role, f"expected a Polygon, got {type(polygon).__name__}")

    distinct = {c[:2] for c in list(polygon.exterior.coords)[:-1]}
    if len(distinct) < 3:
        raise GeometryMismatchError(role, f"only {len(distinct)} distinct vertices")
    if polygon.area <= 0:
        raise GeometryMismatchError(role, "polygon encloses no area")


def measure_vertex_distances(
    parcel: Polygon,
    footprint: Polygon,
    projection: LocalProjection | PlanarProjection | None = None,
) -> list[float]:
    """Minimum distance in metres from each footprint vertex to the parcel boundary.

    Returns one distance per distinct footprint vertex, in ring order.
    Both polygons must already be normalized. When no projection is given the
    parcel centroid anchors a LocalProjection (coordinates are lon/lat).
    """
    check_measurable(parcel, "parcel")
    check_measurable(footprint, "footprint")

    if projection is None:
        projection = LocalProjection.about(parcel)

    segments = boundary_segments(projection.project(parcel))
    if not segments:
        raise GeometryMismatchError("parcel", "boundary has no usable edges")

    distances = []
    for vertex in footprint_vertices(projection.project(footprint)):
        distances.append(min(segment.distance(vertex) for segment in segments))
    return distances
