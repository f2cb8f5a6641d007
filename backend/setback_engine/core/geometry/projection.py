"""Projection of parcel coordinates into a local metric plane.

Registry geometry is stored as WGS84 (longitude, latitude). Setback distances
are a few metres over a parcel a few hundred metres across, so a locally-flat
equirectangular projection about the parcel centroid is accurate to well under
a centimetre. Both polygons of one analysis must go through the SAME projection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from shapely.geometry.base import BaseGeometry
from shapely.ops import transform

from setback_engine.utils.units import to_m

# Mean Earth radius (IUGG), metres
EARTH_RADIUS_M = 6_371_008.8


class CoordinateSystem(str, Enum):
    GEOGRAPHIC = "geographic"  # (longitude, latitude) degrees
    PROJECTED = "projected"    # planar (x, y) in a linear unit


@dataclass(frozen=True)
class LocalProjection:
    """Equirectangular projection about a reference point, output in metres."""

    ref_lon: float
    ref_lat: float

    @classmethod
    def about(cls, geom: BaseGeometry) -> "LocalProjection":
        """Projection centred on the geometry's centroid."""
        c = geom.centroid
        return cls(ref_lon=c.x, ref_lat=c.y)

    @property
    def metres_per_degree_lat(self) -> float:
        return math.pi * EARTH_RADIUS_M / 180.0

    @property
    def metres_per_degree_lon(self) -> float:
        return self.metres_per_degree_lat * math.cos(math.radians(self.ref_lat))

    def to_local(self, lon: float, lat: float) -> tuple[float, float]:
        x = (lon - self.ref_lon) * self.metres_per_degree_lon
        y = (lat - self.ref_lat) * self.metres_per_degree_lat
        return (x, y)

    def project(self, geom: BaseGeometry) -> BaseGeometry:
        return transform(lambda x, y, z=None: self.to_local(x, y), geom)


@dataclass(frozen=True)
class PlanarProjection:
    """Coordinates are already planar; only rescale them to metres."""

    unit: str = "m"

    def project(self, geom: BaseGeometry) -> BaseGeometry:
        scale = to_m(1.0, self.unit)
        if scale == 1.0:
            return geom
        return transform(lambda x, y, z=None: (x * scale, y * scale), geom)


def projection_for(
    parcel: BaseGeometry,
    coordinate_system: CoordinateSystem = CoordinateSystem.GEOGRAPHIC,
    unit: str = "m",
) -> LocalProjection | PlanarProjection:
    """Build the projection used for one analysis, anchored on the parcel."""
    if CoordinateSystem(coordinate_system) == CoordinateSystem.PROJECTED:
        return PlanarProjection(unit=unit)
    return LocalProjection.about(parcel)
