"""Parcel registry collaborator.

Maps raw land-registry rows into LandPlot records and resolves plots by id or
plot number. The engine only ever reads from the registry.

Raw row keys (land_plots table export):
    unique_plot_no, id, owner_name, area_sqm, location, geom | geometry,
    application_status
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from loguru import logger
from shapely.geometry import Polygon, mapping

from setback_engine.core.errors import InvalidGeometryError, PlotNotFoundError
from setback_engine.core.geometry.normalizer import MultiPolygonStrategy, normalize_geometry
from setback_engine.core.status import ApplicationStatus

DEFAULT_OWNER = "Registered Ministry Record"
DEFAULT_PLOT_NUMBER = "N/A"
DEFAULT_LOCATION = "South-East Planning Region"


@dataclass(frozen=True)
class LandPlot:
    id: str
    owner: str
    plot_number: str
    area: float  # square metres, as registered
    location: str
    geometry: Polygon | None  # normalized parcel boundary; None when unusable
    status: ApplicationStatus = ApplicationStatus.NOT_SUBMITTED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner": self.owner,
            "plot_number": self.plot_number,
            "area": self.area,
            "location": self.location,
            "status": self.status.value,
            "geometry": mapping(self.geometry) if self.geometry is not None else None,
        }


def map_plot_record(
    raw: dict,
    strategy: MultiPolygonStrategy = MultiPolygonStrategy.FIRST,
) -> LandPlot:
    """Build a LandPlot from a raw registry row, filling registry defaults.

    A row whose geometry cannot be normalized is still returned, with
    geometry=None, so it stays listable; analysing it raises
    InvalidGeometryError.
    """
    plot_no = raw.get("unique_plot_no")
    plot_id = plot_no or raw.get("id")
    if plot_id is None or plot_id == "":
        raise ValueError("registry row has neither 'unique_plot_no' nor 'id'")

    raw_geom = raw.get("geom") or raw.get("geometry")
    try:
        geometry = normalize_geometry(raw_geom, strategy)
    except InvalidGeometryError as exc:
        logger.warning("Plot {} has unusable geometry: {}", plot_id, exc)
        geometry = None

    return LandPlot(
        id=str(plot_id),
        owner=raw.get("owner_name") or DEFAULT_OWNER,
        plot_number=str(plot_no) if plot_no else DEFAULT_PLOT_NUMBER,
        area=float(raw.get("area_sqm") or 0),
        location=raw.get("location") or DEFAULT_LOCATION,
        geometry=geometry,
        status=_plot_status(plot_id, raw.get("application_status")),
    )


def _plot_status(plot_id, raw_status) -> ApplicationStatus:
    if not raw_status:
        return ApplicationStatus.NOT_SUBMITTED
    try:
        return ApplicationStatus(raw_status)
    except ValueError:
        logger.warning("Plot {} has unknown status {!r}, treating as NOT_SUBMITTED", plot_id, raw_status)
        return ApplicationStatus.NOT_SUBMITTED


class ParcelRegistry(Protocol):
    def get(self, plot_key: str) -> LandPlot:
        ...

    def list_plots(self) -> list[LandPlot]:
        ...

    def is_live(self) -> bool:
        ...

    def __len__(self) -> int:
        ...


class InMemoryParcelRegistry:
    """Registry backed by a dict of LandPlots, loaded once."""

    def __init__(self, plots: Iterable[LandPlot] = ()) -> None:
        self._plots: dict[str, LandPlot] = {}
        self._lock = threading.Lock()
        for plot in plots:
            self.add(plot)

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict],
        strategy: MultiPolygonStrategy = MultiPolygonStrategy.FIRST,
    ) -> "InMemoryParcelRegistry":
        return cls(map_plot_record(r, strategy) for r in records)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        strategy: MultiPolygonStrategy = MultiPolygonStrategy.FIRST,
    ) -> "InMemoryParcelRegistry":
        """Load a GeoJSON FeatureCollection (properties = row) or a JSON list of rows."""
        path = Path(path)
        data = json.loads(path.read_text(encoding="utf-8"))

        if isinstance(data, dict) and data.get("type") == "FeatureCollection":
            records = [
                {**(f.get("properties") or {}), "geometry": f.get("geometry")}
                for f in data.get("features", [])
            ]
        elif isinstance(data, list):
            records = data
        else:
            raise ValueError(f"{path}: expected a FeatureCollection or a list of registry rows")

        registry = cls.from_records(records, strategy)
        logger.info("Loaded {} plots from {}", len(registry), path)
        return registry

    def add(self, plot: LandPlot) -> None:
        with self._lock:
            self._plots[plot.id] = plot

    def get(self, plot_key: str) -> LandPlot:
        """Look a plot up by id, falling back to plot number."""
        plot = self._plots.get(plot_key)
        if plot is not None:
            return plot
        for candidate in self._plots.values():
            if candidate.plot_number == plot_key:
                return candidate
        raise PlotNotFoundError(plot_key)

    def list_plots(self) -> list[LandPlot]:
        """All plots ordered by plot number."""
        return sorted(self._plots.values(), key=lambda p: p.plot_number)

    def is_live(self) -> bool:
        return bool(self._plots)

    def __len__(self) -> int:
        return len(self._plots)
