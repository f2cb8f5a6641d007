"""Setback analysis pipeline.

normalize both polygons -> measure footprint vertices against the parcel
boundary -> synthesize front/side/rear -> evaluate against thresholds.

Each call is a pure function of its inputs and the EngineConfig; nothing is
shared between calls, so analyses can run on any number of threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger
from shapely.geometry import Polygon

from setback_engine.core.compliance.evaluator import ComplianceEvaluator, ComplianceVerdict
from setback_engine.core.compliance.scoring import ScoringPolicy, TieredScore
from setback_engine.core.compliance.setbacks import (
    DirectionalSetbacks,
    DoubledMinimumFrontage,
    FrontagePolicy,
    synthesize_setbacks,
)
from setback_engine.core.compliance.thresholds import (
    NIGERIA_NATIONAL_BUILDING_CODE,
    ComplianceThresholds,
)
from setback_engine.core.geometry.boundary import check_measurable, measure_vertex_distances
from setback_engine.core.geometry.normalizer import MultiPolygonStrategy, normalize_geometry
from setback_engine.core.geometry.projection import CoordinateSystem, projection_for
from setback_engine.utils.units import VALID_UNITS


@dataclass(frozen=True)
class EngineConfig:
    thresholds: ComplianceThresholds = NIGERIA_NATIONAL_BUILDING_CODE
    frontage: FrontagePolicy = field(default_factory=DoubledMinimumFrontage)
    scoring: ScoringPolicy = field(default_factory=TieredScore)
    multipolygon_strategy: MultiPolygonStrategy = MultiPolygonStrategy.FIRST
    coordinate_system: CoordinateSystem = CoordinateSystem.GEOGRAPHIC
    coordinate_unit: str = "m"

    def __post_init__(self):
        if self.coordinate_unit not in VALID_UNITS:
            raise ValueError(
                f"Unknown coordinate unit '{self.coordinate_unit}'. Valid: {sorted(VALID_UNITS)}"
            )

    @classmethod
    def from_settings(cls, settings) -> "EngineConfig":
        return cls(
            thresholds=ComplianceThresholds(
                front_min=settings.front_min_m,
                side_min=settings.side_min_m,
                rear_min=settings.rear_min_m,
                enforce_rear=settings.enforce_rear,
            ),
            frontage=DoubledMinimumFrontage(floor=settings.min_observable_frontage_m),
            scoring=TieredScore(
                compliant=settings.compliant_score,
                non_compliant=settings.non_compliant_score,
            ),
            multipolygon_strategy=MultiPolygonStrategy(settings.multipolygon_strategy),
            coordinate_system=CoordinateSystem(settings.coordinate_system),
            coordinate_unit=settings.coordinate_unit,
        )


@dataclass(frozen=True)
class SetbackAnalysis:
    """Everything one analysis produced, verdict included."""

    parcel: Polygon
    footprint: Polygon
    distances: tuple[float, ...]
    setbacks: DirectionalSetbacks
    verdict: ComplianceVerdict


def analyze(parcel_geometry, footprint_geometry, config: EngineConfig | None = None) -> SetbackAnalysis:
    """Run the full pipeline on raw parcel and footprint geometry.

    Raises InvalidGeometryError for malformed input and GeometryMismatchError
    for polygons that cannot be measured. No partial result is ever returned.
    """
    config = config or EngineConfig()

    parcel = normalize_geometry(parcel_geometry, config.multipolygon_strategy)
    footprint = normalize_geometry(footprint_geometry, config.multipolygon_strategy)
    check_measurable(parcel, "parcel")
    check_measurable(footprint, "footprint")

    projection = projection_for(parcel, config.coordinate_system, config.coordinate_unit)
    distances = measure_vertex_distances(parcel, footprint, projection)

    setbacks = synthesize_setbacks(distances, config.frontage)
    verdict = ComplianceEvaluator(config.thresholds, config.scoring).evaluate(setbacks)

    logger.info(
        "Setback analysis: front={:.2f}m side={:.2f}m rear={:.2f}m score={} status={}",
        setbacks.front, setbacks.side, setbacks.rear, verdict.score, verdict.status.value,
    )
    return SetbackAnalysis(
        parcel=parcel,
        footprint=footprint,
        distances=tuple(distances),
        setbacks=setbacks,
        verdict=verdict,
    )


def evaluate_footprint(parcel_geometry, footprint_geometry, config: EngineConfig | None = None) -> ComplianceVerdict:
    """Convenience wrapper returning only the ComplianceVerdict."""
    return analyze(parcel_geometry, footprint_geometry, config).verdict
