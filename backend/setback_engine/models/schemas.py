"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator


class SubmitApplicationRequest(BaseModel):
    plot_id: str
    footprint: dict  # GeoJSON geometry, Feature or FeatureCollection

    @field_validator("plot_id")
    @classmethod
    def plot_id_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("plot_id cannot be empty")
        return v.strip()

    @field_validator("footprint")
    @classmethod
    def must_be_geojson(cls, v: dict) -> dict:
        if "type" not in v:
            raise ValueError("footprint must be a GeoJSON object with a 'type' member")
        return v


class DecisionRequest(BaseModel):
    decision: Literal["APPROVED", "REJECTED"]
    reviewer: str = "Executive Review Committee"

    @field_validator("reviewer")
    @classmethod
    def reviewer_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reviewer cannot be empty")
        return v.strip()


class SetbackResponse(BaseModel):
    front: float
    side: float
    rear: float
    compliant: bool
    errors: list[str]


class AnalysisResponse(BaseModel):
    application_id: str
    plot_id: str
    status: str
    compliance_score: int | None = None
    timestamp: str
    setbacks: SetbackResponse | None = None
    decided_by: str | None = None
    decided_at: str | None = None


class PlotResponse(BaseModel):
    id: str
    owner: str
    plot_number: str
    area: float
    location: str
    status: str
    geometry: dict | None = None
