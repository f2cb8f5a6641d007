"""Application endpoints: submit a footprint for analysis, review the result."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from setback_engine.api.deps import get_engine_config, get_registry, get_store
from setback_engine.core.applications.application import submit_application
from setback_engine.core.applications.store import ApplicationStore
from setback_engine.core.compliance.engine import EngineConfig
from setback_engine.core.errors import (
    ApplicationNotFoundError,
    GeometryMismatchError,
    InvalidGeometryError,
    InvalidTransitionError,
    PlotNotFoundError,
)
from setback_engine.core.registry.plots import ParcelRegistry
from setback_engine.models.schemas import AnalysisResponse, DecisionRequest, SubmitApplicationRequest

router = APIRouter(tags=["applications"])


@router.post("/applications", response_model=AnalysisResponse)
def create_application(
    req: SubmitApplicationRequest,
    registry: ParcelRegistry = Depends(get_registry),
    store: ApplicationStore = Depends(get_store),
    config: EngineConfig = Depends(get_engine_config),
):
    """Run the setback analysis for a footprint on a registered plot."""
    try:
        plot = registry.get(req.plot_id)
    except PlotNotFoundError as exc:
        raise HTTPException(404, detail=str(exc))

    if plot.geometry is None:
        raise HTTPException(422, detail=[{"message": f"Plot {plot.id} has no usable boundary geometry"}])

    try:
        application = submit_application(plot.id, plot.geometry, req.footprint, config)
    except InvalidGeometryError as exc:
        logger.warning("Rejected footprint for plot {}: {}", plot.id, exc)
        raise HTTPException(422, detail=[
            {"message": str(exc), "issues": [i.to_dict() for i in exc.issues]},
        ])
    except GeometryMismatchError as exc:
        logger.warning("Unmeasurable geometry for plot {}: {}", plot.id, exc)
        raise HTTPException(422, detail=[{"message": str(exc), "role": exc.role}])

    store.add(application)
    return application.to_dict()


@router.get("/applications/{application_id}", response_model=AnalysisResponse)
async def get_application(application_id: str, store: ApplicationStore = Depends(get_store)):
    try:
        application = store.get(application_id)
    except ApplicationNotFoundError as exc:
        raise HTTPException(404, detail=str(exc))
    return application.to_dict()


@router.post("/applications/{application_id}/decision", response_model=AnalysisResponse)
async def decide_application(
    application_id: str,
    req: DecisionRequest,
    store: ApplicationStore = Depends(get_store),
):
    """Record a reviewer's APPROVED / REJECTED decision."""
    try:
        application = store.get(application_id)
        application.decide(req.decision, req.reviewer)
    except ApplicationNotFoundError as exc:
        raise HTTPException(404, detail=str(exc))
    except InvalidTransitionError as exc:
        raise HTTPException(409, detail=str(exc))
    return application.to_dict()
