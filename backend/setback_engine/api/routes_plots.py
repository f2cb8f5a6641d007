"""Registry endpoints: list and look up land plots."""

from fastapi import APIRouter, Depends, HTTPException

from setback_engine.api.deps import get_registry
from setback_engine.core.errors import PlotNotFoundError
from setback_engine.core.registry.plots import ParcelRegistry
from setback_engine.models.schemas import PlotResponse

router = APIRouter(tags=["plots"])


@router.get("/plots", response_model=list[PlotResponse])
async def list_plots(registry: ParcelRegistry = Depends(get_registry)):
    """All registered plots ordered by plot number."""
    return [plot.to_dict() for plot in registry.list_plots()]


@router.get("/plots/{plot_key}", response_model=PlotResponse)
async def get_plot(plot_key: str, registry: ParcelRegistry = Depends(get_registry)):
    """One plot, looked up by id or plot number."""
    try:
        plot = registry.get(plot_key)
    except PlotNotFoundError as exc:
        raise HTTPException(404, detail=str(exc))
    return plot.to_dict()
