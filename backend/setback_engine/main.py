"""Setback Compliance Engine: FastAPI application entry point."""

from __future__ import annotations

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from setback_engine.api.deps import get_engine_config, get_registry
from setback_engine.api.routes_applications import router as applications_router
from setback_engine.api.routes_plots import router as plots_router
from setback_engine.config import settings
from setback_engine.core.registry.plots import ParcelRegistry
from setback_engine.logging_config import configure_logging

__version__ = "0.1.0"

configure_logging(settings.log_level)

# Reject bad SETBACK_* engine settings at startup
get_engine_config()

app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    description="Measure building setbacks against registered parcel boundaries.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plots_router, prefix="/api")
app.include_router(applications_router, prefix="/api")


@app.get("/api/health")
async def health(registry: ParcelRegistry = Depends(get_registry)):
    return {
        "status": "ok",
        "version": __version__,
        "registry_live": registry.is_live(),
        "plot_count": len(registry),
    }
