"""Process-wide collaborators shared by the API routes.

Override get_registry / get_store through app.dependency_overrides in tests.
"""

from __future__ import annotations

from functools import lru_cache

from setback_engine.config import settings
from setback_engine.core.applications.store import ApplicationStore
from setback_engine.core.compliance.engine import EngineConfig
from setback_engine.core.geometry.normalizer import MultiPolygonStrategy
from setback_engine.core.registry.plots import InMemoryParcelRegistry, ParcelRegistry


@lru_cache
def get_registry() -> ParcelRegistry:
    if settings.registry_path:
        return InMemoryParcelRegistry.from_file(
            settings.registry_path,
            MultiPolygonStrategy(settings.multipolygon_strategy),
        )
    return InMemoryParcelRegistry()


@lru_cache
def get_store() -> ApplicationStore:
    return ApplicationStore()


@lru_cache
def get_engine_config() -> EngineConfig:
    return EngineConfig.from_settings(settings)
