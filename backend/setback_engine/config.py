from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SETBACK_", env_file=".env", extra="ignore")

    app_name: str = "Setback Compliance Engine"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Statutory thresholds, metres
    front_min_m: float = 6.0
    side_min_m: float = 3.0
    rear_min_m: float = 3.0
    enforce_rear: bool = False

    # Frontage estimate floor and two-tier score
    min_observable_frontage_m: float = 6.1
    compliant_score: int = 96
    non_compliant_score: int = 40

    multipolygon_strategy: str = "first"  # first | largest
    coordinate_system: str = "geographic"  # geographic (lon/lat) | projected
    coordinate_unit: str = "m"  # linear unit when coordinate_system = projected

    registry_path: str | None = None  # GeoJSON FeatureCollection of plot records


settings = Settings()
