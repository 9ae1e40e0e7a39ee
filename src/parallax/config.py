"""Simulation configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSettings(BaseSettings):
    """Defaults for the command-line simulator, overridable via PARALLAX_* variables."""

    universe_seed: int = 0xDEADBEEFCAFEBABE
    catalog_path: Optional[Path] = None
    site: str = "mcdonald"
    telescope: str = "reflector_1m"
    target: str = "Betelgeuse"
    min_altitude_deg: float = 15.0
    procedural_mag_limit: float = 12.0
    tile_size_deg: float = 4.0
    exposure_s: float = 60.0
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PARALLAX_")


settings = SimulationSettings()

__all__ = ["settings", "SimulationSettings"]
