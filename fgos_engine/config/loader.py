"""Loading engine policy profiles from JSON configuration files."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from fgos_engine.config.settings import EngineSettings

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
PROFILE_ENV = "FGOS_ENGINE_PROFILE"
CONFIG_DIR_ENV = "FGOS_ENGINE_CONFIG_DIR"


class EngineConfigLoader:
    def __init__(self, base_path: Optional[Path] = None) -> None:
        env_dir = os.getenv(CONFIG_DIR_ENV)
        if base_path is None and env_dir:
            base_path = Path(env_dir)
        self._base_path = base_path or Path(__file__).resolve().parents[1] / "configs" / "engine"

    @property
    def base_path(self) -> Path:
        return self._base_path

    def path_for(self, profile: str) -> Path:
        return self._base_path / f"{profile.lower()}.json"

    def load(self, profile: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(profile)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def apply(self, settings: EngineSettings, overrides: Dict[str, Any]) -> EngineSettings:
        """Merge a (possibly partial) profile over existing settings."""

        merged = settings.model_dump()
        for section, values in overrides.items():
            if section not in merged:
                raise ValueError(f"Unknown engine settings section: {section}")
            if not isinstance(values, dict):
                raise ValueError(f"Settings section {section} must be an object")
            merged[section] = {**merged[section], **values}
        return EngineSettings.model_validate(merged)


def load_engine_settings(
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
) -> EngineSettings:
    loader = EngineConfigLoader(base_path=base_path)
    name = profile or os.getenv(PROFILE_ENV) or DEFAULT_PROFILE
    settings = EngineSettings()
    overrides = loader.load(name)
    if not overrides:
        logger.debug("No engine profile %s under %s; using defaults", name, loader.base_path)
        return settings
    logger.info("Loaded engine profile %s", name)
    return loader.apply(settings, overrides)
