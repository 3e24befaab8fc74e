from __future__ import annotations

import logging
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from habitloop import ARGS_DIR

logger = logging.getLogger(__name__)


# =============================================================================
# HabitLoopConfig (args/habitloop.yaml)
# =============================================================================

class AnalysisConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    min_text_length: int = Field(default=20, ge=1)
    max_confidence: int = Field(default=95, ge=0, le=100)
    density_scale: float = Field(default=1000.0, gt=0)
    snippet_length: int = Field(default=100, ge=1)


class InsightsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    default_window_days: int = Field(default=7, ge=1)
    allowed_windows: list[int] = Field(default_factory=lambda: [7, 30])
    summary_snippet_limit: int = Field(default=10, ge=1)


class ProgramConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    length_days: int = Field(default=30, ge=1)
    reflection_every: int = Field(default=3, ge=1)
    signature_boost: int = Field(default=50, ge=0)
    pattern_count_delta: int = Field(default=5, ge=0)
    shortfall_policy: Literal["skip", "error"] = Field(default="skip")


class StorageConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    db_path: str = Field(default="data/habitloop.db")


class HabitLoopConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)
    program: ProgramConfig = Field(default_factory=ProgramConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


# =============================================================================
# Loader
# =============================================================================

_CONFIG_MAP: dict[str, type[BaseModel]] = {
    "habitloop": HabitLoopConfig,
}


def load_and_validate(config_name: str, model_class: type[BaseModel] | None = None) -> BaseModel:
    if model_class is None:
        model_class = _CONFIG_MAP.get(config_name)
        if model_class is None:
            raise ValueError(f"Unknown config: {config_name}. Available: {list(_CONFIG_MAP.keys())}")

    yaml_path = ARGS_DIR / f"{config_name}.yaml"

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return model_class.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {config_name}: {e}, using defaults")
        return model_class()


def load_config() -> HabitLoopConfig:
    """Load the main HabitLoop configuration."""
    return load_and_validate("habitloop")  # type: ignore[return-value]
