from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from calsift import ARGS_DIR
from calsift.logging_config import get_logger
from calsift.models import WorkingHours

logger = get_logger(__name__)


# =============================================================================
# CalsiftConfig (args/calsift.yaml)
# =============================================================================

class DefaultsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    exclude_all_day: bool = Field(default=False)
    include_calendars: list[str] = Field(default_factory=list)
    exclude_calendars: list[str] = Field(default_factory=list)
    include_calendar_types: list[str] = Field(default_factory=list)
    exclude_calendar_types: list[str] = Field(default_factory=list)
    show_empty_dates: bool = Field(default=False)
    timezone: Optional[str] = None


class FreeTimeConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    min_duration: int = Field(default=30, ge=0)
    work_start: str = Field(default="09:00")
    work_end: str = Field(default="17:00")

    @field_validator("work_start", "work_end")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        if WorkingHours.parse(value, "00:00") is None:
            raise ValueError(f"Expected HH:MM with hour 0-23 and minute 0-59, got {value!r}")
        return value

    def working_hours(self) -> WorkingHours:
        return WorkingHours.parse(self.work_start, self.work_end)


class CalsiftConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    free: FreeTimeConfig = Field(default_factory=FreeTimeConfig)


# =============================================================================
# Loader
# =============================================================================

_CONFIG_MAP: dict[str, type[BaseModel]] = {
    "calsift": CalsiftConfig,
}


def load_and_validate(
    config_name: str = "calsift",
    model_class: type[BaseModel] | None = None,
    path=None,
) -> BaseModel:
    if model_class is None:
        model_class = _CONFIG_MAP.get(config_name)
        if model_class is None:
            raise ValueError(f"Unknown config: {config_name}. Available: {list(_CONFIG_MAP.keys())}")

    yaml_path = Path(path) if path is not None else ARGS_DIR / f"{config_name}.yaml"

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return model_class.model_validate(raw)
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.warning(f"Config validation failed for {config_name}: {e}, using defaults")
        return model_class()
