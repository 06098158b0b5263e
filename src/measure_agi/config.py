"""Configuration loading and validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class DataConfig(BaseModel):
    """Campaign payload source configuration."""

    source: str = Field(
        default="assets/data/sample-data.json",
        description="Filesystem path or http(s) URL of the campaign payload",
    )
    timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        """Reject blank sources."""
        if not v.strip():
            msg = "data source must not be empty"
            raise ValueError(msg)
        return v.strip()


class CampaignConfig(BaseModel):
    """Campaign rules used by the derivations."""

    goal_days: int = Field(default=100, ge=1, description="Consecutive AGI days needed")
    calendar_days: int = Field(default=100, ge=1, description="Slots on the calendar grid")
    cohorts: list[str] = Field(default_factory=lambda: ["LLM", "Agent"])
    top_participants: int = Field(
        default=4, ge=0, description="Individual lines drawn per cohort chart"
    )

    @field_validator("cohorts")
    @classmethod
    def validate_cohorts(cls, v: list[str]) -> list[str]:
        """Ensure cohort names are unique."""
        if len(set(v)) != len(v):
            msg = f"Duplicate cohort names: {v}"
            raise ValueError(msg)
        return v


class ExportConfig(BaseModel):
    """Snapshot export configuration."""

    output_path: Path = Field(default=Path("measure-agi-data.json"))


class LoggingConfig(BaseModel):
    """Log output configuration."""

    verbose: bool = Field(default=False, description="Log at DEBUG instead of INFO")
    json_format: bool = False
    quiet_loggers: list[str] = Field(
        default_factory=lambda: ["httpx", "httpcore"],
        description="Loggers capped at WARNING; httpx logs every request URL at INFO",
    )


class Config(BaseModel):
    """Root configuration model."""

    data: DataConfig = Field(default_factory=DataConfig)
    campaign: CampaignConfig = Field(default_factory=CampaignConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    return Config.model_validate(raw_config or {})
