"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for the RF link planner.
"""
import math
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
import yaml

from rf_link_planner.core.frequency import parse_frequency_hz
from rf_link_planner.utils.exceptions import ConfigurationError


class LoggingParams(BaseModel):
    """Logging output settings."""
    log_level: str = Field("INFO", description="Logging level name")
    json_output: bool = Field(False, description="Emit JSON logs instead of console text")
    log_file: Optional[Path] = Field(None, description="Optional log file path")

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept only standard logging level names."""
        level = v.upper()
        if level not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class PlannerConfig(BaseModel):
    """Complete configuration for a link planning session."""
    default_frequency_spec: str = Field("5 GHz", description="Frequency given to towers added without one")
    frequency_tolerance: float = Field(1e-6, gt=0.0, lt=1.0, description="Relative tolerance for equal frequencies")
    ellipse_steps: int = Field(180, ge=4, le=10000, description="Segments in a Fresnel ellipse ring")
    radius_scale_factor: float = Field(1.0, gt=0.0, description="Display exaggeration of the Fresnel radius")
    logging: LoggingParams = Field(default_factory=LoggingParams)

    @field_validator('default_frequency_spec')
    @classmethod
    def validate_default_frequency(cls, v: str) -> str:
        """The default frequency must resolve, otherwise new towers could never link."""
        if math.isnan(parse_frequency_hz(v)):
            raise ValueError(f"Unparseable default frequency: {v!r}")
        return v


def load_config(config_path: Path) -> PlannerConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated PlannerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If YAML is malformed or validation fails

    Example:
        >>> config = load_config(Path("config/planner.yaml"))
        >>> print(config.default_frequency_spec, config.ellipse_steps)
        5 GHz 180
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed YAML in {config_path}: {e}") from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Config root must be a mapping: {config_path}")

    try:
        return PlannerConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid planner config {config_path}: {e}") from e


def get_default_config() -> PlannerConfig:
    """
    Get default configuration.

    Returns:
        Default PlannerConfig
    """
    return PlannerConfig()
