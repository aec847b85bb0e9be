"""Configuration loading and validation."""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = "~/.intake-vision/config.yaml"


class _Tunable(BaseModel):
    # Live edits are re-validated on assignment
    model_config = ConfigDict(validate_assignment=True)


class ClassifierConfig(_Tunable):
    # Normalized offset of the middle region's centre from the left of the image
    offset_x: float = 0.55
    # Normalized offset of the middle region's centre from the top of the image
    offset_y: float = 0.50
    # Normalized vertical distance from the middle region to the outer two
    separation: float = Field(default=0.25, ge=0.0)
    # Side length of every region, as a fraction of frame width / height
    size: float = Field(default=0.05, gt=0.0)
    # Added to every channel before sampling (saturates at 255). 0 = off.
    brightness_offset: int = Field(default=10, ge=0, le=255)


class PresenceConfig(_Tunable):
    tick_interval: int = Field(default=5, ge=1)
    presence_cutoff_mm: float = Field(default=75.0, ge=0.0)


class CameraConfig(_Tunable):
    id: str = "usb:0"
    type: str = "usb"  # "usb" | "file"
    device_index: int = 0
    width: int = 320
    height: int = 240
    path: str | None = None  # Image path for type="file"


class DriverConfig(_Tunable):
    tick_hz: float = Field(default=50.0, gt=0.0)


class IntakeVisionConfig(_Tunable):
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    presence: PresenceConfig = Field(default_factory=PresenceConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    driver: DriverConfig = Field(default_factory=DriverConfig)


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return re.sub(r"\$\{(\w+)\}", replacer, text)


def _resolve(path: str | Path | None) -> Path:
    return Path(path or DEFAULT_CONFIG_PATH).expanduser()


def load_config(path: str | Path | None = None) -> IntakeVisionConfig:
    """Load config from a YAML file, falling back to defaults.

    ``${ENV}`` references in the file are interpolated before parsing.
    """
    path = _resolve(path)
    if not path.exists():
        return IntakeVisionConfig()

    raw_text = path.read_text()
    interpolated = _interpolate_env_vars(raw_text)
    try:
        data = yaml.safe_load(interpolated)
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    if data is None:
        return IntakeVisionConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    try:
        return IntakeVisionConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def save_config(config: IntakeVisionConfig, path: str | Path | None = None) -> Path:
    """Save config to YAML file."""
    path = _resolve(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump()
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))
    return path
