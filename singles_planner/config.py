"""
Application configuration.

Settings are resolved from environment variables; the methodology card is a
JSON file validated into a MethodologyConfig.
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from singles_planner.schemas import MethodologyConfig

DEFAULT_METHODOLOGY_PATH = Path("models/methodology_norwegian_singles.json")


class Settings(BaseModel):
    """Immutable application settings resolved from environment."""

    model_config = {"frozen": True}

    log_level: str = Field("INFO", description="Root log level")
    log_format: Literal["rich", "json"] = Field(
        "rich", description="Console output style for log records"
    )
    methodology_path: Optional[Path] = Field(
        None, description="Methodology card to load instead of the built-in defaults"
    )


@lru_cache
def get_settings() -> Settings:
    """Build Settings from SINGLES_PLANNER_* environment variables."""
    methodology_path = os.getenv("SINGLES_PLANNER_METHODOLOGY")
    return Settings(
        log_level=os.getenv("SINGLES_PLANNER_LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("SINGLES_PLANNER_LOG_FORMAT", "rich").lower(),
        methodology_path=Path(methodology_path) if methodology_path else None,
    )


def load_methodology(methodology_path: Optional[Path] = None) -> MethodologyConfig:
    """
    Load a methodology card.

    Args:
        methodology_path: JSON card to load; None returns the built-in methodology

    Returns:
        MethodologyConfig instance

    Raises:
        FileNotFoundError: If methodology file doesn't exist
        ValueError: If methodology JSON is invalid
    """
    if methodology_path is None:
        return MethodologyConfig()

    methodology_path = Path(methodology_path)
    if not methodology_path.exists():
        raise FileNotFoundError(f"Methodology file not found: {methodology_path}")

    with open(methodology_path, "r") as f:
        try:
            methodology_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid methodology file: {e}")

    try:
        return MethodologyConfig(**methodology_data)
    except ValidationError as e:
        raise ValueError(f"Invalid methodology file: {e}")


def get_methodology() -> MethodologyConfig:
    """Methodology selected by the current settings."""
    return load_methodology(get_settings().methodology_path)
