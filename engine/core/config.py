"""
Configuration for the combat engine.

The engine is configured through a small JSON file. Every field has a
default, so a missing file simply yields the default configuration.
"""

import json
import random
from pathlib import Path
from typing import Any

from catchery import log_info
from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Runtime settings for the combat engine."""

    log_level: str = Field(
        default="INFO",
        description="Name of the logging level (DEBUG, INFO, WARNING, ...)",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the dice and jitter generators, None for a random run",
    )
    resolution_type: str = Field(
        default="quick",
        description="Resolution type tag stamped on auto-resolved encounters",
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding scenario files for the demo entry point",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        self.log_level = self.log_level.strip().upper()
        if not self.resolution_type:
            raise ValueError("resolution_type must be a non-empty string")

    def make_rng(self, offset: int = 0) -> random.Random:
        """
        Creates a generator honouring the configured seed.

        Args:
            offset (int): Added to the seed, so that the dice and the jitter
                generators do not replay the same sequence.

        Returns:
            random.Random: The generator.

        """
        if self.seed is None:
            return random.Random()
        return random.Random(self.seed + offset)


def load_config(path: Path | None) -> EngineConfig:
    """
    Loads the engine configuration from a JSON file.

    Args:
        path (Path | None): The file to read.

    Returns:
        EngineConfig: The configuration, defaults if the file does not exist.

    Raises:
        ValueError: If the file exists but is not a valid configuration.

    """
    if path is None or not path.exists():
        return EngineConfig()
    if not path.is_file():
        raise ValueError(f"Not a file: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"File {path} raised an error: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected object in {path}, got {type(data).__name__}")
    log_info(f"Loaded engine configuration from {path}", {"path": str(path)})
    return EngineConfig(**data)
