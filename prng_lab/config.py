#!/usr/bin/env python3
"""
Engine Settings - Limits and server options
============================================

Settings are read from an optional JSON file and merged over the defaults.
The file path comes from the caller or the PRNG_LAB_SETTINGS environment
variable. Unknown keys are ignored.

Example settings file:
    {
        "port": 8000,
        "max_congruential_iterations": 250000,
        "sampler_trial_factor": 100
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "PRNG_LAB_SETTINGS"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 8000,
    "cors_origin": "*",
    "log_level": "INFO",
    "max_congruential_iterations": 100_000,
    "middle_squares_max_iterations": 100_000,
    "max_middle_square_digits": 100,
    "max_modulus_bits": 64,
    "max_random_variables": 10_000,
    "sampler_trial_factor": 50,
    "max_chi_square_intervals": 1_000,
    "max_sample_size": 1_000_000,
}


class EngineSettings(BaseModel):
    """Typed view of DEFAULT_SETTINGS plus overrides."""

    host: str = DEFAULT_SETTINGS["host"]
    port: int = Field(DEFAULT_SETTINGS["port"], ge=1, le=65535)
    cors_origin: str = DEFAULT_SETTINGS["cors_origin"]
    log_level: str = DEFAULT_SETTINGS["log_level"]

    # Generator ceilings
    max_congruential_iterations: int = Field(DEFAULT_SETTINGS["max_congruential_iterations"], ge=1)
    middle_squares_max_iterations: int = Field(DEFAULT_SETTINGS["middle_squares_max_iterations"], ge=1)

    # Input size bounds; 4 * digits stays under the int/str conversion limit
    max_middle_square_digits: int = Field(DEFAULT_SETTINGS["max_middle_square_digits"], ge=1, le=1_000)
    # Miller-Rabin with fixed bases is exact up to about 2^81
    max_modulus_bits: int = Field(DEFAULT_SETTINGS["max_modulus_bits"], ge=2, le=80)

    # Sampler limits
    max_random_variables: int = Field(DEFAULT_SETTINGS["max_random_variables"], ge=1, le=10_000)
    sampler_trial_factor: int = Field(DEFAULT_SETTINGS["sampler_trial_factor"], ge=1)

    # Statistical test limits
    max_chi_square_intervals: int = Field(DEFAULT_SETTINGS["max_chi_square_intervals"], ge=2)
    max_sample_size: int = Field(DEFAULT_SETTINGS["max_sample_size"], ge=2)

    model_config = {"extra": "ignore", "frozen": True}


def load_settings(path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """
    Load settings from a JSON file, falling back to defaults.

    A missing or unreadable file is logged and ignored; a file with
    out-of-range values raises ValueError so a bad deployment fails fast.
    """
    path = path or os.environ.get(SETTINGS_ENV_VAR)
    if not path:
        return EngineSettings()

    try:
        with open(path, "r") as f:
            saved = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Settings file not found, using defaults: {path}")
        return EngineSettings()
    except json.JSONDecodeError as e:
        logger.warning(f"Settings file is not valid JSON ({e}), using defaults: {path}")
        return EngineSettings()

    if not isinstance(saved, dict):
        logger.warning(f"Settings file must contain a JSON object, using defaults: {path}")
        return EngineSettings()

    try:
        settings = EngineSettings(**{**DEFAULT_SETTINGS, **saved})
    except ValidationError as e:
        raise ValueError(f"Invalid settings in {path}: {e}") from e

    logger.info(f"Loaded settings from {path}")
    return settings
