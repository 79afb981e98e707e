"""Engine configuration, read from the environment (and a local .env file)."""

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "GOLF_"


class EngineConfig(BaseModel):
    """Tunable constants for the scoring engine."""

    # Stableford awards ``base - net_to_par`` per hole, clamped to [0, max].
    # Cap of 6, not the conventional 5.
    stableford_base_points: int = Field(2, ge=0)
    stableford_max_points: int = Field(6, ge=0)
    ryder_cup_target_points: float = Field(14.5, gt=0)
    default_hole_count: int = Field(18, ge=1, le=18)
    handicap_rounding: Literal["truncate", "round"] = "truncate"
    log_level: str = "INFO"


_ENV_FIELDS = {
    "stableford_base_points": "STABLEFORD_BASE_POINTS",
    "stableford_max_points": "STABLEFORD_MAX_POINTS",
    "ryder_cup_target_points": "RYDER_CUP_TARGET_POINTS",
    "default_hole_count": "DEFAULT_HOLE_COUNT",
    "handicap_rounding": "HANDICAP_ROUNDING",
    "log_level": "LOG_LEVEL",
}


@lru_cache(maxsize=1)
def get_config() -> EngineConfig:
    """
    Load engine configuration from ``GOLF_*`` environment variables.

    A ``.env`` file in the working directory is honoured. Unset variables
    fall back to the model defaults. The result is cached; call
    ``clear_config_cache()`` after changing the environment.

    Raises:
        ValidationError: If a variable holds a value the model rejects
    """
    load_dotenv()
    values = {}
    for field_name, suffix in _ENV_FIELDS.items():
        raw = os.environ.get(ENV_PREFIX + suffix)
        if raw is not None and raw != "":
            values[field_name] = raw
    return EngineConfig(**values)


def clear_config_cache() -> None:
    """Drop the cached config so the next ``get_config()`` re-reads the environment."""
    get_config.cache_clear()
