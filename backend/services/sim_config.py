"""Centralized configuration for the Deck Assistant backend.

This module reads simulation limits, deck rules and storage/logging
settings from environment variables (a .env file is loaded if present).
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# Defaults
DEFAULT_TRIALS = 1000
DEFAULT_MAX_TRIALS = 100_000
DEFAULT_HAND_SIZE = 5
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_WORKERS = 1
DEFAULT_MAX_COPIES = 3
DEFAULT_CHROMA_PATH = "./chroma_data"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SimConfig:
    """Runtime configuration."""

    default_trials: int
    max_trials: int
    default_hand_size: int
    chunk_size: int
    workers: int
    max_copies: int
    chroma_path: str
    log_level: str


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@lru_cache(maxsize=1)
def get_sim_config() -> SimConfig:
    """Load configuration from environment variables.

    Returns:
        SimConfig with simulation limits, deck rules and storage settings.

    Raises:
        ValueError: If a numeric variable is not an integer.
    """
    return SimConfig(
        default_trials=_int_env("HAND_SIM_DEFAULT_TRIALS", DEFAULT_TRIALS),
        max_trials=_int_env("HAND_SIM_MAX_TRIALS", DEFAULT_MAX_TRIALS),
        default_hand_size=_int_env("HAND_SIM_DEFAULT_HAND_SIZE", DEFAULT_HAND_SIZE),
        chunk_size=_int_env("HAND_SIM_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        workers=_int_env("HAND_SIM_WORKERS", DEFAULT_WORKERS),
        max_copies=_int_env("DECK_MAX_COPIES", DEFAULT_MAX_COPIES),
        chroma_path=os.getenv("CHROMA_PATH", DEFAULT_CHROMA_PATH),
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Useful for testing when environment variables change.
    """
    get_sim_config.cache_clear()
