"""Runtime settings, read from the environment.

A ``.env`` file in the working directory is loaded first, so local
overrides do not need to be exported by hand.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    store_timeout: float = 2.0  # seconds to wait for a store before giving up
    log_level: str = "WARNING"
    update_retries: int = 3


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))

    data_dir = os.environ.get("STOREFRONT_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
        store_timeout=_positive_float("STOREFRONT_STORE_TIMEOUT", 2.0),
        log_level=os.environ.get("STOREFRONT_LOG_LEVEL", "WARNING").upper(),
        update_retries=_positive_int("STOREFRONT_UPDATE_RETRIES", 3),
    )


def _positive_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if not (value > 0 and math.isfinite(value)):
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
