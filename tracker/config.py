"""Environment-driven settings for the tracker page and CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Tuple

from .data_model import DEFAULT_FINANCING_DIVISOR, Target, financed_targets
from .engine.progress import DEFAULT_MRR_TARGET
from .engine.storage import DEFAULT_STORAGE_KEY

TRUTHY = {"1", "true", "yes", "on"}
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env.get(name, default))
    except (TypeError, ValueError):
        return default


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, default))
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    data_path: str = "user_data/tracker.json"
    storage_key: str = DEFAULT_STORAGE_KEY
    mrr_target: float = DEFAULT_MRR_TARGET
    financing_divisor: float = DEFAULT_FINANCING_DIVISOR
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False
    targets: Tuple[Target, ...] = field(default_factory=financed_targets)


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env
    divisor = _float_env(env, "TRACKER_FINANCING_DIVISOR", DEFAULT_FINANCING_DIVISOR)
    if divisor <= 0:
        divisor = DEFAULT_FINANCING_DIVISOR
    return Settings(
        data_path=env.get("TRACKER_DATA_PATH", "user_data/tracker.json"),
        storage_key=env.get("TRACKER_STORAGE_KEY", DEFAULT_STORAGE_KEY) or DEFAULT_STORAGE_KEY,
        mrr_target=_float_env(env, "TRACKER_MRR_TARGET", DEFAULT_MRR_TARGET),
        financing_divisor=divisor,
        log_level=str(env.get("TRACKER_LOG_LEVEL", "INFO")).upper(),
        host=env.get("TRACKER_HOST", "127.0.0.1"),
        port=_int_env(env, "TRACKER_PORT", 8050),
        debug=str(env.get("TRACKER_DEBUG", "")).lower() in TRUTHY,
        targets=financed_targets(divisor=divisor),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
