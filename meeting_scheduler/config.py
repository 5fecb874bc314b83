"""Service configuration loader.

Settings live in `scheduler_config.yaml` at the project root, and every key
can be overridden through the environment.

The loader is intentionally small and tolerant:
- If the YAML file is missing or invalid, it falls back to empty defaults.
- Environment values that fail to parse are ignored with a warning.

The YAML schema:

- host: <string>             (env: MEETINGS_HOST, default 0.0.0.0)
- port: <int>                (env: MEETINGS_PORT, default 8080)
- log_level: <string>        (env: LOG_LEVEL, default INFO)
- random_seed: <int | null>  (env: MEETINGS_RANDOM_SEED, default null)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

import yaml

logger = logging.getLogger("meeting_scheduler.config")

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class ServiceSettings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    random_seed: Optional[int] = None


def _project_root() -> str:
    # meeting_scheduler/config.py -> meeting_scheduler -> project root
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _default_config_path() -> str:
    return os.path.join(_project_root(), "scheduler_config.yaml")


@lru_cache(maxsize=4)
def load_service_config(path: Optional[str] = None) -> dict[str, Any]:
    config_path = path or os.getenv("MEETINGS_CONFIG_PATH") or _default_config_path()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as e:
        # Keep this loader non-fatal; failures should not crash the server.
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}


def _as_int(name: str, value: Any, fallback: Optional[int]) -> Optional[int]:
    if value is None or value == "":
        return fallback
    if isinstance(value, bool):
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return fallback
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return fallback


def get_service_settings(path: Optional[str] = None) -> ServiceSettings:
    config = load_service_config(path)

    host = os.getenv("MEETINGS_HOST") or config.get("host")
    log_level = os.getenv("LOG_LEVEL") or config.get("log_level")

    port = _as_int("port", config.get("port"), DEFAULT_PORT)
    port = _as_int("MEETINGS_PORT", os.getenv("MEETINGS_PORT"), port)

    seed = _as_int("random_seed", config.get("random_seed"), None)
    seed = _as_int("MEETINGS_RANDOM_SEED", os.getenv("MEETINGS_RANDOM_SEED"), seed)

    if not isinstance(log_level, str) or not isinstance(
        logging.getLevelName(log_level.upper()), int
    ):
        if log_level is not None:
            logger.warning(f"Ignoring unknown log level {log_level!r}")
        log_level = DEFAULT_LOG_LEVEL

    return ServiceSettings(
        host=host if isinstance(host, str) else DEFAULT_HOST,
        port=port if port is not None else DEFAULT_PORT,
        log_level=log_level.upper(),
        random_seed=seed,
    )
