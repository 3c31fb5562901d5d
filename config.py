"""Environment-driven settings for the app and its storage backend."""

import logging
import logging.config
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from microservice_clients import DEFAULT_PORTS, TIMEOUT_MS, ServiceBackend
from repo_json import JSONFileBackend, StorageBackend
from store import STORAGE_KEY

BACKENDS = ("file", "service")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class AppConfig:
    backend: str = "file"
    data_path: str = "data/habits.json"
    storage_key: str = STORAGE_KEY
    service_port: int = DEFAULT_PORTS["storage"]
    service_timeout_ms: int = TIMEOUT_MS
    log_level: str = "INFO"

    def validate(self):
        errors = []
        if self.backend not in BACKENDS:
            errors.append(f"HABITS_BACKEND must be one of {', '.join(BACKENDS)}, got {self.backend!r}")
        if self.log_level not in LOG_LEVELS:
            errors.append(f"HABITS_LOG_LEVEL {self.log_level!r} is not a logging level")
        if not 1024 <= self.service_port <= 65535:
            errors.append(f"Port {self.service_port} is outside 1024-65535")
        if self.service_timeout_ms <= 0:
            errors.append("HABITS_SERVICE_TIMEOUT_MS must be positive")
        if not self.storage_key:
            errors.append("HABITS_STORAGE_KEY must not be empty")
        if errors:
            raise ValueError("Invalid configuration:\n" + "\n".join(f"- {e}" for e in errors))

    def make_backend(self) -> StorageBackend:
        if self.backend == "service":
            return ServiceBackend(self.service_port, self.service_timeout_ms)
        return JSONFileBackend(self.data_path)

    def get_logging_config(self) -> Dict[str, Any]:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": self.log_level,
                    "formatter": "default",
                    "stream": sys.stderr,
                },
            },
            "root": {"level": self.log_level, "handlers": ["console"]},
        }


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    env = os.environ if env is None else env
    config = AppConfig(
        backend=env.get("HABITS_BACKEND", "file").strip().lower(),
        data_path=env.get("HABITS_DATA_PATH", "data/habits.json"),
        storage_key=env.get("HABITS_STORAGE_KEY", STORAGE_KEY),
        service_port=_int_env(env, "HABITS_SERVICE_PORT", DEFAULT_PORTS["storage"]),
        service_timeout_ms=_int_env(env, "HABITS_SERVICE_TIMEOUT_MS", TIMEOUT_MS),
        log_level=env.get("HABITS_LOG_LEVEL", "INFO").strip().upper(),
    )
    config.validate()
    return config


def setup_logging(config: AppConfig):
    logging.config.dictConfig(config.get_logging_config())
