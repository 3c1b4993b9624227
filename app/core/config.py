# app/core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# environment variables
MONGODB_ENDPOINT_ENV = "MONGODB_ENDPOINT"
MONGODB_DATABASE_ENV = "MONGODB_DATABASE"
MONGODB_COLLECTION_ENV = "MONGODB_COLLECTION"
MONGODB_TIMEOUT_ENV = "MONGODB_TIMEOUT_SECONDS"
APP_PORT_ENV = "APP_PORT"
LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_DATABASE = "enbuild"
DEFAULT_COLLECTION = "MlDataset"
DEFAULT_LISTEN = ":8081"
DEFAULT_TIMEOUT_SECONDS = 10.0
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(RuntimeError):
    """Required configuration is missing or unparseable."""


@dataclass(frozen=True)
class Settings:
    mongodb_endpoint: str
    database: str = DEFAULT_DATABASE
    collection: str = DEFAULT_COLLECTION
    host: str = "0.0.0.0"
    port: int = 8081
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"


def parse_listen_address(value: str) -> Tuple[str, int]:
    """
    Accepts ":8081", "8081" or "127.0.0.1:8081".
    An empty host means all interfaces.
    """
    raw = value.strip()
    host, sep, port_part = raw.rpartition(":")
    if not sep:
        host, port_part = "", raw

    try:
        port = int(port_part)
    except ValueError:
        raise ConfigError(f"invalid {APP_PORT_ENV} value: {value!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"{APP_PORT_ENV} out of range: {value!r}")

    return host or "0.0.0.0", port


def _with_default(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name)
    if not value:
        logger.info("missing environment variable: %s defaulting to %s", name, default)
        return default
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    endpoint = env.get(MONGODB_ENDPOINT_ENV)
    if not endpoint:
        raise ConfigError(f"You need to set the environment variable: {MONGODB_ENDPOINT_ENV}")

    database = _with_default(env, MONGODB_DATABASE_ENV, DEFAULT_DATABASE)
    collection = _with_default(env, MONGODB_COLLECTION_ENV, DEFAULT_COLLECTION)
    host, port = parse_listen_address(env.get(APP_PORT_ENV) or DEFAULT_LISTEN)

    raw_timeout = env.get(MONGODB_TIMEOUT_ENV)
    timeout = DEFAULT_TIMEOUT_SECONDS
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"invalid {MONGODB_TIMEOUT_ENV} value: {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"{MONGODB_TIMEOUT_ENV} must be positive")

    log_level = (env.get(LOG_LEVEL_ENV) or "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"invalid {LOG_LEVEL_ENV} value: {log_level!r}")

    return Settings(
        mongodb_endpoint=endpoint,
        database=database,
        collection=collection,
        host=host,
        port=port,
        timeout_seconds=timeout,
        log_level=log_level,
    )
