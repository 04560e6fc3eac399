"""
Environment-driven configuration for both services.

Values are read once, when the config class is defined, from the process
environment after an optional ``.env`` file has been loaded.
"""

import logging
import os

from dotenv import load_dotenv

from microservices.errors import ConfigError

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


class BaseConfig:
    HOST = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class UserServiceConfig(BaseConfig):
    SERVICE_NAME = "user-service"
    PORT = _env_int("PORT", 4001)
    USER_SEED_FILE = os.getenv("USER_SEED_FILE")


class OrderServiceConfig(BaseConfig):
    SERVICE_NAME = "order-service"
    PORT = _env_int("PORT", 4000)
    USER_SERVICE_URL = os.getenv("USER_SERVICE_URL", "http://localhost:4001")
    # Seconds to wait on the directory before the lookup is treated as unreachable
    USER_SERVICE_TIMEOUT = _env_float("USER_SERVICE_TIMEOUT", 3.0)


def configure_logging(level: str = "INFO"):
    """Configure root logging once for the process."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
