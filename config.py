import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


HOST = _get_env("RECEIPTS_HOST", "0.0.0.0")
PORT = _get_env_int("RECEIPTS_PORT", 5000)
LOG_LEVEL = _get_env("RECEIPTS_LOG_LEVEL", "INFO").upper()
STRICT_VALIDATION = _get_env_bool("RECEIPTS_STRICT_VALIDATION", False)


def setup_logging(level: str = LOG_LEVEL):
    """ Basic console logging for the service """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
