import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from minio_operate.config import load_config

# Global configuration
_LOG_CONFIG = {
    "level": logging.INFO,
    "formatter": logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
    "is_disabled": False
}

_CONFIGURED_LOGGERS = set()


def init_logger(config_path: Optional[Union[str, Path]] = None):
    """
    Initialize logger configuration from the config file.
    LOG_DETAIL_LEVEL (NONE / LOW / HIGH) may also be set in the environment,
    which takes precedence over the file.
    This should be called once at application startup.
    """
    # Reload .env to ensure we have the latest values
    load_dotenv(override=True)

    config = load_config(config_path)
    log_level = os.getenv("LOG_DETAIL_LEVEL") or config.get("LOG_DETAIL_LEVEL", "HIGH")
    log_level = str(log_level).upper()

    if log_level == "NONE":
        _LOG_CONFIG["is_disabled"] = True
        _LOG_CONFIG["level"] = logging.CRITICAL + 1
        _LOG_CONFIG["formatter"] = None
    elif log_level == "LOW":
        _LOG_CONFIG["is_disabled"] = False
        _LOG_CONFIG["level"] = logging.INFO
        _LOG_CONFIG["formatter"] = logging.Formatter('[%(levelname)s]: %(message)s')
    else:  # HIGH or default
        _LOG_CONFIG["is_disabled"] = False
        _LOG_CONFIG["level"] = logging.INFO
        _LOG_CONFIG["formatter"] = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Loggers handed out before initialization pick up the new settings
    for name in list(_CONFIGURED_LOGGERS):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        get_logger(name)


def get_logger(name: str):
    """
    Get a configured logger instance.
    Uses the configuration set by init_logger().
    If init_logger() has not been called, it uses default settings (HIGH).
    """
    logger = logging.getLogger(name)
    _CONFIGURED_LOGGERS.add(name)

    # Only configure if handlers haven't been added yet
    if not logger.handlers:
        if _LOG_CONFIG["is_disabled"]:
            logger.setLevel(logging.CRITICAL + 1)
            logger.addHandler(logging.NullHandler())
            return logger

        logger.setLevel(_LOG_CONFIG["level"])

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(_LOG_CONFIG["level"])

        if _LOG_CONFIG["formatter"]:
            handler.setFormatter(_LOG_CONFIG["formatter"])

        logger.addHandler(handler)

        # Prevent propagation to root logger if it's also configured to avoid double logging
        logger.propagate = False

    return logger
