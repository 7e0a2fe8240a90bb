# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Default parameters and logging setup for the wavelet variance package.

The log level can be overridden with the WAVELET_VARIANCE_LOG_LEVEL
environment variable.
"""

import os
import logging
from typing import Final, Optional, Union

DEFAULT_FILTER: Final[str] = "haar"
DEFAULT_BOUNDARY: Final[str] = "periodic"
DEFAULT_LEVELS: Final[int] = 4
DEFAULT_P: Final[float] = 0.025  # (1 - 2p) central interval
DEFAULT_VARIANCE_TYPE: Final[str] = "eta3"
DEFAULT_COVARIANCE_MODE: Final[str] = "no"

LOG_LEVEL: Final[str] = os.environ.get("WAVELET_VARIANCE_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def validate_config() -> None:
    """Validate the package defaults."""
    if DEFAULT_LEVELS <= 0:
        raise ValueError("DEFAULT_LEVELS must be positive")
    if not 0.0 < DEFAULT_P < 0.5:
        raise ValueError("DEFAULT_P must be between 0 and 0.5")


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Logging level name or number. Defaults to LOG_LEVEL, read
            from WAVELET_VARIANCE_LOG_LEVEL.

    Returns:
        logging.Logger: The package root logger

    Raises:
        ValueError: If the level name is unknown
    """
    logger = logging.getLogger("wavelet_variance")
    if level is None:
        level = LOG_LEVEL
    logger.setLevel(_resolve_level(level))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


# Validate configuration on import
validate_config()
