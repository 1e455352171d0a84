"""Runtime configuration model for statdata.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from core.constants import (
    DEFAULT_DELIMITER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SERIALIZER,
    FALSE_FLAG_VALUES,
    SUPPORTED_SERIALIZERS,
    TRUE_FLAG_VALUES,
)
from core.errors import StatDataConfigError


@dataclass(frozen=True)
class StatDataConfig:
    """Validated runtime configuration.

    Attributes:
        serializer: Default serializer name for saved stores.
        compress: Whether saved stores are gzip-compressed by default.
        delimiter: Default delimiter for value dumps.
        log_level: Minimum level for emitted log events.
    """

    serializer: str = DEFAULT_SERIALIZER
    compress: bool = False
    delimiter: str = DEFAULT_DELIMITER
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "StatDataConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            StatDataConfigError: If environment values are invalid.
        """
        serializer = _parse_serializer(os.getenv("STATDATA_SERIALIZER", DEFAULT_SERIALIZER))
        compress = _parse_flag("STATDATA_COMPRESS", os.getenv("STATDATA_COMPRESS", "false"))
        delimiter = os.getenv("STATDATA_DELIMITER") or DEFAULT_DELIMITER
        log_level = _parse_log_level(os.getenv("STATDATA_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            serializer=serializer,
            compress=compress,
            delimiter=delimiter,
            log_level=log_level,
        )


def _parse_serializer(raw_value: str) -> str:
    """Parse the default serializer environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Lower-cased supported serializer name.

    Raises:
        StatDataConfigError: If the serializer is not supported.
    """
    serializer = raw_value.strip().lower()
    if serializer not in SUPPORTED_SERIALIZERS:
        raise StatDataConfigError(
            "Invalid STATDATA_SERIALIZER value: "
            f"expected one of {', '.join(SUPPORTED_SERIALIZERS)}, got '{raw_value}'."
        )
    return serializer


def _parse_flag(variable: str, raw_value: str) -> bool:
    normalized = raw_value.strip().lower()
    if normalized in TRUE_FLAG_VALUES:
        return True
    if normalized in FALSE_FLAG_VALUES:
        return False
    raise StatDataConfigError(
        f"Invalid {variable} value: expected a boolean flag, got '{raw_value}'. "
        f"Use one of {', '.join(TRUE_FLAG_VALUES + FALSE_FLAG_VALUES)}."
    )


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased standard level name.

    Raises:
        StatDataConfigError: If the level name is unknown.
    """
    level_name = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise StatDataConfigError(
            f"Invalid STATDATA_LOG_LEVEL value: got '{raw_value}'. "
            "Use DEBUG, INFO, WARNING, ERROR or CRITICAL."
        )
    return level_name
