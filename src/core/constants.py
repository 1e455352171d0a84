"""Core constants used across statdata modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_DELIMITER = " "
DEFAULT_SERIALIZER = "json"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_SERIALIZERS = ("json", "yaml")
SERIALIZER_SUFFIXES = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}
COMPRESSED_SUFFIX = ".gz"
GZIP_MAGIC = b"\x1f\x8b"
PAYLOAD_FORMAT_VERSION = 1
ANONYMOUS_LABEL_PLACEHOLDER = "-"
TABLE_HEADERS = ("index", "label", "N")
TRUE_FLAG_VALUES = ("1", "true", "yes", "on")
FALSE_FLAG_VALUES = ("0", "false", "no", "off")
