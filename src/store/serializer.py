"""Store file serialization.

This module isolates encoding of a full slot collection to JSON or YAML
files, with optional gzip compression. It keeps the sequence store
focused on addressing and mutation.
"""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any, Sequence

import yaml

from core.constants import (
    COMPRESSED_SUFFIX,
    GZIP_MAGIC,
    PAYLOAD_FORMAT_VERSION,
    SERIALIZER_SUFFIXES,
    SUPPORTED_SERIALIZERS,
)
from core.errors import StatDataIOError
from core.types import Slot
from store.shape_normalizer import is_label


def resolve_serializer(path: Path, serializer: str | None, default: str) -> str:
    """Pick the serializer for a store file.

    Args:
        path: Store file path.
        serializer: Explicit serializer name, if any.
        default: Configured default serializer.

    Returns:
        Supported serializer name.

    Raises:
        StatDataIOError: If an explicit serializer is unsupported.
    """
    if serializer:
        name = serializer.strip().lower()
        if name not in SUPPORTED_SERIALIZERS:
            raise StatDataIOError(
                f"Unsupported serializer '{serializer}'. "
                f"Use one of {', '.join(SUPPORTED_SERIALIZERS)}."
            )
        return name
    suffixes = [suffix.lower() for suffix in path.suffixes]
    if suffixes and suffixes[-1] == COMPRESSED_SUFFIX:
        suffixes.pop()
    if suffixes and suffixes[-1] in SERIALIZER_SUFFIXES:
        return SERIALIZER_SUFFIXES[suffixes[-1]]
    return default


def resolve_compression(path: Path, compress: bool | None, default: bool) -> bool:
    """Decide whether a saved store file is gzip-compressed."""
    if compress is not None:
        return compress
    if path.suffix.lower() == COMPRESSED_SUFFIX:
        return True
    return default


def encode_slots(slots: Sequence[Slot], serializer: str) -> bytes:
    """Encode a slot collection into file bytes.

    Args:
        slots: Slots in store order.
        serializer: Serializer name.

    Returns:
        UTF-8 encoded payload.
    """
    payload = {
        "format_version": PAYLOAD_FORMAT_VERSION,
        "slots": [{"label": slot.label, "sequence": list(slot.sequence)} for slot in slots],
    }
    try:
        if serializer == "yaml":
            text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(payload, indent=2) + "\n"
    except (TypeError, ValueError, yaml.YAMLError) as error:
        raise StatDataIOError(
            f"Cannot serialize stored values as {serializer}: {error}. "
            "Store only numbers, strings and None values."
        ) from error
    return text.encode("utf-8")


def decode_slots(raw: bytes, serializer: str, source: Path) -> list[Slot]:
    """Decode file bytes into a slot collection.

    Args:
        raw: File content, gzip-compressed or plain.
        serializer: Serializer name.
        source: File path used in error messages.

    Returns:
        Decoded slots in stored order.

    Raises:
        StatDataIOError: If the content cannot be decoded or is malformed.
    """
    text = _decompressed_text(raw, source)
    try:
        if serializer == "yaml":
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise StatDataIOError(
            f"Failed to parse JSON store file at {source}: {error.msg}. "
            "Check the serializer or recreate the file with save()."
        ) from error
    except yaml.YAMLError as error:
        raise StatDataIOError(
            f"Failed to parse YAML store file at {source}: {error}. "
            "Check the serializer or recreate the file with save()."
        ) from error
    return _slots_from_payload(payload, source)


def write_store_file(
    path: Path,
    slots: Sequence[Slot],
    serializer: str,
    compress: bool,
) -> None:
    """Write a slot collection to disk.

    Args:
        path: Destination path.
        slots: Slots in store order.
        serializer: Serializer name.
        compress: Whether to gzip the payload.

    Raises:
        StatDataIOError: If the file cannot be written.
    """
    content = encode_slots(slots, serializer)
    if compress:
        content = gzip.compress(content)
    try:
        path.write_bytes(content)
    except OSError as error:
        raise StatDataIOError(
            f"Failed to write store file at {path}: {error}. "
            "Check that the directory exists and is writable."
        ) from error


def read_store_file(path: Path, serializer: str) -> list[Slot]:
    """Read a slot collection from disk.

    Args:
        path: Source path.
        serializer: Serializer name.

    Returns:
        Decoded slots.

    Raises:
        StatDataIOError: If the file is missing, unreadable or malformed.
    """
    if not path.is_file():
        raise StatDataIOError(
            f"There is no store file at {path}. Save data before loading it."
        )
    try:
        raw = path.read_bytes()
    except OSError as error:
        raise StatDataIOError(
            f"Failed to read store file at {path}: {error}. Check file permissions and retry."
        ) from error
    return decode_slots(raw, serializer, path)


def _decompressed_text(raw: bytes, source: Path) -> str:
    try:
        if raw.startswith(GZIP_MAGIC):
            raw = gzip.decompress(raw)
        return raw.decode("utf-8")
    except (OSError, EOFError, UnicodeDecodeError) as error:
        raise StatDataIOError(
            f"Failed to decode store file at {source}: {error}. "
            "The file is corrupt or was not written by save()."
        ) from error


def _slots_from_payload(payload: Any, source: Path) -> list[Slot]:
    """Validate a decoded payload and build slots.

    Args:
        payload: Decoded file content.
        source: File path used in error messages.

    Returns:
        Slots in stored order.

    Raises:
        StatDataIOError: If the payload layout is invalid.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("slots"), list):
        raise StatDataIOError(
            f"Invalid store file at {source}: expected an object with a 'slots' list."
        )
    slots: list[Slot] = []
    for position, item in enumerate(payload["slots"]):
        if not isinstance(item, dict) or not isinstance(item.get("sequence"), list):
            raise StatDataIOError(
                f"Invalid slot {position} in store file at {source}: "
                "expected an object with a 'sequence' list."
            )
        label = item.get("label")
        if label is not None and not isinstance(label, str):
            raise StatDataIOError(
                f"Invalid label for slot {position} in store file at {source}: "
                f"expected a string, got {type(label).__name__}."
            )
        # blank labels load as anonymous slots
        label = label if is_label(label) else None
        slots.append(Slot(sequence=list(item["sequence"]), label=label))
    return slots
