"""Shared typed models.

This module defines the data models used by the normalizer, the store,
and the file and display boundaries to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass
class Slot:
    """One stored sequence.

    Attributes:
        sequence: Ordered values; types may be mixed and are never coerced.
        label: Unique name, or None for an anonymous slot.
    """

    sequence: list[Any] = field(default_factory=list)
    label: str | None = None


@dataclass(frozen=True)
class SlotSummary:
    """Read-only listing row for one slot.

    Attributes:
        index: Position of the slot in the store.
        label: Bound label, or None when anonymous.
        count: Number of values in the slot.
    """

    index: int
    label: str | None
    count: int


@dataclass(frozen=True)
class NormalizedEntry:
    """One resolved change for a target slot index.

    Attributes:
        sequence: Copied values to store or append.
        label: Fresh label to bind, or None to append to the slot.
    """

    sequence: tuple[Any, ...]
    label: str | None = None


@dataclass(frozen=True)
class FlatValues:
    """Scalar arguments forming one anonymous sequence."""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class SequenceList:
    """Unlabeled sequences addressed by position."""

    sequences: tuple[tuple[Any, ...], ...]


@dataclass(frozen=True)
class LabeledMap:
    """Sequences keyed by label, in argument order."""

    items: tuple[tuple[str, tuple[Any, ...]], ...]


ParsedInput = Union[FlatValues, SequenceList, LabeledMap]
