"""Public SDK surface for statdata.

This module provides a stable import path for library users.
It re-exports the sequence store, its configuration, and error types.
"""

from __future__ import annotations

from core.config import StatDataConfig
from core.errors import (
    StatDataConfigError,
    StatDataError,
    StatDataInputError,
    StatDataIOError,
    StatDataNotLoadedError,
)
from core.types import SlotSummary
from store.lag_transform import crosslag
from store.sequence_store import SequenceStore
from store.validity import all_full, all_numeric, all_proportions

__all__ = [
    "SequenceStore",
    "SlotSummary",
    "StatDataConfig",
    "StatDataConfigError",
    "StatDataError",
    "StatDataIOError",
    "StatDataInputError",
    "StatDataNotLoadedError",
    "all_full",
    "all_numeric",
    "all_proportions",
    "crosslag",
]
