"""Statdata exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class StatDataError(Exception):
    """Base exception for all statdata failures."""


class StatDataConfigError(StatDataError):
    """Raised for invalid runtime configuration."""


class StatDataInputError(StatDataError):
    """Raised when call arguments match no accepted data shape."""


class StatDataNotLoadedError(StatDataError):
    """Raised when an index or label does not resolve to a loaded slot."""


class StatDataIOError(StatDataError):
    """Raised for save and restore failures at the file boundary."""
