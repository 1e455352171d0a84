"""Shared runtime foundation.

This module holds configuration, errors, constants, logging setup,
and the typed models used across the store and CLI layers.
"""
