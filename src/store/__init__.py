"""Sequence storage layer.

This module holds the in-memory sequence store and its collaborators:
argument shape normalization, validity checks, lag realignment,
file serialization, and table rendering.
"""
