"""Command line interface.

This module exposes argparse commands over saved sequence stores.
"""
