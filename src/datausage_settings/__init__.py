"""Datausage Settings - presentation logic for the data usage and recents screens.

This package decides which network template the data usage screen
summarizes, computes the usage header's progress ratios, and evaluates the
recents settings screen, all from explicit platform snapshots.
"""

from datausage_settings.__main__ import main

__all__ = ["main"]
