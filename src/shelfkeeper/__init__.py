"""Shelfkeeper: lending library with per-book waitlists."""

__version__ = "0.1.0"
