"""Carapace — diff intake for bounded-context code review."""

__version__ = "0.1.0"
