"""Hacker News "newest" listing mirror with a background refresh pipeline."""

__version__ = "0.1.0"
