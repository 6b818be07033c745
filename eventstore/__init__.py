"""Persistence layer for scheduled events, their divisions and feed items."""

__version__ = "0.1.0"
