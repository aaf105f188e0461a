"""Ideographic Description Sequence trees."""

__version__ = "0.1.0"
