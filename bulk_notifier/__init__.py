"""Bulk email and SMS delivery with provider fallback."""

__version__ = "0.1.0"
