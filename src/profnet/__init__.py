"""Profnet: connection graph engine for a professional network."""

__version__ = "0.1.0"
