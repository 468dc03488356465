"""Synchronous and fluent client surfaces for Azure services."""

__version__ = "0.1.0"
