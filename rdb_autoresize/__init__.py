"""Automatic volume growth for managed database instances."""

__version__ = "0.1.0"
