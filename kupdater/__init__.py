"""Mainline kernel updater: catalog lookup, staged download and install."""

__version__ = "1.0.0"
