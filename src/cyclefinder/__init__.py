"""Cycle Finder - reference cycle analysis whitelist."""

__version__ = "0.1.0"
