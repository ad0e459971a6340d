"""Nutrifex - local persistence layer for foods and pantry inventory."""

__version__ = "0.1.0"
