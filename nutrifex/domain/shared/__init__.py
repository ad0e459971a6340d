"""Shared domain kernel: error taxonomy and ports."""
