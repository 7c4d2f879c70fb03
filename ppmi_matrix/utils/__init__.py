"""Utility module for the PPMI pipeline."""

from ppmi_matrix.utils.logging import setup_logging

__all__ = [
    "setup_logging",
]
