"""Configuration for the PPMI pipeline."""

from ppmi_matrix.config.base import PmiConfig
from ppmi_matrix.config.loader import load_config, save_config

__all__ = [
    "PmiConfig",
    "load_config",
    "save_config",
]
