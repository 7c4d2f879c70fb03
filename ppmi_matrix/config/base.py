"""
Configuration dataclass for the PPMI pipeline.

Provides a validated configuration object with sensible defaults.
"""

import logging
import numbers
from dataclasses import dataclass

from ppmi_matrix.errors import ConfigurationError


logger = logging.getLogger(__name__)


@dataclass
class PmiConfig:
    """Pipeline configuration."""

    min_df: int = 1
    """Minimum number of documents a token must appear in to enter the vocabulary."""

    window: int = 2
    """Symmetric co-occurrence window radius within a sentence."""

    smoothing: float = 1.0
    """Additive smoothing constant applied to every count."""

    num_workers: int = 1
    """Number of counting workers (1 = single-threaded)."""

    show_progress: bool = False
    """Whether to show tqdm progress bars."""

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If any value is out of range or mistyped
        """
        for name in ("min_df", "window", "num_workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            setattr(self, name, int(value))

        if isinstance(self.smoothing, bool) or not isinstance(self.smoothing, numbers.Real):
            raise ConfigurationError(f"smoothing must be a number, got {self.smoothing!r}")
        self.smoothing = float(self.smoothing)

        if self.window < 0:
            raise ConfigurationError(f"window must be non-negative, got {self.window}")
        if self.smoothing < 0:
            raise ConfigurationError(f"smoothing must be non-negative, got {self.smoothing}")
        if self.num_workers < 1:
            raise ConfigurationError(f"num_workers must be at least 1, got {self.num_workers}")

        if self.min_df <= 0:
            logger.warning(
                f"min_df={self.min_df} disables document-frequency filtering; "
                "every token enters the vocabulary"
            )
        if self.smoothing == 0:
            logger.warning(
                "smoothing=0: zero counts produce -inf/nan PMI values, which are dropped"
            )
