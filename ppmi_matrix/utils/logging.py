"""
Logging utilities for the PPMI pipeline.

Provides:
- Console logging with colored output
- File logging
"""

import logging
import sys
from pathlib import Path
from typing import Optional


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colored output for different log levels."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def __init__(self, fmt: str, use_colors: bool = True):
        """
        Initialize formatter.

        Args:
            fmt: Log format string
            use_colors: Whether to use ANSI colors
        """
        super().__init__(fmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with optional colors, leaving the record untouched."""
        message = super().format(record)
        if not self.use_colors:
            return message
        color = self.LEVEL_COLORS.get(record.levelno, Colors.RESET)
        return f"{color}{message}{Colors.RESET}"


def setup_logging(
    output_dir: Optional[str] = None,
    level: int = logging.INFO,
    log_file: str = "ppmi.log",
    use_colors: bool = True,
) -> logging.Logger:
    """
    Setup logging for a pipeline run.

    Args:
        output_dir: Directory for log files. If None, only console logging.
        level: Logging level
        log_file: Name of log file
        use_colors: Whether to use colored console output

    Returns:
        Configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter("%(asctime)s | %(levelname)s | %(message)s", use_colors=use_colors)
    )
    logger.addHandler(console_handler)

    if output_dir:
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(output_path / log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(file_handler)

    return logger

