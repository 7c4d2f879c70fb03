"""
Entry point for `python -m ppmi_matrix`.

Usage:
    python -m ppmi_matrix --input corpus.jsonl --output outputs/ppmi
"""

import sys

from ppmi_matrix.cli import main


if __name__ == "__main__":
    sys.exit(main())
