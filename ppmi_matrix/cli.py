"""
CLI for building a PPMI co-occurrence matrix from a tokenized corpus.

Usage:
    python -m ppmi_matrix --input corpus.jsonl --output outputs/ppmi
    python -m ppmi_matrix --input corpus.jsonl --output outputs/ppmi --config configs/ppmi.yaml
    python -m ppmi_matrix --input corpus.jsonl --output outputs/ppmi --min-df 5 --window 4
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from ppmi_matrix.config import PmiConfig, load_config
from ppmi_matrix.corpus import load_documents_jsonl
from ppmi_matrix.errors import ConfigurationError, CorpusFormatError
from ppmi_matrix.matrix import PmiCooccurrenceMatrix
from ppmi_matrix.utils import setup_logging


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build a sparse Positive PMI co-occurrence matrix",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="JSONL corpus, one document (list of token lists) per line",
    )

    parser.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output directory for the saved matrix",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )

    # Override options
    parser.add_argument(
        "--min-df",
        type=int,
        default=None,
        help="Minimum document frequency",
    )

    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Co-occurrence window radius",
    )

    parser.add_argument(
        "--smoothing",
        type=float,
        default=None,
        help="Additive smoothing constant",
    )

    parser.add_argument(
        "--num-workers",
        type=int,
        default=None,
        help="Number of counting workers",
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show progress bars",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PmiConfig:
    """
    Build configuration from args and config file.

    Args:
        args: Parsed command line arguments

    Returns:
        PmiConfig instance
    """
    overrides = {
        "min_df": args.min_df,
        "window": args.window,
        "smoothing": args.smoothing,
        "num_workers": args.num_workers,
    }
    if args.progress:
        overrides["show_progress"] = True

    return load_config(args.config, overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(
        output_dir=args.output,
        level=logging.DEBUG if args.debug else logging.INFO,
    )

    try:
        config = build_config(args)
        documents = load_documents_jsonl(args.input)
    except (ConfigurationError, CorpusFormatError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error(str(e))
        return 1

    logger.info(
        f"Config: min_df={config.min_df}, window={config.window}, "
        f"smoothing={config.smoothing}, num_workers={config.num_workers}"
    )

    result = PmiCooccurrenceMatrix.fit_with_config(documents, config)
    result.save(args.output)

    stats = result.get_stats()
    logger.info(
        f"Done: {stats.vocab_size} words, {stats.total_tokens} tokens, "
        f"{stats.nnz} positive PMI entries"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
