"""
Tests for the command-line entry point.
"""

import json
import logging

import numpy as np
import pytest

from ppmi_matrix.cli import main
from ppmi_matrix.matrix import PmiCooccurrenceMatrix


def _write_corpus(path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps([["a", "b", "c"]]) + "\n")
        f.write(json.dumps({"sentences": [["a", "b"]]}) + "\n")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers installed by setup_logging."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestCli:
    """End-to-end CLI runs."""

    def test_fit_and_save(self, tmp_path) -> None:
        """The CLI writes a loadable matrix directory."""
        corpus = tmp_path / "corpus.jsonl"
        output = tmp_path / "out"
        _write_corpus(corpus)

        exit_code = main([
            "--input", str(corpus),
            "--output", str(output),
            "--min-df", "1",
            "--window", "1",
            "--smoothing", "1.0",
        ])

        assert exit_code == 0
        loaded = PmiCooccurrenceMatrix.load(output)
        assert loaded.vocabulary == ("a", "b", "c")
        assert np.isclose(loaded.get_pmi("a", "b"), np.log(2.25))
        assert (output / "ppmi.log").exists()

    def test_config_file(self, tmp_path) -> None:
        """Values from --config are used."""
        corpus = tmp_path / "corpus.jsonl"
        config = tmp_path / "ppmi.yaml"
        output = tmp_path / "out"
        _write_corpus(corpus)
        config.write_text("min_df: 2\nwindow: 1\n", encoding="utf-8")

        assert main(["--input", str(corpus), "--output", str(output), "--config", str(config)]) == 0
        assert PmiCooccurrenceMatrix.load(output).vocabulary == ("a", "b")

    def test_invalid_config_returns_error(self, tmp_path) -> None:
        """A negative window exits with status 1."""
        corpus = tmp_path / "corpus.jsonl"
        _write_corpus(corpus)

        exit_code = main([
            "--input", str(corpus),
            "--output", str(tmp_path / "out"),
            "--window", "-1",
        ])

        assert exit_code == 1

    def test_missing_corpus_returns_error(self, tmp_path) -> None:
        """A missing corpus file exits with status 1."""
        exit_code = main([
            "--input", str(tmp_path / "missing.jsonl"),
            "--output", str(tmp_path / "out"),
        ])

        assert exit_code == 1
