"""Positive PMI co-occurrence matrix: the public ``fit`` entry point.

Pipeline (each stage completes before the next starts):
1. Document-frequency filter on the raw corpus (distinct tokens per document)
2. Lexicographically sorted vocabulary and its inverse index
3. Pruning: a new corpus holding only in-vocabulary tokens
4. Unigram and windowed co-occurrence counts over the pruned corpus
5. Smoothed PMI, keeping only strictly positive entries

Example:
    >>> docs = [[["a", "b", "c"]], [["a", "b"]]]
    >>> result = PmiCooccurrenceMatrix.fit(docs, min_df=1, window=1, smoothing=1.0)
    >>> result.vocabulary
    ('a', 'b', 'c')
    >>> result.number_of_words()
    3
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

import numpy as np
from scipy import sparse

from ppmi_matrix.config import PmiConfig
from ppmi_matrix.cooccurrence import count_corpus
from ppmi_matrix.corpus import DocumentLike, as_documents, prune_documents
from ppmi_matrix.pmi_calculator import build_pmi_matrix
from ppmi_matrix.vocabulary import Vocabulary


logger = logging.getLogger(__name__)


@dataclass
class PmiMatrixStats:
    """Statistics from PMI matrix construction.

    Attributes:
        vocab_size: Number of tokens in the vocabulary
        total_documents: Number of documents in the input corpus
        total_sentences: Number of sentences in the input corpus
        total_tokens: Number of in-vocabulary token occurrences
        total_pairs: Number of distinct co-occurring (token, token) pairs
        nnz: Number of stored (positive) PMI entries
        sparsity: Fraction of matrix cells that are implicit zeros
    """

    vocab_size: int = 0
    total_documents: int = 0
    total_sentences: int = 0
    total_tokens: int = 0
    total_pairs: int = 0
    nnz: int = 0
    sparsity: float = 0.0


def _freeze(matrix: sparse.csr_matrix) -> sparse.csr_matrix:
    matrix.sum_duplicates()
    matrix.sort_indices()
    for array in (matrix.data, matrix.indices, matrix.indptr):
        array.flags.writeable = False
    return matrix


class PmiCooccurrenceMatrix:
    """Immutable Positive PMI matrix over a fixed vocabulary.

    Row and column ``i`` both correspond to ``vocabulary[i]``. Use ``fit`` to
    build one from a corpus or ``load`` to read a saved one.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        pmi_matrix: sparse.csr_matrix,
        config: Optional[PmiConfig] = None,
        stats: Optional[PmiMatrixStats] = None,
    ):
        size = len(vocabulary)
        if pmi_matrix.shape != (size, size):
            raise ValueError(
                f"PMI matrix shape {pmi_matrix.shape} does not match vocabulary size {size}"
            )
        self._vocabulary = vocabulary
        self._pmi_matrix = _freeze(sparse.csr_matrix(pmi_matrix))
        self._config = config or PmiConfig()
        self._stats = stats or PmiMatrixStats(
            vocab_size=size,
            nnz=int(self._pmi_matrix.nnz),
            sparsity=_sparsity(self._pmi_matrix),
        )

    @classmethod
    def fit(
        cls,
        documents: Iterable[DocumentLike],
        min_df: int = 1,
        window: int = 2,
        smoothing: float = 1.0,
        num_workers: int = 1,
        show_progress: bool = False,
    ) -> "PmiCooccurrenceMatrix":
        """Build the PPMI matrix of a tokenized corpus.

        The input documents are not modified.

        Args:
            documents: Documents as ``Document`` objects or nested token lists
            min_df: Minimum document frequency for a token to be kept
            window: Symmetric co-occurrence window radius
            smoothing: Additive smoothing constant
            num_workers: Number of counting workers
            show_progress: Whether to show progress bars

        Returns:
            Fitted matrix

        Raises:
            ConfigurationError: If window or smoothing is negative
        """
        config = PmiConfig(
            min_df=min_df,
            window=window,
            smoothing=smoothing,
            num_workers=num_workers,
            show_progress=show_progress,
        )
        return cls.fit_with_config(documents, config)

    @classmethod
    def fit_with_config(
        cls,
        documents: Iterable[DocumentLike],
        config: PmiConfig,
    ) -> "PmiCooccurrenceMatrix":
        """Build the PPMI matrix using a ``PmiConfig``."""
        config.validate()
        documents = as_documents(documents)

        # Step 1-2: vocabulary from document frequencies
        vocabulary = Vocabulary.from_documents(
            documents, config.min_df, show_progress=config.show_progress
        )

        # Step 3: prune out-of-vocabulary tokens
        pruned = prune_documents(documents, vocabulary.token_to_index)

        # Step 4: unigram and co-occurrence counts
        unigrams, cooccurrence = count_corpus(
            pruned,
            config.window,
            num_workers=config.num_workers,
            show_progress=config.show_progress,
        )

        # Step 5: positive PMI
        pmi_matrix = build_pmi_matrix(vocabulary, unigrams, cooccurrence, config.smoothing)

        stats = PmiMatrixStats(
            vocab_size=len(vocabulary),
            total_documents=len(documents),
            total_sentences=sum(len(doc.sentences) for doc in documents),
            total_tokens=int(sum(unigrams.values())),
            total_pairs=cooccurrence.num_pairs,
            nnz=int(pmi_matrix.nnz),
            sparsity=_sparsity(pmi_matrix),
        )
        logger.info(
            f"Fitted PPMI matrix: {stats.vocab_size} words, {stats.nnz} entries, "
            f"sparsity {stats.sparsity:.4f}"
        )

        return cls(vocabulary, pmi_matrix, config=config, stats=stats)

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        """Tokens in index order."""
        return self._vocabulary.index_to_token

    @property
    def token_to_index(self) -> Mapping[str, int]:
        """Read-only token -> index mapping."""
        return self._vocabulary.token_to_index

    @property
    def pmi_matrix(self) -> sparse.csr_matrix:
        """Sparse (V, V) PPMI matrix with read-only buffers."""
        return self._pmi_matrix

    @property
    def config(self) -> PmiConfig:
        return self._config

    def number_of_words(self) -> int:
        return len(self._vocabulary)

    def get_pmi(self, term1: str, term2: str) -> float:
        """Get the stored PPMI value for a pair of terms.

        Returns:
            PPMI value (0.0 if either term is out of vocabulary or the pair
            has no positive entry)
        """
        idx1 = self.token_to_index.get(term1)
        idx2 = self.token_to_index.get(term2)
        if idx1 is None or idx2 is None:
            return 0.0
        return float(self._pmi_matrix[idx1, idx2])

    def get_row(self, term: str) -> Dict[str, float]:
        """Get the positive PMI entries of a term's row as token -> value."""
        idx = self.token_to_index.get(term)
        if idx is None:
            return {}
        start, end = self._pmi_matrix.indptr[idx], self._pmi_matrix.indptr[idx + 1]
        return {
            self.vocabulary[col]: float(value)
            for col, value in zip(
                self._pmi_matrix.indices[start:end], self._pmi_matrix.data[start:end]
            )
        }

    def get_stats(self) -> PmiMatrixStats:
        return self._stats

    def save(self, path: Union[str, Path]) -> None:
        """Save the matrix, vocabulary, config and stats to a directory.

        Args:
            path: Directory path to save files
        """
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)

        sparse.save_npz(path / "pmi_matrix.npz", self._pmi_matrix)

        with open(path / "vocabulary.json", "w", encoding="utf-8") as f:
            json.dump(list(self.vocabulary), f, ensure_ascii=False, indent=2)

        with open(path / "config.json", "w", encoding="utf-8") as f:
            json.dump(asdict(self._config), f, indent=2)

        with open(path / "stats.json", "w", encoding="utf-8") as f:
            json.dump(asdict(self._stats), f, indent=2)

        logger.info(f"Saved PPMI matrix to {path}")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PmiCooccurrenceMatrix":
        """Load a matrix saved with ``save``.

        Args:
            path: Directory path containing saved files

        Returns:
            Loaded PmiCooccurrenceMatrix instance
        """
        path = Path(path)

        with open(path / "vocabulary.json", "r", encoding="utf-8") as f:
            vocabulary = Vocabulary.from_tokens(json.load(f))

        with open(path / "config.json", "r", encoding="utf-8") as f:
            config = PmiConfig(**json.load(f))

        with open(path / "stats.json", "r", encoding="utf-8") as f:
            stats = PmiMatrixStats(**json.load(f))

        pmi_matrix = sparse.load_npz(path / "pmi_matrix.npz").tocsr().astype(np.float64)

        return cls(vocabulary, pmi_matrix, config=config, stats=stats)


def _sparsity(matrix: sparse.spmatrix) -> float:
    total_possible = matrix.shape[0] * matrix.shape[1]
    if total_possible == 0:
        return 0.0
    return 1.0 - matrix.nnz / total_possible


def fit(
    documents: Iterable[DocumentLike],
    min_df: int = 1,
    window: int = 2,
    smoothing: float = 1.0,
    **kwargs,
) -> PmiCooccurrenceMatrix:
    """Shortcut for ``PmiCooccurrenceMatrix.fit``."""
    return PmiCooccurrenceMatrix.fit(documents, min_df, window, smoothing, **kwargs)
