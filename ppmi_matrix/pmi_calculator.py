"""Positive PMI assembly with additive smoothing.

For a row token T and a co-occurring token U with raw count c:

    total  = sum(unigram counts) + V * k
    PMI    = log(c + k) + log(total) - log(count(T) + k) - log(count(U) + k)

which equals log((c + k) * total / ((count(T) + k) * (count(U) + k))) but is
evaluated in log space so large corpora do not overflow. Only entries with
PMI strictly greater than zero are stored (Positive PMI); everything else is
an implicit zero of the sparse result.

With k = 0 a zero count gives ``-inf`` (numpy emits a RuntimeWarning), which is
never positive and therefore never stored.
"""

import logging
from collections import Counter
from typing import Mapping, Union

import numpy as np
from scipy import sparse

from ppmi_matrix.cooccurrence import CooccurrenceTable
from ppmi_matrix.errors import VocabularyMismatchError
from ppmi_matrix.vocabulary import Vocabulary


logger = logging.getLogger(__name__)

ArrayOrScalar = Union[float, np.ndarray]


def total_token_mass(unigrams: Mapping[str, int], vocab_size: int, smoothing: float) -> float:
    """Smoothed corpus size: sum of unigram counts plus ``V * smoothing``."""
    return float(sum(unigrams.values())) + vocab_size * smoothing


def pmi_value(
    cooccurrence_count: ArrayOrScalar,
    token_count: ArrayOrScalar,
    other_count: ArrayOrScalar,
    total: float,
    smoothing: float,
) -> ArrayOrScalar:
    """Compute smoothed PMI scores from raw counts.

    Accepts scalars or equally shaped arrays; ``build_pmi_matrix`` scores all
    co-occurring pairs with one call.

    Args:
        cooccurrence_count: Raw (T, U) co-occurrence count(s)
        token_count: Raw unigram count(s) of T
        other_count: Raw unigram count(s) of U
        total: Smoothed corpus size (see ``total_token_mass``)
        smoothing: Additive smoothing constant

    Returns:
        PMI in nats (may be negative, ``-inf`` or ``nan`` when unsmoothed);
        a float for scalar input, an array otherwise
    """
    pmi = (
        np.log(np.asarray(cooccurrence_count, dtype=np.float64) + smoothing)
        + np.log(total)
        - np.log(np.asarray(token_count, dtype=np.float64) + smoothing)
        - np.log(np.asarray(other_count, dtype=np.float64) + smoothing)
    )
    if np.ndim(pmi) == 0:
        return float(pmi)
    return pmi


def build_pmi_matrix(
    vocabulary: Vocabulary,
    unigrams: Counter,
    cooccurrence: CooccurrenceTable,
    smoothing: float,
) -> sparse.csr_matrix:
    """Convert raw counts into a sparse Positive PMI matrix.

    Rows are visited in vocabulary order and each recorded (row, column) pair
    is scored exactly once.

    Args:
        vocabulary: Vocabulary defining row/column indices
        unigrams: Token -> occurrence count over the pruned corpus
        cooccurrence: Raw windowed co-occurrence counts
        smoothing: Additive smoothing constant (non-negative)

    Returns:
        CSR matrix of shape (V, V) holding only strictly positive PMI values

    Raises:
        VocabularyMismatchError: If a counted token is not in the vocabulary
    """
    vocab_size = len(vocabulary)
    if vocab_size == 0:
        logger.info("Empty vocabulary, returning a 0x0 PMI matrix")
        return sparse.csr_matrix((0, 0), dtype=np.float64)

    for token, _ in cooccurrence.items():
        if token not in vocabulary:
            raise VocabularyMismatchError(f"Co-occurrence row for unknown token {token!r}")

    token_counts = np.array(
        [unigrams.get(token, 0) for token in vocabulary], dtype=np.float64
    )
    total = total_token_mass(unigrams, vocab_size, smoothing)

    rows = []
    cols = []
    counts = []
    for row_idx, token in enumerate(vocabulary):
        for other, count in cooccurrence.iter_row(token):
            try:
                col_idx = vocabulary.index(other)
            except KeyError as e:
                raise VocabularyMismatchError(
                    f"Token {other!r} co-occurs with {token!r} but is not in the vocabulary"
                ) from e
            rows.append(row_idx)
            cols.append(col_idx)
            counts.append(count)

    rows = np.asarray(rows, dtype=np.int64)
    cols = np.asarray(cols, dtype=np.int64)
    counts = np.asarray(counts, dtype=np.float64)

    pmi = pmi_value(counts, token_counts[rows], token_counts[cols], total, smoothing)

    # nan compares False, so unsmoothed failures are dropped along with pmi <= 0
    keep = pmi > 0
    pmi_matrix = sparse.csr_matrix(
        (pmi[keep], (rows[keep], cols[keep])),
        shape=(vocab_size, vocab_size),
        dtype=np.float64,
    )
    pmi_matrix.sum_duplicates()
    pmi_matrix.sort_indices()

    logger.info(
        f"PMI matrix: {pmi_matrix.nnz} positive entries out of {len(counts)} co-occurring pairs"
    )
    return pmi_matrix
