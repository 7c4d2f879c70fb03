"""Sparse Positive PMI co-occurrence matrices from tokenized corpora.

This package turns a corpus that is already split into documents, sentences
and tokens into the PPMI matrix used by count-based word embeddings.

Key Components:
- Vocabulary: document-frequency filtered, lexicographically sorted vocabulary
- CooccurrenceTable: windowed co-occurrence counts within sentences
- build_pmi_matrix: smoothed Positive PMI in log space
- PmiCooccurrenceMatrix: the fitted, immutable result (``fit`` entry point)
"""

from ppmi_matrix.config import PmiConfig, load_config, save_config
from ppmi_matrix.cooccurrence import CooccurrenceTable, count_corpus, cooccurrence_counts, unigram_counts
from ppmi_matrix.corpus import Document, Sentence, as_documents, load_documents_jsonl, prune_documents
from ppmi_matrix.errors import (
    ConfigurationError,
    CorpusFormatError,
    PpmiMatrixError,
    VocabularyMismatchError,
)
from ppmi_matrix.matrix import PmiCooccurrenceMatrix, PmiMatrixStats, fit
from ppmi_matrix.pmi_calculator import build_pmi_matrix, pmi_value
from ppmi_matrix.vocabulary import Vocabulary, document_frequency, filter_by_document_frequency

__version__ = "0.1.0"

__all__ = [
    "PmiCooccurrenceMatrix",
    "PmiMatrixStats",
    "fit",
    "PmiConfig",
    "load_config",
    "save_config",
    "Document",
    "Sentence",
    "as_documents",
    "load_documents_jsonl",
    "prune_documents",
    "Vocabulary",
    "document_frequency",
    "filter_by_document_frequency",
    "CooccurrenceTable",
    "count_corpus",
    "cooccurrence_counts",
    "unigram_counts",
    "build_pmi_matrix",
    "pmi_value",
    "PpmiMatrixError",
    "ConfigurationError",
    "CorpusFormatError",
    "VocabularyMismatchError",
]
