"""Unigram and windowed co-occurrence counting.

Counting runs over a pruned corpus, so every token seen here is already in the
vocabulary. Windows never cross sentence boundaries.

Window rule:
- For each position ``idx`` in a sentence, every other position within
  ``[idx - window, idx + window]`` contributes one count to
  ``(tokens[idx], tokens[other])``.
- Both directions are visited, so raw counts are symmetric by construction.

Accumulators merge by addition, which lets documents be counted in shards and
combined without changing the result.
"""

import logging
from collections import Counter, defaultdict
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Dict, Iterator, List, Sequence, Tuple

from tqdm import tqdm

from ppmi_matrix.corpus import Document, Sentence


logger = logging.getLogger(__name__)


class CooccurrenceTable:
    """Sparse (token, token) -> count table stored row-wise.

    Example:
        >>> table = CooccurrenceTable()
        >>> table.increment("a", "b")
        >>> table.count("a", "b")
        1
    """

    def __init__(self):
        self._rows: Dict[str, Counter] = defaultdict(Counter)

    def increment(self, token: str, other: str, amount: int = 1) -> None:
        self._rows[token][other] += amount

    def count(self, token: str, other: str) -> int:
        """Return the raw count for (token, other), 0 if never observed."""
        row = self._rows.get(token)
        if row is None:
            return 0
        return row.get(other, 0)

    def row(self, token: str) -> Counter:
        """Return a copy of the co-occurrence row of ``token``."""
        return Counter(self._rows.get(token, ()))

    def iter_row(self, token: str) -> Iterator[Tuple[str, int]]:
        """Iterate over the (other, count) entries of a row without copying it."""
        return iter(self._rows.get(token, {}).items())

    def items(self) -> Iterator[Tuple[str, Counter]]:
        return iter(self._rows.items())

    def merge(self, other: "CooccurrenceTable") -> "CooccurrenceTable":
        """Add the counts of ``other`` into this table in place."""
        for token, row in other._rows.items():
            self._rows[token].update(row)
        return self

    def __contains__(self, token: object) -> bool:
        return token in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def num_pairs(self) -> int:
        """Number of distinct (token, other) pairs with a nonzero count."""
        return sum(len(row) for row in self._rows.values())

    @property
    def total(self) -> int:
        return sum(sum(row.values()) for row in self._rows.values())


def unigram_counts(documents: Sequence[Document]) -> Counter:
    """Count every token occurrence across all sentences."""
    counts: Counter = Counter()
    for doc in documents:
        for sentence in doc.sentences:
            counts.update(sentence.tokens)
    return counts


def count_sentence_window(
    sentence: Sentence,
    window: int,
    table: CooccurrenceTable,
) -> None:
    """Add the windowed co-occurrences of one sentence to ``table``.

    Sentences shorter than two tokens contribute nothing.
    """
    tokens = sentence.tokens
    length = len(tokens)
    if length <= 1:
        return

    for idx, token in enumerate(tokens):
        start = max(0, idx - window)
        end = min(length - 1, idx + window)
        for other_idx in range(start, end + 1):
            if other_idx == idx:
                continue
            table.increment(token, tokens[other_idx])


def cooccurrence_counts(
    documents: Sequence[Document],
    window: int,
) -> CooccurrenceTable:
    """Count windowed co-occurrences over a pruned corpus.

    Args:
        documents: Pruned corpus
        window: Symmetric window radius (non-negative)

    Returns:
        Co-occurrence table
    """
    table = CooccurrenceTable()
    for doc in documents:
        for sentence in doc.sentences:
            count_sentence_window(sentence, window, table)
    return table


def _count_shard(
    documents: Sequence[Document],
    window: int,
) -> Tuple[Counter, CooccurrenceTable]:
    return unigram_counts(documents), cooccurrence_counts(documents, window)


def _split_shards(documents: Sequence[Document], num_shards: int) -> List[Sequence[Document]]:
    shard_size = max(1, -(-len(documents) // num_shards))
    return [documents[i : i + shard_size] for i in range(0, len(documents), shard_size)]


def count_corpus(
    documents: Sequence[Document],
    window: int,
    num_workers: int = 1,
    show_progress: bool = False,
) -> Tuple[Counter, CooccurrenceTable]:
    """Compute unigram and co-occurrence counts for a pruned corpus.

    With ``num_workers > 1`` the corpus is split into contiguous shards that
    are counted in worker processes; the partial tables are summed.

    Args:
        documents: Pruned corpus
        window: Symmetric window radius
        num_workers: Number of counting workers
        show_progress: Whether to show a progress bar

    Returns:
        Tuple of (unigram counter, co-occurrence table)
    """
    documents = list(documents)

    if num_workers <= 1 or len(documents) <= 1:
        iterator = tqdm(documents, desc="Counting co-occurrences") if show_progress else documents
        unigrams: Counter = Counter()
        table = CooccurrenceTable()
        for doc in iterator:
            unigrams.update(token for sentence in doc.sentences for token in sentence.tokens)
            for sentence in doc.sentences:
                count_sentence_window(sentence, window, table)
    else:
        shards = _split_shards(documents, num_workers)
        logger.debug(f"Counting {len(documents)} documents in {len(shards)} shards")

        unigrams = Counter()
        table = CooccurrenceTable()
        with ProcessPoolExecutor(max_workers=num_workers) as executor:
            futures = [executor.submit(_count_shard, shard, window) for shard in shards]
            completed = as_completed(futures)
            if show_progress:
                completed = tqdm(completed, total=len(futures), desc="Counting shards")
            for future in completed:
                shard_unigrams, shard_table = future.result()
                unigrams.update(shard_unigrams)
                table.merge(shard_table)

    logger.info(
        f"Counted {sum(unigrams.values())} tokens, "
        f"{table.num_pairs} distinct co-occurring pairs (window={window})"
    )
    return unigrams, table
