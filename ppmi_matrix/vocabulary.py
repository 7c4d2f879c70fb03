"""Document-frequency filtering and vocabulary indexing.

The vocabulary is the lexicographically sorted set of tokens that occur in at
least ``min_df`` documents. Its ordering defines the row/column coordinates of
the PMI matrix, so it must be reproducible for a given token set.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Sequence, Set, Tuple

from tqdm import tqdm

from ppmi_matrix.corpus import Document


logger = logging.getLogger(__name__)


def document_frequency(
    documents: Sequence[Document],
    show_progress: bool = False,
) -> Counter:
    """Count, for every token, the number of documents that contain it.

    A token repeated inside one document still counts once for that document.

    Args:
        documents: Corpus to scan
        show_progress: Whether to show a progress bar

    Returns:
        Counter mapping token -> document frequency
    """
    df: Counter = Counter()
    iterator = tqdm(documents, desc="Document frequency") if show_progress else documents

    for doc in iterator:
        df.update(doc.distinct_tokens())

    return df


def filter_by_document_frequency(df: Counter, min_df: int) -> Set[str]:
    """Keep the tokens whose document frequency is at least ``min_df``.

    ``min_df <= 0`` keeps every token.
    """
    return {token for token, count in df.items() if count >= min_df}


@dataclass(frozen=True)
class Vocabulary:
    """Immutable index <-> token mapping.

    Attributes:
        index_to_token: Tokens in index order (strictly increasing)
        token_to_index: Read-only inverse mapping
    """

    index_to_token: Tuple[str, ...] = ()
    token_to_index: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "Vocabulary":
        """Sort a token set and assign sequential indices 0..N-1."""
        index_to_token = tuple(sorted(set(tokens)))
        token_to_index = {token: idx for idx, token in enumerate(index_to_token)}
        return cls(index_to_token, MappingProxyType(token_to_index))

    @classmethod
    def from_documents(
        cls,
        documents: Sequence[Document],
        min_df: int,
        show_progress: bool = False,
    ) -> "Vocabulary":
        """Build the vocabulary of tokens with document frequency >= ``min_df``."""
        df = document_frequency(documents, show_progress=show_progress)
        frequent = filter_by_document_frequency(df, min_df)
        logger.info(
            f"Vocabulary: kept {len(frequent)} of {len(df)} distinct tokens (min_df={min_df})"
        )
        return cls.from_tokens(frequent)

    def __len__(self) -> int:
        return len(self.index_to_token)

    def __contains__(self, token: object) -> bool:
        return token in self.token_to_index

    def __iter__(self) -> Iterator[str]:
        return iter(self.index_to_token)

    def index(self, token: str) -> int:
        """Return the index of ``token``; raises ``KeyError`` if absent."""
        return self.token_to_index[token]

    def token(self, index: int) -> str:
        return self.index_to_token[index]
