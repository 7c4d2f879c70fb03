"""Corpus value types and the corpus pruner.

A corpus is a sequence of documents, a document is a sequence of sentences and
a sentence is a position-significant list of token strings. Tokenization and
sentence splitting happen before this package sees the text.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Iterable, Iterator, List, Mapping, Sequence, Set, Union

from ppmi_matrix.errors import CorpusFormatError


logger = logging.getLogger(__name__)


@dataclass
class Sentence:
    """A tokenized sentence.

    Attributes:
        tokens: Token strings in their original order
    """

    tokens: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)


@dataclass
class Document:
    """A document made of tokenized sentences.

    Attributes:
        sentences: Sentences in document order
    """

    sentences: List[Sentence] = field(default_factory=list)

    @classmethod
    def from_tokens(cls, sentences: Iterable[Iterable[str]]) -> "Document":
        """Build a document from nested token lists.

        Raises:
            TypeError: If a sentence is a string rather than a list of tokens
        """
        result = []
        for tokens in sentences:
            if isinstance(tokens, (str, bytes)):
                raise TypeError(
                    f"A sentence must be a sequence of tokens, not a string: {tokens!r}"
                )
            result.append(Sentence(list(tokens)))
        return cls(result)

    def distinct_tokens(self) -> Set[str]:
        """Return the set of tokens appearing anywhere in the document."""
        return {token for sentence in self.sentences for token in sentence.tokens}

    @property
    def num_tokens(self) -> int:
        return sum(len(sentence) for sentence in self.sentences)

    def to_tokens(self) -> List[List[str]]:
        return [list(sentence.tokens) for sentence in self.sentences]


DocumentLike = Union[Document, Sequence[Sequence[str]]]


def as_documents(documents: Iterable[DocumentLike]) -> List[Document]:
    """Coerce a corpus into a list of ``Document`` objects.

    Documents given as nested token lists are wrapped; ``Document`` instances
    are passed through unchanged (no copy is made).

    Args:
        documents: Iterable of ``Document`` or lists of token lists

    Returns:
        List of documents
    """
    result = []
    for doc in documents:
        if isinstance(doc, Document):
            result.append(doc)
        elif isinstance(doc, (str, bytes)):
            raise TypeError("A document must be a sequence of sentences, not a string")
        else:
            result.append(Document.from_tokens(doc))
    return result


def prune_documents(
    documents: Sequence[Document],
    vocabulary: Union[AbstractSet[str], Mapping[str, int]],
) -> List[Document]:
    """Drop out-of-vocabulary tokens from every sentence.

    Returns a new corpus with the same document and sentence structure; the
    input documents are left untouched. Sentences that end up with zero or one
    token are kept.

    Args:
        documents: Corpus to prune
        vocabulary: Tokens to keep (a set or a token -> index mapping)

    Returns:
        Pruned copy of the corpus
    """
    pruned = [
        Document(
            [
                Sentence([token for token in sentence.tokens if token in vocabulary])
                for sentence in doc.sentences
            ]
        )
        for doc in documents
    ]

    before = sum(doc.num_tokens for doc in documents)
    after = sum(doc.num_tokens for doc in pruned)
    logger.debug(f"Pruned corpus from {before} to {after} tokens")

    return pruned


def _parse_document(record, line_no: int) -> Document:
    if isinstance(record, dict):
        if "sentences" not in record:
            raise CorpusFormatError(f"Line {line_no}: object without 'sentences' key")
        record = record["sentences"]

    if not isinstance(record, list):
        raise CorpusFormatError(f"Line {line_no}: expected a list of sentences")

    sentences = []
    for sentence in record:
        if not isinstance(sentence, list) or not all(isinstance(t, str) for t in sentence):
            raise CorpusFormatError(
                f"Line {line_no}: each sentence must be a list of token strings"
            )
        sentences.append(Sentence(list(sentence)))
    return Document(sentences)


def load_documents_jsonl(path: Union[str, Path]) -> List[Document]:
    """Read a pre-tokenized corpus from a JSONL file.

    Each non-empty line holds one document, either as a list of sentences
    (lists of tokens) or as an object with a ``"sentences"`` key.

    Args:
        path: Path to the JSONL file

    Returns:
        List of documents

    Raises:
        FileNotFoundError: If the file does not exist
        CorpusFormatError: If a line is not valid JSON or has the wrong shape
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")

    documents = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise CorpusFormatError(f"Line {line_no}: invalid JSON ({e.msg})") from e
            documents.append(_parse_document(record, line_no))

    logger.info(f"Loaded {len(documents)} documents from {path}")
    return documents
