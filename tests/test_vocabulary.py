"""
Unit tests for document-frequency filtering, vocabulary indexing and pruning.
"""

import json

import pytest

from ppmi_matrix.corpus import (
    Document,
    Sentence,
    as_documents,
    load_documents_jsonl,
    prune_documents,
)
from ppmi_matrix.errors import CorpusFormatError
from ppmi_matrix.vocabulary import (
    Vocabulary,
    document_frequency,
    filter_by_document_frequency,
)


@pytest.fixture
def corpus():
    """Three documents with in-document repetition."""
    return as_documents([
        [["x", "x", "x", "y"], ["x"]],
        [["y", "z"]],
        [["y"], ["w", "z"]],
    ])


class TestDocumentFrequency:
    """Tests for the document-frequency filter."""

    def test_counts_once_per_document(self, corpus) -> None:
        """x is repeated four times in one document but has df 1."""
        df = document_frequency(corpus)

        assert df == {"x": 1, "y": 3, "z": 2, "w": 1}

    def test_filter_threshold(self, corpus) -> None:
        """Kept tokens have df >= min_df, dropped tokens have df < min_df."""
        df = document_frequency(corpus)

        for min_df in range(0, 5):
            kept = filter_by_document_frequency(df, min_df)
            assert all(df[t] >= min_df for t in kept)
            assert all(df[t] < min_df for t in set(df) - kept)

    def test_non_positive_min_df_keeps_all(self, corpus) -> None:
        """min_df <= 0 keeps every token."""
        df = document_frequency(corpus)

        assert filter_by_document_frequency(df, 0) == set(df)
        assert filter_by_document_frequency(df, -3) == set(df)


class TestVocabulary:
    """Tests for the vocabulary indexer."""

    def test_sorted_and_inverse(self) -> None:
        """Tokens are sorted and token_to_index inverts index_to_token."""
        vocab = Vocabulary.from_tokens({"pear", "apple", "Zebra", "banana"})

        assert vocab.index_to_token == ("Zebra", "apple", "banana", "pear")
        for i, token in enumerate(vocab.index_to_token):
            assert vocab.token_to_index[token] == i
            assert vocab.index(token) == i
            assert vocab.token(i) == token

    def test_deterministic(self) -> None:
        """Insertion order of the token set does not affect indices."""
        first = Vocabulary.from_tokens(["c", "a", "b"])
        second = Vocabulary.from_tokens(["b", "c", "a"])

        assert first.index_to_token == second.index_to_token
        assert dict(first.token_to_index) == dict(second.token_to_index)

    def test_from_documents(self, corpus) -> None:
        """Only tokens in at least min_df documents are kept."""
        vocab = Vocabulary.from_documents(corpus, min_df=2)

        assert vocab.index_to_token == ("y", "z")
        assert "x" not in vocab
        assert len(vocab) == 2

    def test_empty(self) -> None:
        """An empty token set gives an empty vocabulary."""
        vocab = Vocabulary.from_tokens([])

        assert len(vocab) == 0
        assert list(vocab) == []

    def test_unknown_index_raises(self) -> None:
        """index() raises KeyError for unknown tokens."""
        with pytest.raises(KeyError):
            Vocabulary.from_tokens(["a"]).index("b")


class TestPruning:
    """Tests for the corpus pruner."""

    def test_removes_out_of_vocabulary(self, corpus) -> None:
        """No pruned sentence holds a token outside the vocabulary."""
        vocab = Vocabulary.from_documents(corpus, min_df=2)
        pruned = prune_documents(corpus, vocab.token_to_index)

        for doc in pruned:
            for sentence in doc.sentences:
                assert all(token in vocab for token in sentence.tokens)

    def test_preserves_order_and_structure(self) -> None:
        """Relative order is kept and short sentences remain."""
        docs = [Document([Sentence(["d", "a", "x", "b", "a"]), Sentence(["x"]), Sentence([])])]
        pruned = prune_documents(docs, {"a", "b", "d"})

        assert pruned[0].to_tokens() == [["d", "a", "b", "a"], [], []]

    def test_does_not_mutate_input(self, corpus) -> None:
        """The input corpus is left unchanged."""
        before = [doc.to_tokens() for doc in corpus]
        prune_documents(corpus, {"y"})

        assert [doc.to_tokens() for doc in corpus] == before


class TestCorpusReader:
    """Tests for JSONL corpus loading."""

    def test_load_both_formats(self, tmp_path) -> None:
        """Lines may be a list of sentences or an object with 'sentences'."""
        path = tmp_path / "corpus.jsonl"
        with open(path, "w", encoding="utf-8") as f:
            f.write(json.dumps([["a", "b"], ["c"]]) + "\n")
            f.write("\n")
            f.write(json.dumps({"id": 7, "sentences": [["한국어", "토큰"]]}, ensure_ascii=False) + "\n")

        docs = load_documents_jsonl(path)

        assert len(docs) == 2
        assert docs[0].to_tokens() == [["a", "b"], ["c"]]
        assert docs[1].to_tokens() == [["한국어", "토큰"]]

    def test_invalid_json(self, tmp_path) -> None:
        """Broken lines raise CorpusFormatError."""
        path = tmp_path / "broken.jsonl"
        path.write_text('[["a"]]\n{not json\n', encoding="utf-8")

        with pytest.raises(CorpusFormatError):
            load_documents_jsonl(path)

    def test_wrong_shape(self, tmp_path) -> None:
        """Sentences must be lists of strings."""
        path = tmp_path / "shape.jsonl"
        path.write_text('[["a", 1]]\n', encoding="utf-8")

        with pytest.raises(CorpusFormatError):
            load_documents_jsonl(path)

    def test_missing_file(self, tmp_path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_documents_jsonl(tmp_path / "missing.jsonl")

    def test_flat_token_list_rejected(self) -> None:
        """A document given as a flat token list is not split into characters."""
        with pytest.raises(TypeError):
            as_documents([["cat", "dog"]])

    def test_string_sentence_rejected(self) -> None:
        """Document.from_tokens refuses string sentences."""
        with pytest.raises(TypeError):
            Document.from_tokens([["a", "b"], "cd"])

    def test_string_document_rejected(self) -> None:
        """A bare string is not a document."""
        with pytest.raises(TypeError):
            as_documents(["not a document"])
