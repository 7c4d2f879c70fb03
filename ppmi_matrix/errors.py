"""Exception types raised by the PPMI pipeline."""


class PpmiMatrixError(Exception):
    """Base class for all ppmi_matrix errors."""


class ConfigurationError(PpmiMatrixError, ValueError):
    """Raised when pipeline parameters are invalid (e.g. negative window)."""


class CorpusFormatError(PpmiMatrixError, ValueError):
    """Raised when a serialized corpus cannot be parsed into documents."""


class VocabularyMismatchError(PpmiMatrixError, RuntimeError):
    """Raised when a counted token is missing from the vocabulary.

    Co-occurrences are only recorded after pruning, so this indicates an
    internal consistency fault rather than bad user input.
    """
