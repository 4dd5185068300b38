# contexto/domain/errors.py

from pathlib import Path


class ContextoError(Exception):
    """Base class for errors raised by the documentation index."""


class CorruptIndexError(ContextoError):
    """
    The persisted index exists but cannot be parsed or validated.
    Never recovered from silently: an unreadable index must not be
    mistaken for an empty one.
    """

    def __init__(self, index_path: Path, reason: str):
        self.index_path = Path(index_path)
        self.reason = reason
        super().__init__(f"Corrupt index file '{index_path}': {reason}")


class DocumentNotFoundError(ContextoError, FileNotFoundError):
    """A document targeted by a delete does not exist."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Document not found: {path}")


class EmbeddingMismatchError(ContextoError, RuntimeError):
    """The embedding engine returned a different number of vectors than requested."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Embedding engine returned {received} vector(s) for {expected} text(s)."
        )
