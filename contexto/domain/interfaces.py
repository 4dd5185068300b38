# contexto/domain/interfaces.py

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List
import numpy as np

from .models import IndexEntry


class EmbeddingPort(ABC):
    """
    Port for any embedding engine.
    Intentionally minimal: no infrastructure concerns like model naming.

    encode() is batched and order-preserving: output[i] belongs to texts[i].
    """

    @abstractmethod
    def encode(self, texts: List[str]) -> np.ndarray: ...

    @abstractmethod
    def encode_single(self, text: str) -> np.ndarray: ...


class IndexStorePort(ABC):

    @property
    @abstractmethod
    def index_path(self) -> Path: ...

    @abstractmethod
    def exists(self) -> bool: ...

    @abstractmethod
    def load(self) -> List[IndexEntry]:
        """
        Return the persisted entries, or an empty list if nothing has been
        persisted yet. Raises CorruptIndexError for an unreadable file.
        """
        ...

    @abstractmethod
    def save(self, entries: List[IndexEntry]) -> Path:
        """Atomically replace the persisted index with `entries`."""
        ...
