# contexto/domain/models.py

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple


@dataclass
class IndexEntry:
    """
    One indexed document: its path, the embedding of its content and the
    hash of the exact content that produced that embedding.
    """
    path: str
    embedding: List[float] = field(repr=False)
    hash: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "embedding": self.embedding, "hash": self.hash}


@dataclass
class SearchResult:
    """
    Represents a ranked search result returned to the caller.
    """
    path: str
    similarity_score: float

    def __repr__(self) -> str:
        return (
            f"SearchResult(score={self.similarity_score:.4f}, "
            f"path='{self.path}')"
        )


class SyncStatus(str, Enum):
    UPDATED = "updated"
    NO_CHANGES = "no_changes"
    DOCS_DIR_MISSING = "docs_dir_missing"


@dataclass(frozen=True)
class SyncReport:
    """Outcome of one synchronization pass over the documentation directory."""
    status: SyncStatus
    docs_dir: Path
    index_path: Path
    added: Tuple[str, ...] = ()
    modified: Tuple[str, ...] = ()
    removed: Tuple[str, ...] = ()

    @property
    def added_count(self) -> int:
        return len(self.added)

    @property
    def modified_count(self) -> int:
        return len(self.modified)

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.modified or self.removed)

    def summary(self) -> str:
        if self.status is SyncStatus.DOCS_DIR_MISSING:
            return f"No documentation directory found. Path: {self.docs_dir}"

        location = (
            f"Documentation path: {self.docs_dir}\n"
            f"Embeddings path: {self.index_path}"
        )
        if self.status is SyncStatus.NO_CHANGES:
            return f"No changes detected in documentation.\n{location}"

        return (
            f"Successfully indexed {self.added_count} new, "
            f"{self.modified_count} modified, and removed "
            f"{self.removed_count} deleted document(s).\n{location}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "summary": self.summary(),
            "added": list(self.added),
            "modified": list(self.modified),
            "removed": list(self.removed),
            "docs_dir": str(self.docs_dir),
            "index_path": str(self.index_path),
        }
