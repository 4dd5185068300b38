# contexto/application/index_synchronizer.py

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from contexto.config import DEFAULT_SUPPORTED_EXTENSIONS
from contexto.domain.errors import EmbeddingMismatchError
from contexto.domain.interfaces import EmbeddingPort, IndexStorePort
from contexto.domain.models import IndexEntry, SyncReport, SyncStatus
from contexto.infrastructure.file_hasher import (
    compute_bytes_hash,
    decode_document,
    list_supported_documents,
)


logger = logging.getLogger(__name__)


class IndexSynchronizer:
    """
    Brings the persisted index in line with the documentation directory.

    Each pass:
        1. Loads the prior index, keyed by path
        2. Classifies every supported file as unchanged / modified / added
           by comparing content hashes (mtime is never consulted)
        3. Treats prior entries that were not seen as removed
        4. Embeds all modified + added documents in ONE encode() call
        5. Atomically saves the merged index, unless nothing changed

    Callers must not run two passes concurrently against the same index.
    """

    def __init__(
        self,
        embedding_engine: EmbeddingPort,
        index_store: IndexStorePort,
        docs_dir: Path,
        supported_extensions: Iterable[str] = DEFAULT_SUPPORTED_EXTENSIONS,
    ):
        self._embedding_engine = embedding_engine
        self._index_store = index_store
        self._docs_dir = Path(docs_dir)
        self._supported_extensions = tuple(supported_extensions)

    def synchronize(self) -> SyncReport:
        previous = {entry.path: entry for entry in self._index_store.load()}

        if not self._docs_dir.is_dir():
            logger.warning("Documentation directory not found: %s", self._docs_dir)
            return self._report(SyncStatus.DOCS_DIR_MISSING)

        carried: List[IndexEntry] = []
        pending: List[Tuple[str, str, str]] = []  # (path, content, hash)
        added: List[str] = []
        modified: List[str] = []

        for file_path in list_supported_documents(self._docs_dir, self._supported_extensions):
            path = str(file_path)
            raw = file_path.read_bytes()
            digest = compute_bytes_hash(raw)
            content = decode_document(raw)
            old_entry = previous.pop(path, None)

            if old_entry is None:
                logger.debug("Added: %s", path)
                added.append(path)
                pending.append((path, content, digest))
            elif old_entry.hash == digest:
                carried.append(old_entry)
            else:
                logger.debug("Modified: %s", path)
                modified.append(path)
                pending.append((path, content, digest))

        # Whatever was not seen on disk has been deleted or renamed away.
        removed = list(previous)

        if not (added or modified or removed):
            logger.info("No changes detected in %s", self._docs_dir)
            return self._report(SyncStatus.NO_CHANGES)

        final_entries = carried + self._embed(pending)
        self._index_store.save(final_entries)

        logger.info(
            "Indexed %d new, %d modified, removed %d document(s).",
            len(added), len(modified), len(removed),
        )
        return self._report(SyncStatus.UPDATED, added, modified, removed)

    # ─── Private ──────────────────────────────────────────────────────────────

    def _embed(self, pending: List[Tuple[str, str, str]]) -> List[IndexEntry]:
        if not pending:
            return []

        logger.info("Encoding %d document(s)...", len(pending))
        embeddings = self._embedding_engine.encode([content for _, content, _ in pending])
        if len(embeddings) != len(pending):
            raise EmbeddingMismatchError(expected=len(pending), received=len(embeddings))

        return [
            IndexEntry(path=path, embedding=_to_float_list(embedding), hash=digest)
            for (path, _, digest), embedding in zip(pending, embeddings)
        ]

    def _report(
        self,
        status: SyncStatus,
        added: Iterable[str] = (),
        modified: Iterable[str] = (),
        removed: Iterable[str] = (),
    ) -> SyncReport:
        return SyncReport(
            status=status,
            docs_dir=self._docs_dir,
            index_path=self._index_store.index_path,
            added=tuple(added),
            modified=tuple(modified),
            removed=tuple(sorted(removed)),
        )


def _to_float_list(embedding) -> List[float]:
    if hasattr(embedding, "tolist"):
        embedding = embedding.tolist()
    return [float(value) for value in embedding]
