# contexto/application/documentation_index.py

import logging
from pathlib import Path
from typing import List, Optional

from contexto.application.document_service import DocumentService
from contexto.application.index_synchronizer import IndexSynchronizer
from contexto.application.search_service import SemanticSearchService
from contexto.config import Settings
from contexto.domain.interfaces import EmbeddingPort
from contexto.domain.models import SearchResult, SyncReport
from contexto.infrastructure.filesystem import create_directory
from contexto.infrastructure.index_store import JsonIndexStore
from contexto.infrastructure.rules import create_cursor_rule, create_gemini_rule


logger = logging.getLogger(__name__)


class DocumentationIndex:
    """
    Composition root for one project: wires the index store, synchronizer,
    search service and document service around a shared embedding engine.

    Layout under project_root (names come from Settings):
        <docs_dir_name>/                  documentation files
        <data_dir_name>/<index_file_name> persisted index
    """

    def __init__(
        self,
        project_root: Path,
        embedding_engine: EmbeddingPort,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or Settings()
        self._project_root = Path(project_root).resolve()
        self._docs_dir = self._project_root / self._settings.docs_dir_name
        self._data_dir = self._project_root / self._settings.data_dir_name

        self._index_store = JsonIndexStore(self._data_dir / self._settings.index_file_name)
        self._synchronizer = IndexSynchronizer(
            embedding_engine=embedding_engine,
            index_store=self._index_store,
            docs_dir=self._docs_dir,
            supported_extensions=self._settings.supported_extensions,
        )
        self._search_service = SemanticSearchService(
            embedding_engine=embedding_engine,
            index_store=self._index_store,
            top_k=self._settings.top_k,
            min_score=self._settings.min_similarity_score,
            threshold_before_truncate=self._settings.threshold_before_truncate,
        )
        self._documents = DocumentService(
            docs_dir=self._docs_dir,
            synchronizer=self._synchronizer,
            supported_extensions=self._settings.supported_extensions,
        )

    @property
    def project_root(self) -> Path:
        return self._project_root

    @property
    def docs_dir(self) -> Path:
        return self._docs_dir

    @property
    def index_path(self) -> Path:
        return self._index_store.index_path

    def initialize(self, write_rules: bool = True) -> List[str]:
        """
        Make sure the docs dir, data dir and an empty index exist, optionally
        scaffold editor rule files, then synchronize. One message per step.
        """
        messages = []

        create_directory(self._docs_dir)
        messages.append(f"Successfully created {self._docs_dir}")

        create_directory(self._data_dir)
        messages.append(f"Successfully created {self._data_dir}")

        self._index_store.create_empty()
        messages.append(f"Successfully created {self.index_path}")

        if write_rules:
            messages.append(create_cursor_rule(self._project_root, self._settings.docs_dir_name))
            messages.append(create_gemini_rule(self._project_root, self._settings.docs_dir_name))

        messages.append(self.generate_index().summary())
        return messages

    def generate_index(self) -> SyncReport:
        return self._synchronizer.synchronize()

    reindex = generate_index

    def search(self, query: str, top_k: Optional[int] = None) -> List[SearchResult]:
        return self._search_service.search(query, top_k=top_k)

    def read_document(self, path: str) -> Optional[str]:
        return self._documents.read_document(path)

    def create_document(self, name: str, content: str) -> SyncReport:
        return self._documents.create_document(name, content)

    def delete_document(self, name: str) -> SyncReport:
        return self._documents.delete_document(name)
