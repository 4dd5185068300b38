# contexto/application/document_service.py

import logging
from pathlib import Path
from typing import Iterable, Optional

from contexto.application.index_synchronizer import IndexSynchronizer
from contexto.config import DEFAULT_SUPPORTED_EXTENSIONS
from contexto.domain.errors import DocumentNotFoundError
from contexto.domain.models import SyncReport
from contexto.infrastructure.file_hasher import has_supported_extension
from contexto.infrastructure.filesystem import create_directory, file_exists, read_text_file


logger = logging.getLogger(__name__)


class DocumentService:
    """
    Create / delete / read documents in the documentation directory.

    Every mutation is followed by a full synchronization, so the index never
    lags behind a change made through this service.
    """

    def __init__(
        self,
        docs_dir: Path,
        synchronizer: IndexSynchronizer,
        supported_extensions: Iterable[str] = DEFAULT_SUPPORTED_EXTENSIONS,
    ):
        self._docs_dir = Path(docs_dir)
        self._synchronizer = synchronizer
        self._supported_extensions = tuple(supported_extensions)

    def normalize_name(self, name: str) -> str:
        """Append the primary extension unless `name` already has a supported one."""
        name = name.strip()
        if not name:
            raise ValueError("Document name cannot be empty.")
        if "/" in name or "\\" in name or name in {".", ".."}:
            raise ValueError(f"Document name must be a plain file name, got '{name}'.")

        if not has_supported_extension(name, self._supported_extensions):
            name += self._supported_extensions[0]
        return name

    def document_path(self, name: str) -> Path:
        return self._docs_dir / self.normalize_name(name)

    def create_document(self, name: str, content: str) -> SyncReport:
        file_path = self.document_path(name)
        create_directory(self._docs_dir)
        file_path.write_text(content, encoding="utf-8")
        logger.info("Wrote document %s", file_path)
        return self._synchronizer.synchronize()

    def delete_document(self, name: str) -> SyncReport:
        file_path = self.document_path(name)
        if not file_exists(file_path):
            raise DocumentNotFoundError(file_path)
        file_path.unlink()
        logger.info("Deleted document %s", file_path)
        return self._synchronizer.synchronize()

    def read_document(self, path: str) -> Optional[str]:
        """
        Raw content of a document, or None if it does not exist.
        Relative paths are resolved against the documentation directory.
        """
        return read_text_file(resolve_document_path(self._docs_dir, path))


def resolve_document_path(docs_dir: Path, path: str) -> Path:
    """Absolute paths are kept; relative ones are taken from `docs_dir`."""
    file_path = Path(path)
    if file_path.is_absolute():
        return file_path
    return Path(docs_dir) / file_path
