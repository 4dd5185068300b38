# tests/test_document_service.py

import numpy as np
import pytest
from unittest.mock import MagicMock

from contexto.application.document_service import DocumentService, resolve_document_path
from contexto.application.index_synchronizer import IndexSynchronizer
from contexto.domain.errors import DocumentNotFoundError
from contexto.domain.models import SyncStatus
from contexto.infrastructure.index_store import JsonIndexStore


@pytest.fixture
def docs_dir(tmp_path):
    return tmp_path / "docs"


@pytest.fixture
def store(tmp_path):
    return JsonIndexStore(tmp_path / "data" / "embeddings.json")


@pytest.fixture
def service(docs_dir, store) -> DocumentService:
    engine = MagicMock()
    engine.encode.side_effect = lambda texts: np.ones((len(texts), 3))
    synchronizer = IndexSynchronizer(engine, store, docs_dir, (".md", ".txt"))
    return DocumentService(docs_dir, synchronizer, (".md", ".txt"))


def _indexed_paths(store):
    return {entry.path for entry in store.load()}


def test_create_appends_primary_extension_and_reindexes(service, docs_dir, store):
    report = service.create_document("getting-started", "# Getting started")

    path = docs_dir / "getting-started.md"
    assert path.read_text(encoding="utf-8") == "# Getting started"
    assert report.status is SyncStatus.UPDATED
    assert report.added == (str(path),)
    assert _indexed_paths(store) == {str(path)}


def test_create_keeps_supported_extension(service, docs_dir):
    service.create_document("notes.txt", "plain notes")

    assert (docs_dir / "notes.txt").is_file()
    assert not (docs_dir / "notes.txt.md").exists()


def test_create_overwrites_and_reports_modification(service, docs_dir):
    service.create_document("guide", "v1")
    report = service.create_document("guide.md", "v2")

    assert (docs_dir / "guide.md").read_text(encoding="utf-8") == "v2"
    assert report.modified == (str(docs_dir / "guide.md"),)


def test_delete_removes_file_and_entry(service, docs_dir, store):
    service.create_document("keep", "keep me")
    service.create_document("drop", "drop me")

    report = service.delete_document("drop")

    assert not (docs_dir / "drop.md").exists()
    assert report.removed == (str(docs_dir / "drop.md"),)
    assert _indexed_paths(store) == {str(docs_dir / "keep.md")}


def test_delete_missing_document_raises(service, docs_dir):
    docs_dir.mkdir()

    with pytest.raises(DocumentNotFoundError):
        service.delete_document("ghost")


@pytest.mark.parametrize("name", ["", "   ", "../escape", "nested/doc.md", "..", "a\\b"])
def test_invalid_names_are_rejected(service, name):
    with pytest.raises(ValueError):
        service.create_document(name, "content")


def test_read_document(service, docs_dir):
    service.create_document("faq", "Q and A")

    assert service.read_document(str(docs_dir / "faq.md")) == "Q and A"
    assert service.read_document("faq.md") == "Q and A"
    assert service.read_document(str(docs_dir / "missing.md")) is None


def test_read_document_tolerates_invalid_utf8(service, docs_dir):
    docs_dir.mkdir(parents=True, exist_ok=True)
    (docs_dir / "legacy.txt").write_bytes(b"caf\xe9")

    assert service.read_document("legacy.txt") == "caf\ufffd"


def test_resolve_document_path(tmp_path):
    docs = tmp_path / "docs"

    assert resolve_document_path(docs, "guide.md") == docs / "guide.md"
    assert resolve_document_path(docs, str(tmp_path / "other.md")) == tmp_path / "other.md"
