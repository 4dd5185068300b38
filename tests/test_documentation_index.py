# tests/test_documentation_index.py

import json

import numpy as np
import pytest
from unittest.mock import MagicMock

from contexto.application.documentation_index import DocumentationIndex
from contexto.config import Settings
from contexto.domain.models import SyncStatus


TOPIC_VECTORS = {
    "deploy": [1.0, 0.0, 0.0],
    "testing": [0.0, 1.0, 0.0],
    "style": [0.0, 0.0, 1.0],
}


def _topic_vector(text: str) -> list:
    for topic, vector in TOPIC_VECTORS.items():
        if topic in text.lower():
            return vector
    return [0.0, 0.0, 0.0]


def _make_topic_engine():
    """Fake engine: each text maps onto the axis of the first topic it mentions."""
    engine = MagicMock()
    engine.encode.side_effect = lambda texts: np.array([_topic_vector(t) for t in texts])
    engine.encode_single.side_effect = lambda text: np.array(_topic_vector(text))
    return engine


@pytest.fixture
def engine():
    return _make_topic_engine()


@pytest.fixture
def index(tmp_path, engine) -> DocumentationIndex:
    return DocumentationIndex(tmp_path, engine, Settings())


def test_initialize_creates_layout_and_indexes(index, tmp_path):
    messages = index.initialize()

    root = tmp_path.resolve()
    assert (root / "docs").is_dir()
    assert (root / "data").is_dir()
    assert json.loads(index.index_path.read_text(encoding="utf-8")) == []
    assert (root / ".cursor" / "rules" / "mcp-contexto.mdc").is_file()
    assert (root / "CONTEXTO_GEMINI.md").is_file()
    assert messages[-1].startswith("No changes detected")


def test_initialize_without_rules(index, tmp_path):
    messages = index.initialize(write_rules=False)

    assert not (tmp_path / ".cursor").exists()
    assert not (tmp_path / ".gemini").exists()
    assert len(messages) == 4


def test_initialize_keeps_existing_index(index, engine):
    index.initialize(write_rules=False)
    index.create_document("deploy", "How to deploy the service")
    before = index.index_path.read_bytes()

    messages = index.initialize(write_rules=False)

    assert index.index_path.read_bytes() == before
    assert messages[-1].startswith("No changes detected")
    assert engine.encode.call_count == 1


def test_generate_index_without_docs_dir(index):
    report = index.generate_index()

    assert report.status is SyncStatus.DOCS_DIR_MISSING


def test_search_returns_best_matching_paths(index, engine):
    index.initialize(write_rules=False)
    index.create_document("deploy", "Deploy guide: build, push, roll out.")
    index.create_document("testing", "Testing guide: run pytest.")
    index.create_document("style.txt", "Style guide: naming and layout.")

    results = index.search("where is the testing documentation?")

    assert [r.path for r in results] == [str(index.docs_dir / "testing.md")]
    assert index.read_document(results[0].path) == "Testing guide: run pytest."


def test_search_with_no_match_above_threshold(index):
    index.initialize(write_rules=False)
    index.create_document("deploy", "Deploy guide")

    assert index.search("completely unrelated question") == []


def test_reindex_picks_up_external_edits(index):
    index.initialize(write_rules=False)
    (index.docs_dir / "external.md").write_text("style rules", encoding="utf-8")

    report = index.reindex()

    assert report.added == (str(index.docs_dir / "external.md"),)
    assert [r.path for r in index.search("style")] == [str(index.docs_dir / "external.md")]


def test_delete_document_updates_search(index):
    index.initialize(write_rules=False)
    index.create_document("deploy", "Deploy guide")

    index.delete_document("deploy")

    assert index.search("deploy") == []
