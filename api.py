from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from contexto.application.documentation_index import DocumentationIndex
from contexto.config import Settings, load_settings
from contexto.domain.errors import CorruptIndexError, DocumentNotFoundError
from contexto.domain.interfaces import EmbeddingPort
from contexto.domain.models import SyncReport
from contexto.infrastructure.embedding_engine import SentenceTransformerEngine
from contexto.infrastructure.filesystem import read_text_file


# ── API Models ───────────────────────────────────────────────────────────────
class ProjectRequest(BaseModel):
    project_root: str = Field(..., description="Absolute path of the project root.")


class InitializeRequest(ProjectRequest):
    write_rules: bool = True


class SearchRequest(ProjectRequest):
    query: str = Field(..., description="Free-text search query for semantic matching.")
    top_k: Optional[int] = Field(default=None, ge=1)


class ReadRequest(BaseModel):
    path: str


class CreateDocumentRequest(ProjectRequest):
    name: str
    content: str


class SyncResponse(BaseModel):
    status: str
    summary: str
    added: List[str]
    modified: List[str]
    removed: List[str]
    docs_dir: str
    index_path: str


class SearchResponse(BaseModel):
    query: str
    results: List[dict]
    message: Optional[str] = None


# ── App Initialization ───────────────────────────────────────────────────────
app = FastAPI(
    title="Contexto API",
    description="Semantic search over a project's documentation folder.",
    version="1.0.0",
)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_embedding_engine() -> EmbeddingPort:
    """One model per process, loaded on first use."""
    return SentenceTransformerEngine(get_settings().model_name)


def _index_for(
    project_root: str,
    engine: EmbeddingPort,
    settings: Settings,
) -> DocumentationIndex:
    root = Path(project_root)
    if not root.is_absolute():
        raise HTTPException(status_code=400, detail="project_root must be an absolute path.")
    return DocumentationIndex(root, engine, settings)


def _sync_response(report: SyncReport) -> SyncResponse:
    return SyncResponse(**report.to_dict())


def _corrupt_index(error: CorruptIndexError) -> HTTPException:
    return HTTPException(status_code=500, detail=str(error))


# ── Endpoints ────────────────────────────────────────────────────────────────
@app.get("/status")
def get_status(settings: Settings = Depends(get_settings)):
    return {
        "message": "Contexto API is running.",
        "embedding_model": settings.model_name,
        "supported_extensions": list(settings.supported_extensions),
        "min_similarity_score": settings.min_similarity_score,
        "top_k": settings.top_k,
    }


@app.post("/initialize")
def initialize(
    request: InitializeRequest,
    engine: EmbeddingPort = Depends(get_embedding_engine),
    settings: Settings = Depends(get_settings),
):
    """Create folders, the empty index and rule files, then index the docs."""
    index = _index_for(request.project_root, engine, settings)
    try:
        messages = index.initialize(write_rules=request.write_rules)
    except CorruptIndexError as error:
        raise _corrupt_index(error)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error))
    return {"messages": messages, "summary": "\n".join(messages)}


@app.post("/index", response_model=SyncResponse)
def generate_index(
    request: ProjectRequest,
    engine: EmbeddingPort = Depends(get_embedding_engine),
    settings: Settings = Depends(get_settings),
):
    """Generate or update the search index for all documentation files."""
    index = _index_for(request.project_root, engine, settings)
    try:
        return _sync_response(index.generate_index())
    except CorruptIndexError as error:
        raise _corrupt_index(error)


@app.post("/search", response_model=SearchResponse)
def search(
    request: SearchRequest,
    engine: EmbeddingPort = Depends(get_embedding_engine),
    settings: Settings = Depends(get_settings),
):
    index = _index_for(request.project_root, engine, settings)
    try:
        results = index.search(request.query, top_k=request.top_k)
    except CorruptIndexError as error:
        raise _corrupt_index(error)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error))

    return SearchResponse(
        query=request.query,
        results=[
            {"path": r.path, "score": round(r.similarity_score, 4)}
            for r in results
        ],
        message=None if results else f"No matches found for the query: '{request.query}'.",
    )


@app.post("/documents/read")
def read_document(request: ReadRequest):
    """Read a documentation file given its absolute path (from /search)."""
    path = Path(request.path)
    if not path.is_absolute():
        raise HTTPException(status_code=400, detail="path must be an absolute path.")
    content = read_text_file(path)
    if content is None:
        raise HTTPException(status_code=404, detail=f"Could not read file: '{request.path}'.")
    return {"path": request.path, "content": content}


@app.post("/documents", response_model=SyncResponse)
def create_document(
    request: CreateDocumentRequest,
    engine: EmbeddingPort = Depends(get_embedding_engine),
    settings: Settings = Depends(get_settings),
):
    """Write a documentation file, then reindex."""
    index = _index_for(request.project_root, engine, settings)
    try:
        return _sync_response(index.create_document(request.name, request.content))
    except CorruptIndexError as error:
        raise _corrupt_index(error)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error))


@app.delete("/documents/{name}", response_model=SyncResponse)
def delete_document(
    name: str,
    project_root: str,
    engine: EmbeddingPort = Depends(get_embedding_engine),
    settings: Settings = Depends(get_settings),
):
    """Delete a documentation file, then reindex."""
    index = _index_for(project_root, engine, settings)
    try:
        return _sync_response(index.delete_document(name))
    except DocumentNotFoundError as error:
        raise HTTPException(status_code=404, detail=str(error))
    except CorruptIndexError as error:
        raise _corrupt_index(error)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error))


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
