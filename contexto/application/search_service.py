# contexto/application/search_service.py

import logging
from typing import List, Optional

import numpy as np

from contexto.config import DEFAULT_MIN_SIMILARITY_SCORE, DEFAULT_TOP_K
from contexto.domain.interfaces import EmbeddingPort, IndexStorePort
from contexto.domain.models import IndexEntry, SearchResult


logger = logging.getLogger(__name__)


class SemanticSearchService:
    """
    Core use case: rank indexed documents against a natural language query.

    Pipeline:
        1. Load the persisted index (empty → return [] without encoding)
        2. Encode the query once
        3. Cosine similarity against every entry
        4. Stable sort, descending; ties keep index order
        5. Drop scores at or below min_score, keep top_k
           (threshold_before_truncate=False swaps the order of step 5)

    This service never synchronizes the index; that decision belongs to
    the caller.
    """

    def __init__(
        self,
        embedding_engine: EmbeddingPort,
        index_store: IndexStorePort,
        top_k: int = DEFAULT_TOP_K,
        min_score: float = DEFAULT_MIN_SIMILARITY_SCORE,
        threshold_before_truncate: bool = True,
    ):
        self._embedding_engine = embedding_engine
        self._index_store = index_store
        self._top_k = top_k
        self._min_score = min_score
        self._threshold_before_truncate = threshold_before_truncate

    def search(self, query: str, top_k: Optional[int] = None) -> List[SearchResult]:
        top_k = self._top_k if top_k is None else top_k
        if top_k < 1:
            return []

        entries = self._index_store.load()
        if not entries:
            return []

        query = query.strip()
        if not query:
            raise ValueError("Query cannot be empty.")

        query_embedding = np.asarray(self._embedding_engine.encode_single(query), dtype=np.float64)
        scores = cosine_similarities(query_embedding, entries)

        ranked = [
            SearchResult(path=entries[i].path, similarity_score=float(scores[i]))
            for i in np.argsort(-scores, kind="stable")
        ]

        if self._threshold_before_truncate:
            results = [r for r in ranked if r.similarity_score > self._min_score][:top_k]
        else:
            results = [r for r in ranked[:top_k] if r.similarity_score > self._min_score]

        logger.debug("Query matched %d of %d document(s).", len(results), len(entries))
        return results


def cosine_similarities(query_embedding: np.ndarray, entries: List[IndexEntry]) -> np.ndarray:
    """
    Cosine similarity of the query against each entry's embedding.
    A zero-magnitude vector on either side scores 0.0.
    """
    query_embedding = np.asarray(query_embedding, dtype=np.float64).ravel()

    dimensions = {len(entry.embedding) for entry in entries}
    if dimensions != {query_embedding.shape[0]}:
        raise ValueError(
            f"Embedding dimension mismatch: query has {query_embedding.shape[0]}, "
            f"index has {sorted(dimensions)}. Regenerate the index."
        )

    matrix = np.asarray([entry.embedding for entry in entries], dtype=np.float64)
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query_embedding)
    dots = matrix @ query_embedding

    scores = np.zeros(len(entries), dtype=np.float64)
    nonzero = norms > 0
    scores[nonzero] = dots[nonzero] / norms[nonzero]
    return scores
