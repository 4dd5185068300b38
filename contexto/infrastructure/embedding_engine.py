# contexto/infrastructure/embedding_engine.py

import logging
import numpy as np
from typing import List
from sentence_transformers import SentenceTransformer

from contexto.config import DEFAULT_MODEL_NAME
from contexto.domain.interfaces import EmbeddingPort


logger = logging.getLogger(__name__)


class SentenceTransformerEngine(EmbeddingPort):
    """
    Loads the model once at construction. Build one instance per process and
    hand it to every synchronizer and search service that needs it.
    """

    def __init__(self, model_name: str = DEFAULT_MODEL_NAME, batch_size: int = 32):
        logger.info("Loading embedding model: %s ...", model_name)
        self._batch_size = batch_size
        self._model = SentenceTransformer(model_name)
        logger.info("Embedding model ready.")

    def encode(self, texts: List[str]) -> np.ndarray:
        return self._model.encode(
            texts,
            convert_to_numpy=True,
            show_progress_bar=False,
            batch_size=self._batch_size,
            normalize_embeddings=True,
        )

    def encode_single(self, text: str) -> np.ndarray:
        return self._model.encode(
            text,
            convert_to_numpy=True,
            normalize_embeddings=True,
        )
