# tests/test_embedding_engine.py

import numpy as np
from unittest.mock import MagicMock

from contexto.infrastructure import embedding_engine as embedding_engine_module
from contexto.infrastructure.embedding_engine import SentenceTransformerEngine


def test_model_is_loaded_once_and_outputs_are_normalized(monkeypatch):
    model = MagicMock()
    model.encode.return_value = np.zeros((2, 4), dtype=np.float32)
    model_class = MagicMock(return_value=model)
    monkeypatch.setattr(embedding_engine_module, "SentenceTransformer", model_class)

    engine = SentenceTransformerEngine("test-model", batch_size=8)
    engine.encode(["a", "b"])
    engine.encode_single("query")

    model_class.assert_called_once_with("test-model")
    batch_call, single_call = model.encode.call_args_list
    assert batch_call.args == (["a", "b"],)
    assert batch_call.kwargs["batch_size"] == 8
    assert batch_call.kwargs["normalize_embeddings"] is True
    assert single_call.args == ("query",)
    assert single_call.kwargs["normalize_embeddings"] is True
