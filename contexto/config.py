# contexto/config.py

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


# ── Defaults ─────────────────────────────────────────────────────────────────
DEFAULT_MODEL_NAME = "all-MiniLM-L6-v2"
DEFAULT_DOCS_DIR_NAME = "docs"
DEFAULT_DATA_DIR_NAME = "data"
DEFAULT_INDEX_FILE_NAME = "embeddings.json"
DEFAULT_SUPPORTED_EXTENSIONS = (".md", ".txt")
DEFAULT_MIN_SIMILARITY_SCORE = 0.4
DEFAULT_TOP_K = 5
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "CONTEXTO_"


@dataclass(frozen=True)
class Settings:
    model_name: str = DEFAULT_MODEL_NAME
    docs_dir_name: str = DEFAULT_DOCS_DIR_NAME
    data_dir_name: str = DEFAULT_DATA_DIR_NAME
    index_file_name: str = DEFAULT_INDEX_FILE_NAME
    # The first extension is the one appended to bare document names.
    supported_extensions: Tuple[str, ...] = DEFAULT_SUPPORTED_EXTENSIONS
    min_similarity_score: float = DEFAULT_MIN_SIMILARITY_SCORE
    top_k: int = DEFAULT_TOP_K
    threshold_before_truncate: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        if not self.supported_extensions:
            raise ValueError("At least one supported extension is required.")
        if self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}.")
        if not -1.0 <= self.min_similarity_score <= 1.0:
            raise ValueError(
                f"min_similarity_score must be within [-1, 1], got {self.min_similarity_score}."
            )

    @property
    def primary_extension(self) -> str:
        return self.supported_extensions[0]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from CONTEXTO_* environment variables, falling back to the
    module defaults for anything unset.
    """
    env = os.environ if environ is None else environ

    def get(name: str, default: str) -> str:
        return env.get(ENV_PREFIX + name, default).strip()

    return Settings(
        model_name=get("MODEL_NAME", DEFAULT_MODEL_NAME),
        docs_dir_name=get("DOCS_DIR", DEFAULT_DOCS_DIR_NAME),
        data_dir_name=get("DATA_DIR", DEFAULT_DATA_DIR_NAME),
        index_file_name=get("INDEX_FILE", DEFAULT_INDEX_FILE_NAME),
        supported_extensions=_parse_extensions(
            get("EXTENSIONS", ",".join(DEFAULT_SUPPORTED_EXTENSIONS))
        ),
        min_similarity_score=_parse_float(
            "MIN_SIMILARITY", get("MIN_SIMILARITY", str(DEFAULT_MIN_SIMILARITY_SCORE))
        ),
        top_k=_parse_int("TOP_K", get("TOP_K", str(DEFAULT_TOP_K))),
        threshold_before_truncate=_parse_bool(
            "THRESHOLD_BEFORE_TRUNCATE", get("THRESHOLD_BEFORE_TRUNCATE", "true")
        ),
        log_level=get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def _parse_extensions(raw: str) -> Tuple[str, ...]:
    extensions = []
    for part in raw.split(","):
        ext = part.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in extensions:
            extensions.append(ext)
    return tuple(extensions)


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got '{raw}'.") from None


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got '{raw}'.") from None


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got '{raw}'.")
