# contexto/infrastructure/index_store.py

import json
import logging
import math
import os
import tempfile
from numbers import Real
from pathlib import Path
from typing import Any, List

from contexto.domain.errors import CorruptIndexError
from contexto.domain.interfaces import IndexStorePort
from contexto.domain.models import IndexEntry


logger = logging.getLogger(__name__)


class JsonIndexStore(IndexStorePort):
    """
    Persists the whole index as one JSON array of
    {path, embedding, hash} objects.

    Persistence guarantees:
        - load() on a missing file returns an empty index
        - load() on an unreadable file raises CorruptIndexError
        - save() writes a temp file next to the target, then os.replace()s it
          over the target, so readers see either the old or the new index
    """

    def __init__(self, index_path: Path):
        self._index_path = Path(index_path)

    @property
    def index_path(self) -> Path:
        return self._index_path

    def exists(self) -> bool:
        return self._index_path.is_file()

    def load(self) -> List[IndexEntry]:
        if not self.exists():
            return []

        try:
            data = json.loads(
                self._index_path.read_bytes().decode("utf-8"),
                parse_constant=_reject_constant,
            )
        except ValueError as error:  # JSONDecodeError, UnicodeDecodeError, NaN/Infinity
            raise CorruptIndexError(self._index_path, f"invalid JSON ({error})") from error

        entries = self._parse_entries(data)
        logger.debug("Loaded %d index entries from %s", len(entries), self._index_path)
        return entries

    def save(self, entries: List[IndexEntry]) -> Path:
        self._index_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([entry.to_dict() for entry in entries], allow_nan=False)

        fd, temp_name = tempfile.mkstemp(
            dir=self._index_path.parent,
            prefix=self._index_path.name + ".",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_name, self._index_path)
        except BaseException:
            # The target is only ever touched by os.replace(); drop the temp file.
            Path(temp_name).unlink(missing_ok=True)
            raise

        logger.info("Saved %d index entries to %s", len(entries), self._index_path)
        return self._index_path

    def create_empty(self) -> bool:
        """Write an empty index if none exists yet. Returns True if it wrote."""
        if self.exists():
            return False
        self.save([])
        return True

    # ─── Private: Validation ──────────────────────────────────────────────────

    def _parse_entries(self, data: Any) -> List[IndexEntry]:
        if not isinstance(data, list):
            raise CorruptIndexError(self._index_path, "top-level value is not a list")

        entries: List[IndexEntry] = []
        seen_paths = set()
        for position, item in enumerate(data):
            if not isinstance(item, dict):
                raise CorruptIndexError(self._index_path, f"entry {position} is not an object")

            path = item.get("path")
            embedding = item.get("embedding")
            digest = item.get("hash")

            if not isinstance(path, str) or not path:
                raise CorruptIndexError(self._index_path, f"entry {position} has no valid 'path'")
            if not isinstance(digest, str) or not digest:
                raise CorruptIndexError(self._index_path, f"entry {position} has no valid 'hash'")
            if not isinstance(embedding, list) or not all(
                isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)
                for value in embedding
            ):
                raise CorruptIndexError(
                    self._index_path, f"entry {position} has no valid 'embedding'"
                )
            if path in seen_paths:
                raise CorruptIndexError(self._index_path, f"duplicate path '{path}'")

            seen_paths.add(path)
            entries.append(IndexEntry(path=path, embedding=embedding, hash=digest))

        return entries


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name}")
