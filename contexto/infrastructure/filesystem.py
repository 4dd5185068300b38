import logging
from pathlib import Path
from typing import Optional

from contexto.infrastructure.file_hasher import decode_document


logger = logging.getLogger(__name__)


def file_exists(path: Path) -> bool:
    return Path(path).is_file()


def create_directory(path: Path) -> bool:
    """Create `path` (and parents) if missing. Returns True if it was created."""
    path = Path(path)
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Created directory %s", path)
    return True


def create_file(path: Path, content: str) -> bool:
    """Write `content` to `path` only if the file does not exist yet."""
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug("Created file %s", path)
    return True


def read_text_file(path: Path) -> Optional[str]:
    """
    Content of `path`, or None if there is no such file.
    Invalid UTF-8 is replaced, not raised. Other I/O errors propagate.
    """
    path = Path(path)
    if not path.is_file():
        return None
    return decode_document(path.read_bytes())
