import hashlib
from pathlib import Path
from typing import Iterable, List


def compute_content_hash(content: str) -> str:
    """
    Compute SHA-256 hash of a document's text content.
    Used to detect whether a document has changed since it was last embedded.
    """
    return compute_bytes_hash(content.encode("utf-8"))


def compute_bytes_hash(data: bytes) -> str:
    """SHA-256 of raw file bytes. Equal to compute_content_hash() for UTF-8 text."""
    return hashlib.sha256(data).hexdigest()


def decode_document(data: bytes) -> str:
    """Decode document bytes as UTF-8; undecodable bytes become U+FFFD."""
    return data.decode("utf-8", errors="replace")


def has_supported_extension(file_name: str, extensions: Iterable[str]) -> bool:
    return any(file_name.endswith(ext) for ext in extensions)


def list_supported_documents(directory_path: Path, extensions: Iterable[str]) -> List[Path]:
    """
    Regular files directly under `directory_path` with a supported extension.
    Subdirectories are never descended into.
    """
    extensions = tuple(extensions)
    return [
        file_path
        for file_path in sorted(Path(directory_path).iterdir())
        if file_path.is_file() and has_supported_extension(file_path.name, extensions)
    ]
