"""Path and filesystem helper functions."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from uuid import uuid4


def atomic_temp_path(target_path: Path) -> Path:
    """Create a temp path in the same directory for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def write_text_atomically(path: Path, content: str) -> Path:
    """Write UTF-8 text to a temp file, then move it over the target."""

    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = atomic_temp_path(path)
    try:
        temp_path.write_text(content, encoding="utf-8")
        os.replace(temp_path, path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return path


def sha256_text(text: str) -> str:
    """Return the hex SHA-256 digest of UTF-8 encoded text.

    Used to fingerprint a rendered manifest before it reaches the disk.
    """

    return hashlib.sha256(text.encode("utf-8")).hexdigest()
