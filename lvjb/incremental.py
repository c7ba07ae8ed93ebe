"""Content-hash based change detection for incremental builds."""

from __future__ import annotations

import hashlib
import os
import re
from pathlib import Path

from lvjb.config import Config

_U64_LIMIT = 1 << 64
_U64_PATTERN = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int | None:
    """Parse an unsigned 64-bit decimal, returning None when it is not one."""
    if not _U64_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value < _U64_LIMIT else None


def content_hash(data: bytes) -> int:
    """Return a 64-bit hash of ``data``."""
    return int.from_bytes(hashlib.blake2b(data, digest_size=8).digest(), "big")


def check_incremental(path: str | os.PathLike[str], config: Config) -> bool:
    """Report whether ``path`` changed since its hash was cached, updating the cache.

    Unreadable or non-UTF-8 files always count as changed and are not recorded.
    """
    key = str(path)
    try:
        raw = Path(path).read_bytes()
        raw.decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return True
    digest = content_hash(raw)
    files = config.cache.files
    previous = files.get(key)
    if previous is not None and (_parse_u64(previous) or 0) == digest:
        return False
    files[key] = str(digest)
    return True