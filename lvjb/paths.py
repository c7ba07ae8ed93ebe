"""Project path helpers: path forging, source discovery and classpath expansion."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Iterable

from lvjb.config import Config


class PathType(Enum):
    """Which configured directory a path is relative to."""

    SRC = "src"
    SRCNOPKG = "src_nopkg"
    BIN = "bin"
    LIB = "lib"
    TEST = "test"
    DOCS = "docs"
    RELEASES = "releases"


def forge_sys_path(path: str | os.PathLike[str], config: Config, ptype: PathType) -> Path:
    """Join ``path`` onto the configured directory for ``ptype``."""
    return Path(getattr(config.paths, ptype.value)) / path


def class_to_path(name: str) -> str:
    """Turn a dotted package or class name into a slash-separated path."""
    return name.replace(".", "/")


def fetch_files_under(root: str | os.PathLike[str], src_ext: str) -> list[Path]:
    """Recursively list entries under ``root`` whose names end with ``src_ext``.

    An unreadable or missing directory yields nothing.
    """
    try:
        with os.scandir(root) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError:
        return []
    results: list[Path] = []
    for entry in entries:
        path = Path(root) / entry.name
        if path.is_dir():
            results.extend(fetch_files_under(path, src_ext))
        if entry.name.endswith(src_ext):
            results.append(path)
    return results


def expand_classpath(paths: Iterable[str]) -> str:
    """Join classpath entries with ':', expanding ``dir/*`` to the jars in ``dir``."""
    entries: list[str] = []
    for entry in paths:
        if entry.endswith("/*"):
            directory = entry[:-2]
            try:
                with os.scandir(directory) as iterator:
                    names = sorted(item.name for item in iterator)
            except OSError:
                continue
            entries.extend(
                os.path.join(directory, name) for name in names if Path(name).suffix == ".jar"
            )
        else:
            entries.append(entry)
    return ":".join(entries)