"""Build cache persisted next to the project configuration."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

CACHE_FILE = "lvjb.lock"

Release = tuple[str, str]


def _string_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"cache '{name}' must be a list of strings")
    return list(value)


def _release(value: Any) -> Release | None:
    if value is None:
        return None
    if (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(item, str) for item in value)
    ):
        return (value[0], value[1])
    raise TypeError("cache release entries must be pairs of strings")


@dataclass
class Cache:
    """File hashes, produced releases and fetched library URLs."""

    files: dict[str, str] = field(default_factory=dict)
    releases: list[Release | None] = field(default_factory=list)
    url_libs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cache:
        """Build a cache from parsed TOML data; missing keys take defaults."""
        if not isinstance(data, dict):
            raise TypeError("cache must be a table")
        files = data.get("files", {})
        if not isinstance(files, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in files.items()
        ):
            raise TypeError("cache 'files' must map strings to strings")
        releases = data.get("releases", [])
        if not isinstance(releases, list):
            raise TypeError("cache 'releases' must be a list")
        return cls(
            files=dict(files),
            releases=[_release(item) for item in releases],
            url_libs=_string_list(data.get("url_libs", []), "url_libs"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a TOML-serialisable mapping; empty release slots are dropped."""
        return {
            "files": dict(self.files),
            "releases": [list(item) for item in self.releases if item is not None],
            "url_libs": list(self.url_libs),
        }

    @classmethod
    def load(cls, path: str | Path = CACHE_FILE) -> Cache:
        """Read the cache file; raises OSError or a TOML error on failure."""
        with open(path, "rb") as handle:
            return cls.from_dict(tomllib.load(handle))

    def write(self, path: str | Path = CACHE_FILE) -> None:
        """Write the cache file."""
        with open(path, "wb") as handle:
            tomli_w.dump(self.to_dict(), handle)