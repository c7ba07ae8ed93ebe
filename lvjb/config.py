"""Project configuration stored in the project's TOML file."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w

from lvjb.cache import Cache

CONF_FILE = "lvjb.toml"


def _table(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"'{name}' must be a table")
    return value


def _string(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def _optional_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def _bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a boolean")
    return value


def _string_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = data.get(key, default)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"'{key}' must be a list of strings")
    return list(value)


def _optional_string_list(data: dict[str, Any], key: str) -> list[str] | None:
    if data.get(key) is None:
        return None
    return _string_list(data, key, [])


def _log_level(data: dict[str, Any]) -> int:
    value = data.get("log_level", 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("'log_level' must be an integer")
    if not 0 <= value <= 255:
        raise ValueError("'log_level' must be between 0 and 255")
    return value


def _load_or_create_cache() -> Cache:
    try:
        return Cache.load()
    except (OSError, ValueError, TypeError):
        cache = Cache()
        try:
            cache.write()
        except OSError:
            pass
        return cache


@dataclass
class PathConfig:
    """Directory layout of a project."""

    src: str = "src"
    src_nopkg: str = "default"
    bin: str = "bin"
    lib: str = "lib"
    test: str = "test"
    docs: str = "docs"
    releases: str = "releases"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PathConfig:
        data = _table(data, "paths")
        defaults = cls()
        return cls(
            **{f.name: _string(data, f.name, getattr(defaults, f.name)) for f in fields(cls)}
        )

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class ArgConfig:
    """Extra arguments handed to the compiler, the program and the JVM."""

    compilation: list[str] | None = None
    runtime: list[str] | None = None
    test: list[str] | None = None
    jvm: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArgConfig:
        data = _table(data, "args")
        return cls(**{f.name: _optional_string_list(data, f.name) for f in fields(cls)})

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: list(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class Config:
    """Whole project configuration, including the build cache."""

    jar: str = "out"
    compiler: str = "javac"
    entry_point: str | None = None
    src_ext: str = "java"
    classpath: list[str] = field(default_factory=lambda: ["bin", "lib/*"])
    incremental: bool = True
    paths: PathConfig = field(default_factory=PathConfig)
    args: ArgConfig = field(default_factory=ArgConfig)
    pre_build_cmds: list[str] = field(default_factory=list)
    post_build_cmds: list[str] = field(default_factory=list)
    log_level: int = 0
    version: str = "0.0.1"
    cache: Cache = field(default_factory=Cache)

    @classmethod
    def default(cls) -> Config:
        """Default configuration whose cache comes from the lock file, created if absent."""
        return cls(cache=_load_or_create_cache())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a configuration from parsed TOML; missing keys take defaults."""
        data = _table(data, "config")
        base = cls()
        cache = (
            Cache.from_dict(_table(data["cache"], "cache"))
            if "cache" in data
            else _load_or_create_cache()
        )
        return cls(
            jar=_string(data, "jar", base.jar),
            compiler=_string(data, "compiler", base.compiler),
            entry_point=_optional_string(data, "entry_point"),
            src_ext=_string(data, "src_ext", base.src_ext),
            classpath=_string_list(data, "classpath", base.classpath),
            incremental=_bool(data, "incremental", base.incremental),
            paths=PathConfig.from_dict(data.get("paths", {})),
            args=ArgConfig.from_dict(data.get("args", {})),
            pre_build_cmds=_string_list(data, "pre_build_cmds", []),
            post_build_cmds=_string_list(data, "post_build_cmds", []),
            log_level=_log_level(data),
            version=_string(data, "version", base.version),
            cache=cache,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "jar": self.jar,
            "compiler": self.compiler,
            "src_ext": self.src_ext,
            "classpath": list(self.classpath),
            "incremental": self.incremental,
            "pre_build_cmds": list(self.pre_build_cmds),
            "post_build_cmds": list(self.post_build_cmds),
            "log_level": self.log_level,
            "version": self.version,
            "paths": self.paths.to_dict(),
            "args": self.args.to_dict(),
            "cache": self.cache.to_dict(),
        }
        if self.entry_point is not None:
            data["entry_point"] = self.entry_point
        return data

    @classmethod
    def load(cls, path: str | Path = CONF_FILE) -> Config:
        """Read the configuration file; raises OSError or a TOML error on failure."""
        with open(path, "rb") as handle:
            return cls.from_dict(tomllib.load(handle))

    def write(self, path: str | Path = CONF_FILE) -> None:
        """Write the configuration file."""
        with open(path, "wb") as handle:
            tomli_w.dump(self.to_dict(), handle)