"""The build tool's commands: project setup, compiling, running, testing and releasing."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from lvjb.cache import CACHE_FILE, Cache
from lvjb.config import CONF_FILE, Config
from lvjb.incremental import check_incremental
from lvjb.jvm import java_command
from lvjb.paths import PathType, class_to_path, expand_classpath, fetch_files_under, forge_sys_path
from lvjb.spawn import GREEN, ORANGE, RED, RESET, LvjbError, spawn_compilation_command

MANIFEST_FILE = "MANIFEST.MF"
_U64_LIMIT = 1 << 64

_HELP_LINES = (
    f"{GREEN}jmake - fast, minimal Java build + test tool{RESET}",
    "",
    f"{ORANGE}Usage:{RESET}",
    "  jmk <command> [args]",
    "",
    f"{ORANGE}Available Commands:{RESET}",
    "  init                       Initializes project structure and config",
    "  initpkg <pkg>              Creates folder tree under src/ for given package",
    "  build [pkg|all] [--re]     Builds Java sources (incrementally unless --re)",
    "  test                       Compiles and runs test files (via JNI, parallel)",
    "  run [MainClass]            Runs specified Java class or entry_point from config",
    "  clean                      Deletes all .class files and clears cache",
    "  docgen <Class>             Generates Javadoc for specified class",
    "  curl <url>                 Downloads and registers remote JAR",
    "  release                    Builds JAR from entry_point and config values",
    "  help                       Displays this help message",
    "",
    f"{ORANGE}Quirks & Notes:{RESET}",
    "  - Always compiles default/ (no-package) sources, even if building a package.",
    "  - test/ files are treated as standalone Java programs, no framework needed.",
    "  - Classpath expansion supports wildcards like lib/*",
    "  - Incremental builds use fast xxh3 hashing (not timestamps).",
    "  - Remote JARs via 'curl' are cached and reused.",
    "  - Release creates a JAR using 'jar' tool and Main-Class from config.",
    "  - If jmk.toml or jmk.lock doesn't exist, they\u2019re auto-generated.",
    "",
    f"{ORANGE}Example:{RESET}",
    "  jmk init",
    "  jmk initpkg com.example.app",
    "  jmk build com.example.app",
    "  jmk run com.example.app.Main",
    "",
)


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def _parse_u64(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    return value if value < _U64_LIMIT else None


def _sources(root: Path, config: Config, incremental: bool) -> list[Path]:
    files = fetch_files_under(root, config.src_ext)
    if incremental:
        return [file for file in files if check_incremental(file, config)]
    return files


def init(config: Config) -> None:
    """Write missing config and cache files and create the project directories."""
    if not os.path.lexists(CONF_FILE):
        config.write()
    if not os.path.lexists(CACHE_FILE):
        Cache().write()
    paths = config.paths
    for directory in (
        Path(paths.src),
        Path(paths.bin),
        Path(paths.src) / paths.src_nopkg,
        Path(paths.test),
        Path(paths.lib),
        Path(paths.docs),
        Path(paths.releases),
    ):
        directory.mkdir(parents=True, exist_ok=True)


def initpkg(name: str, config: Config) -> Path:
    """Create the source directory tree for package ``name`` and return it."""
    path = forge_sys_path(class_to_path(name), config, PathType.SRC)
    path.mkdir(parents=True, exist_ok=True)
    return path


def build(pkg: str | None, config: Config) -> list[Path]:
    """Compile the sources of ``pkg`` (default sources when None, all with "all").

    Returns the files handed to the compiler.
    """
    with_defaults = False
    if pkg is None:
        root = forge_sys_path(config.paths.src_nopkg, config, PathType.SRC)
    elif pkg == "all" or not config.incremental:
        root = Path(config.paths.src)
    else:
        with_defaults = True
        root = forge_sys_path(class_to_path(pkg), config, PathType.SRC)

    files = _sources(root, config, config.incremental)
    if with_defaults:
        default_root = forge_sys_path(config.paths.src_nopkg, config, PathType.SRC)
        files.extend(_sources(default_root, config, True))

    spawn_compilation_command(files, config)

    try:
        config.cache.write()
    except OSError as error:
        _err(f"{RED}[COMPILER]{RESET}Error saving cache: {error}")
    return files


def run(class_name: str | None, config: Config, output: bool = True) -> None:
    """Run ``class_name``'s main method, or the configured entry point when None."""
    name = class_name if class_name is not None else config.entry_point
    if name is None:
        raise LvjbError(f"{RED}[RUNNER]{RESET} No entry point")
    command = java_command(config, name, config.args.runtime or [])
    try:
        completed = subprocess.run(command, check=False)
    except OSError as error:
        raise LvjbError(f"{RED}[RUNNER]{RESET} Failed to start the JVM: {error}") from error
    if completed.returncode != 0:
        raise LvjbError(
            f"{RED}[EXCEPTION]{RESET} {name} exited with status {completed.returncode}"
        )
    if output:
        _err(f"{GREEN}[RUNNER OK]{RESET}")


def _test_class_name(file: Path, root: Path) -> str | None:
    try:
        relative = file.relative_to(root)
    except ValueError:
        return None
    return str(relative.with_suffix("")).replace("/", ".").replace("\\", ".")


def _run_test(name: str, config: Config) -> bool:
    try:
        run(name, config, False)
    except LvjbError as error:
        _err(f"{RED}[TEST FAILED]{RESET} {name}: {error}")
        return False
    return True


def test(config: Config) -> list[str]:
    """Compile the test sources, run every test class in parallel, return those that passed."""
    root = Path(config.paths.test)
    spawn_compilation_command(_sources(root, config, config.incremental), config)

    every = fetch_files_under(root, config.src_ext)
    config.cache.write()

    names = [name for file in every if (name := _test_class_name(file, root)) is not None]
    with ThreadPoolExecutor(max_workers=os.cpu_count() or 2) as pool:
        outcomes = list(pool.map(lambda name: _run_test(name, config), names))
    passed = [name for name, ok in zip(names, outcomes) if ok]

    if passed:
        _err(f"{GREEN}[PASSED TESTS]{RESET}: " + "".join(f"{name} " for name in passed))
    else:
        _err(f"{RED}[TESTRUNNER]{RESET} No tests passed.")
    return passed


def clean(config: Config) -> None:
    """Delete every compiled class and the cache file."""
    for file in fetch_files_under(config.paths.bin, "class"):
        file.unlink()
    os.remove(CACHE_FILE)


def docgen(name: str, config: Config) -> None:
    """Generate Javadoc for the sources under ``name`` in the source directory."""
    files = fetch_files_under(forge_sys_path(name, config, PathType.SRC), config.src_ext)
    command = [
        "javadoc",
        "-d",
        config.paths.docs,
        "-cp",
        expand_classpath(config.classpath),
        *(os.fspath(file) for file in files),
    ]
    try:
        subprocess.run(command, check=False)
    except OSError as error:
        _err(f"{RED}[DOCGEN]{RESET} Failed to run javadoc: {error}")


def curl(url: str, config: Config) -> Path:
    """Download ``url`` into the library directory and record it in the cache."""
    _err(f"{ORANGE}[FETCHING]{RESET} {url}")
    filename = url.rsplit("/", 1)[-1]
    if not filename:
        raise LvjbError(f"{RED}[FETCHER]{RESET} Invalid URL")
    destination = forge_sys_path(filename, config, PathType.LIB)
    with urllib.request.urlopen(url) as response, open(destination, "wb") as out:
        shutil.copyfileobj(response, out)
    _err(f"{GREEN}[FETCHED]{RESET} {filename}")
    config.cache.url_libs.append(url)
    config.cache.write()
    return destination


def release(config: Config) -> Path:
    """Build everything and package the classes into a versioned jar; return its path."""
    build("all", config)
    combined = (
        sum(value for value in map(_parse_u64, config.cache.files.values()) if value is not None)
        % _U64_LIMIT
    )
    for entry in config.cache.releases:
        if entry is not None and _parse_u64(entry[1]) == combined:
            raise LvjbError(f"{RED}[RELEASE]{RESET} Cannot release the same build twice")

    if config.entry_point is None:
        raise LvjbError(f"{RED}[RELEASE]{RESET} No entry point set in config")

    manifest = Path(MANIFEST_FILE)
    manifest.write_text(f"Main-Class: {config.entry_point}\n")
    out = f"{config.jar}-{config.version}.jar"
    jar_path = forge_sys_path(out, config, PathType.RELEASES)
    completed = subprocess.run(
        ["jar", "cfm", os.fspath(jar_path), os.fspath(manifest), "-C", config.paths.bin, "."],
        check=False,
    )
    if completed.returncode != 0:
        raise LvjbError(f"{RED}[RELEASE]{RED} jar command failed")
    _err(f"{GREEN}[RELEASE]{RESET} Created: {jar_path}")
    manifest.unlink()
    config.cache.releases.append((out, str(combined)))
    config.cache.write()
    return jar_path


def help_text() -> str:
    """The usage text."""
    return "\n".join(_HELP_LINES) + "\n"


def print_help() -> None:
    """Print the usage text to standard output."""
    print(help_text(), end="")