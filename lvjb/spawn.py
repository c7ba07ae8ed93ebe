"""Running build hooks and the Java compiler."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Sequence

from lvjb.config import Config
from lvjb.paths import expand_classpath

ORANGE = "\x1b[33m"
GREEN = "\x1b[32m"
RED = "\x1b[31m"
RESET = "\x1b[0m"


class LvjbError(Exception):
    """A build step failed."""


def _describe_status(code: int) -> str:
    return f"signal: {-code}" if code < 0 else f"exit status: {code}"


def run_hooks(hooks: Sequence[str]) -> None:
    """Run each shell hook in order, stopping at the first failure."""
    for hook in hooks:
        print(f"{ORANGE}[PRECOMP HOOK]{RESET} Running {hook}", file=sys.stderr)
        try:
            completed = subprocess.run(["sh", "-c", hook], check=False)
        except OSError as error:
            raise LvjbError(f"{RED}[HOOK ERROR]{RESET} `{hook}` failed to execute: {error}") from error
        if completed.returncode != 0:
            raise LvjbError(
                f"{RED}[HOOK ERROR]{RESET} `{hook}` failed with status: "
                f"{_describe_status(completed.returncode)}"
            )


def compilation_command(files: Sequence[str | os.PathLike[str]], config: Config) -> list[str]:
    """Compiler command line for ``files``."""
    command = [config.compiler]
    if config.classpath:
        command += ["-cp", expand_classpath(config.classpath)]
    command += ["-d", config.paths.bin]
    command += [os.fspath(file) for file in files]
    command += config.args.compilation or []
    return command


def spawn_compilation_command(files: Sequence[str | os.PathLike[str]], config: Config) -> None:
    """Run pre-build hooks, compile ``files``, then run post-build hooks.

    With no files the compiler and post-build hooks are skipped.
    """
    run_hooks(config.pre_build_cmds)
    if not files:
        print(f"{GREEN}[COMPILER]{RESET} Nothing to compile", file=sys.stderr)
        return
    command = compilation_command(files, config)
    classpath = expand_classpath(config.classpath)
    print(f"{ORANGE}[COMPILER]{RESET} classpath: {classpath}, output to: {config.paths.bin}")
    last = len(files) - 1
    for index, file in enumerate(files):
        symbol = "├ " if index < last else "└ "
        print(f"  {symbol} {os.fspath(file)}")
    try:
        completed = subprocess.run(command, check=False)
    except OSError as error:
        raise LvjbError(f"{RED}[COMPILER ERROR]{RESET} Failed to execute command: {error}") from error
    if completed.returncode != 0:
        raise LvjbError(
            f"{RED}[COMPILER ERROR]{RESET} Compilation failed with status: "
            f"{_describe_status(completed.returncode)}"
        )
    print(f"{GREEN}[COMPILER OK]{RESET} Compilation succeeded.")
    run_hooks(config.post_build_cmds)