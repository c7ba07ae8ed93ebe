"""Command-line entry point."""

from __future__ import annotations

import sys
from typing import Sequence

from lvjb import cmds
from lvjb.config import Config
from lvjb.spawn import RED, RESET, LvjbError

_FAILURES = (LvjbError, OSError, ValueError, TypeError)


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def _argument(args: Sequence[str], index: int) -> str | None:
    return args[index] if len(args) > index else None


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    command = _argument(args, 0)

    try:
        config = Config.load()
    except _FAILURES:
        if command not in ("init", "--help"):
            _err(
                f"{RED}[lvjb]{RESET} not a lvjb directory, run 'lvjb init' to initialize it, "
                "or run --help for more info"
            )
            return 1
        config = Config.default()

    target = _argument(args, 1)
    try:
        match command:
            case "init":
                try:
                    cmds.init(config)
                except _FAILURES as error:
                    _err(f"{RED}[lvjb]{RESET} {error}")
                    return 1
            case "initpkg":
                if target is None:
                    _err(f"{RED}[lvjb]{RESET} Missing package name for 'initpkg'")
                    return 1
                try:
                    cmds.initpkg(target, config)
                except _FAILURES as error:
                    _err(f"{RED}[lvjb]{RESET} {error}")
                    return 1
            case "build":
                if "--re" in args:
                    config.incremental = False
                cmds.build(target, config)
            case "docgen":
                if target is None:
                    _err(f"{RED}[DOCGEN ERROR]{RESET} No class specified")
                    return 1
                cmds.docgen(target, config)
            case "curl":
                if target is None:
                    _err(f"{RED}[CURL ERROR]{RESET} No url specified")
                    return 1
                try:
                    cmds.curl(target, config)
                except _FAILURES as error:
                    _err(f"{RED}[CURL ERROR]{RESET} {error}")
                    return 1
            case "run":
                if "--" in args:
                    extra = args[args.index("--") + 1 :]
                    if config.args.runtime is None:
                        config.args.runtime = []
                    config.args.runtime.extend(extra)
                cmds.run(target, config, True)
            case "test":
                cmds.test(config)
            case "clean":
                cmds.clean(config)
            case "release":
                cmds.release(config)
            case "--help":
                cmds.print_help()
            case None:
                _err("No command provided")
                return 1
            case _:
                _err(f"Unrecognized command: '{command}'")
                return 1
    except _FAILURES as error:
        _err(str(error))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())