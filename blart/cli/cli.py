#!/usr/bin/env python3
"""
blart CLI.

Usage:
    blart -f /etc/app/app.conf:/etc/app/conf.d -s HUP -d 3s app --serve
    blart -c blart.yaml -- app --serve
    blart --help
"""

from __future__ import annotations

import platform
import sys
from collections.abc import Mapping, Sequence

import blart
from blart.config import load_config
from blart.exceptions import ConfigError
from blart.log import LoggerFactory
from blart.supervisor import Supervisor

from .output import ConsoleOutput, OutputWriter
from .parser import PROG, build_parser, overrides_from_args


def version_line() -> str:
    """e.g. "blart version: 0.2.0 (python 3.12.1 on linux/x86_64; CPython)"."""
    return (
        f"{PROG} version: {blart.__version__} "
        f"(python {platform.python_version()} on {sys.platform}/{platform.machine()}; "
        f"{platform.python_implementation()})"
    )


def usage_error(out: OutputWriter, error: object) -> int:
    """Report a startup problem with the usage text and return exit status 1."""
    out.write(f"!! {error}")
    out.write(build_parser().format_help().rstrip("\n"))
    out.write()
    out.write(version_line())
    return 1


def main(
    argv: Sequence[str] | None = None,
    out: OutputWriter | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """
    Main entry point.

    Returns:
        0 when the child exited cleanly, 1 on a forced shutdown or any
        startup failure
    """
    out = out if out is not None else ConsoleOutput()
    args = build_parser().parse_args(argv)
    if args.version:
        out.write(version_line())
        return 0

    try:
        config = load_config(
            overrides_from_args(args), config_file=args.config, environ=environ
        )
    except ConfigError as e:
        return usage_error(out, e)

    lg = LoggerFactory.create_root(config.logging.to_log_config())
    supervisor = Supervisor(lg, config)
    try:
        return supervisor.run()
    except ConfigError as e:
        return usage_error(out, e)


if __name__ == "__main__":
    sys.exit(main())
