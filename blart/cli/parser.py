"""
Argument parsing.

Flags default to None so that values from a config file or the environment
are only overridden by flags the user actually passed. The effective
defaults are shown in the help text instead.
"""

import argparse

from ..config import DEFAULT_DELAY_SECS, DEFAULT_SIGNAL
from ..debounce import DebounceMode
from ..time import delta_str

PROG = "blart"

# Shown in --help; applied by the config layer, not by argparse
DISPLAY_DEFAULTS: dict[str, str] = {
    "signal": DEFAULT_SIGNAL,
    "delay": delta_str(DEFAULT_DELAY_SECS),
    "debounce_mode": DebounceMode.FIXED.value,
    "log_level": "info",
}


class DefaultsHelpFormatter(argparse.HelpFormatter):
    """Help formatter that appends the effective default to each flag's help."""

    def _get_help_string(self, action: argparse.Action) -> str:
        help_text = action.help or ""
        default = DISPLAY_DEFAULTS.get(action.dest)
        if default is not None:
            return help_text + f" (default: {default})"
        return help_text


def build_parser() -> argparse.ArgumentParser:
    """Create the blart argument parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [flags] command [args...]",
        description=(
            "Run a command and send it a signal whenever watched files change. "
            "Signals sent to blart are relayed to the command."
        ),
        formatter_class=DefaultsHelpFormatter,
    )
    parser.add_argument(
        "-f",
        "--files",
        metavar="PATHS",
        help="files and directories to watch, split by ':'",
    )
    parser.add_argument(
        "-s", "--signal", metavar="NAME", help="signal to send on change"
    )
    parser.add_argument(
        "-d",
        "--delay",
        metavar="DURATION",
        help="time to wait after change before signalling child (e.g. 500ms, 3s)",
    )
    parser.add_argument(
        "--debounce-mode",
        choices=[mode.value for mode in DebounceMode],
        help="fixed: fire a delay after the first change of a burst; "
        "reset: fire a delay after the last",
    )
    parser.add_argument(
        "-c", "--config", metavar="FILE", help="YAML config file"
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="trace, debug, info, warning, error or false",
    )
    parser.add_argument(
        "--no-colors",
        action="store_true",
        default=False,
        help="disable colored log output",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", default=False, help="print version"
    )
    parser.add_argument(
        "command", nargs=argparse.REMAINDER, help="command to run and its arguments"
    )
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict:
    """Turn parsed flags into config overrides (None for flags not given)."""
    return {
        "files": args.files,
        "signal": args.signal,
        "delay": args.delay,
        "debounce_mode": args.debounce_mode,
        "command": _strip_separator(args.command) or None,
        "logging": {
            "level": args.log_level,
            "colors": False if args.no_colors else None,
        },
    }


def _strip_separator(command: list[str]) -> list[str]:
    """Drop a leading "--" used to separate blart's flags from the command."""
    if command and command[0] == "--":
        return command[1:]
    return command
