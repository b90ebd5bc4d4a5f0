"""
Tests for blart.cli.parser.
"""

import pytest

from blart.cli.parser import DISPLAY_DEFAULTS, build_parser, overrides_from_args


def parse(*argv):
    return overrides_from_args(build_parser().parse_args(list(argv)))


@pytest.mark.unit
class TestParser:
    def test_all_flags(self):
        overrides = parse(
            "-f", "/a:/b",
            "-s", "USR1",
            "-d", "500ms",
            "--debounce-mode", "reset",
            "--log-level", "debug",
            "--no-colors",
            "app", "--serve",
        )
        assert overrides == {
            "files": "/a:/b",
            "signal": "USR1",
            "delay": "500ms",
            "debounce_mode": "reset",
            "command": ["app", "--serve"],
            "logging": {"level": "debug", "colors": False},
        }

    def test_unset_flags_are_none(self):
        overrides = parse()
        assert overrides["files"] is None
        assert overrides["signal"] is None
        assert overrides["delay"] is None
        assert overrides["command"] is None
        assert overrides["logging"] == {"level": None, "colors": None}

    def test_command_flags_not_parsed_as_blart_flags(self):
        assert parse("-f", "a", "nginx", "-s", "reload")["command"] == [
            "nginx",
            "-s",
            "reload",
        ]

    def test_separator_dropped(self):
        assert parse("-f", "a", "--", "app", "-d")["command"] == ["app", "-d"]

    def test_long_names(self):
        overrides = parse("--files", "a", "--signal", "HUP", "--delay", "1s", "app")
        assert overrides["files"] == "a"
        assert overrides["delay"] == "1s"

    def test_config_and_version_flags(self):
        args = build_parser().parse_args(["-c", "blart.yaml", "-v"])
        assert args.config == "blart.yaml"
        assert args.version is True

    def test_invalid_debounce_mode(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--debounce-mode", "sometimes"])


@pytest.mark.unit
class TestHelp:
    def test_defaults_shown(self, monkeypatch):
        # Wide enough that no help line wraps
        monkeypatch.setenv("COLUMNS", "200")
        text = build_parser().format_help()
        assert "(default: HUP)" in text
        assert "(default: 3s)" in text
        assert "(default: fixed)" in text
        assert "(default: info)" in text

    def test_display_defaults(self):
        assert DISPLAY_DEFAULTS["delay"] == "3s"
        assert DISPLAY_DEFAULTS["signal"] == "HUP"
