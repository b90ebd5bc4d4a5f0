"""
Tests for blart.config.schemas (Pydantic validation).
"""

import logging
import signal

import pytest
from pydantic import ValidationError

from blart.config import DEFAULT_DELAY_SECS, DEFAULT_SIGNAL, SupervisorConfig
from blart.config.schemas import LoggingConfig
from blart.debounce import DebounceMode
from blart.exceptions import ConfigError


@pytest.mark.unit
class TestDefaults:
    def test_defaults(self):
        config = SupervisorConfig()
        assert config.files == []
        assert config.command == []
        assert config.signal == DEFAULT_SIGNAL == "HUP"
        assert config.delay == DEFAULT_DELAY_SECS == 3.0
        assert config.debounce_mode is DebounceMode.FIXED
        assert config.logging.level == "info"
        assert config.logging.colors is True

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            SupervisorConfig(sleep=1)

    def test_unknown_logging_key_rejected(self):
        with pytest.raises(ValidationError):
            SupervisorConfig(logging={"format": "json"})


@pytest.mark.unit
class TestFiles:
    def test_colon_separated(self):
        config = SupervisorConfig(files="/etc/a.conf:/etc/conf.d")
        assert config.files == ["/etc/a.conf", "/etc/conf.d"]

    def test_list(self):
        assert SupervisorConfig(files=["a", "b"]).files == ["a", "b"]

    def test_empty_entries_dropped(self):
        assert SupervisorConfig(files="a::b:").files == ["a", "b"]


@pytest.mark.unit
class TestCommand:
    def test_string_split(self):
        assert SupervisorConfig(command="nginx -g 'daemon off;'").command[0] == "nginx"

    def test_list(self):
        cmd = ["sh", "-c", "echo hi"]
        assert SupervisorConfig(command=cmd).command == cmd


@pytest.mark.unit
class TestSignal:
    @pytest.mark.posix
    @pytest.mark.parametrize("name", ["HUP", "hup", "SIGHUP"])
    def test_normalized(self, name):
        config = SupervisorConfig(signal=name)
        assert config.signal == "HUP"
        assert config.sig == signal.SIGHUP

    def test_term(self):
        assert SupervisorConfig(signal="sigterm").sig == signal.SIGTERM

    def test_unknown(self):
        with pytest.raises(ValidationError, match="unknown signal: BOGUS"):
            SupervisorConfig(signal="BOGUS")


@pytest.mark.unit
class TestDelay:
    @pytest.mark.parametrize(
        "value, expected",
        [("3s", 3.0), ("500ms", 0.5), ("1m30s", 90.0), ("0", 0.0), (2, 2.0), (0.25, 0.25)],
    )
    def test_values(self, value, expected):
        assert SupervisorConfig(delay=value).delay == expected

    def test_invalid_string(self):
        with pytest.raises(ValidationError, match="could not parse duration"):
            SupervisorConfig(delay="soon")

    def test_negative(self):
        with pytest.raises(ValidationError):
            SupervisorConfig(delay=-1)


@pytest.mark.unit
class TestDebounceMode:
    def test_reset(self):
        assert SupervisorConfig(debounce_mode="reset").debounce_mode is DebounceMode.RESET

    def test_invalid(self):
        with pytest.raises(ValidationError):
            SupervisorConfig(debounce_mode="sometimes")


@pytest.mark.unit
class TestLoggingConfig:
    def test_to_log_config(self):
        log_config = LoggingConfig(level="debug", colors=False).to_log_config()
        assert log_config.level == logging.DEBUG
        assert log_config.colors is False

    def test_disabled(self):
        assert LoggingConfig(level="false").to_log_config().level is False
        assert LoggingConfig(level=False).to_log_config().level is False

    def test_invalid_level(self):
        with pytest.raises(ValidationError, match="invalid log level"):
            LoggingConfig(level="loud")


@pytest.mark.unit
class TestCheckRunnable:
    def test_ok(self):
        SupervisorConfig(files=["a"], command=["b"]).check_runnable()

    def test_no_files(self):
        with pytest.raises(ConfigError, match="no files to watch"):
            SupervisorConfig(command=["b"]).check_runnable()

    def test_no_command(self):
        with pytest.raises(ConfigError, match="no command specified"):
            SupervisorConfig(files=["a"]).check_runnable()
