"""
Configuration schema, validated with Pydantic.
"""

from __future__ import annotations

from signal import Signals
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..debounce import DebounceMode
from ..exceptions import ConfigError
from ..log import LogConfig, resolve_level
from ..signals import signal_by_name
from ..time import InvalidDurationError, delta_to_secs

DEFAULT_SIGNAL = "HUP"
DEFAULT_DELAY_SECS = 3.0


class LoggingConfig(BaseModel):
    """The ``logging`` section."""

    level: str | int | bool = Field(default="info", description="Log level or false")
    colors: bool = Field(default=True, description="ANSI colors in log output")
    micros: bool = Field(default=False, description="Microsecond timestamps")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: Any) -> Any:
        """Reject level names the logging layer does not know."""
        try:
            resolve_level(v)
        except ConfigError as e:
            raise ValueError(str(e)) from None
        return v

    def to_log_config(self) -> LogConfig:
        return LogConfig.from_params(self.level, colors=self.colors, micros=self.micros)


class SupervisorConfig(BaseModel):
    """
    Everything the supervisor needs to run.

    ``files`` accepts a list or a colon-separated string; ``delay`` accepts
    seconds or a duration string ("3s", "500ms"); ``signal`` accepts any name
    in the platform's signal table.
    """

    files: list[str] = Field(default_factory=list, description="Paths to watch")
    command: list[str] = Field(default_factory=list, description="Child command")
    signal: str = Field(default=DEFAULT_SIGNAL, description="Signal sent on change")
    delay: float = Field(
        default=DEFAULT_DELAY_SECS, ge=0, description="Quiescence window in seconds"
    )
    debounce_mode: DebounceMode = Field(
        default=DebounceMode.FIXED, description="How the quiescence window is measured"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    @field_validator("files", mode="before")
    @classmethod
    def split_files(cls, v: Any) -> Any:
        """Accept "a:b:c" as well as a list."""
        if isinstance(v, str):
            return [p for p in v.split(":") if p]
        return v

    @field_validator("command", mode="before")
    @classmethod
    def split_command(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.split()
        return v

    @field_validator("signal")
    @classmethod
    def validate_signal(cls, v: str) -> str:
        """Normalize to the short upper-case name ("sighup" -> "HUP")."""
        try:
            return signal_by_name(v).name[3:]
        except ConfigError as e:
            raise ValueError(str(e)) from None

    @field_validator("delay", mode="before")
    @classmethod
    def parse_delay(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return delta_to_secs(v)
            except InvalidDurationError as e:
                raise ValueError(str(e)) from None
        return v

    @property
    def sig(self) -> Signals:
        return signal_by_name(self.signal)

    def check_runnable(self) -> None:
        """
        Check the settings that have no sensible default.

        Raises:
            ConfigError: If there is nothing to watch or no command to run
        """
        if not self.files:
            raise ConfigError("no files to watch")
        if not self.command:
            raise ConfigError("no command specified")
