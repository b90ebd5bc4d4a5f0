"""
End-to-end tests: run ``python -m blart`` as a subprocess around a real child
and talk to it with files and signals, the way a user would.
"""

import os
import signal
import subprocess
import sys
import threading
import time
from pathlib import Path

import pytest

from tests.fixtures.child import wait_for

pytestmark = [pytest.mark.e2e, pytest.mark.posix]

REPO_ROOT = Path(__file__).resolve().parents[2]


class BlartProcess:
    """A running blart with its merged stdout/stderr collected line by line."""

    def __init__(self, argv: list[str]) -> None:
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(REPO_ROOT), env.get("PYTHONPATH")) if p
        )
        env = {k: v for k, v in env.items() if not k.startswith("BLART_")}
        self.proc = subprocess.Popen(
            [sys.executable, "-m", "blart", *argv],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            env=env,
        )
        self.lines: list[str] = []
        self._reader = threading.Thread(target=self._read, daemon=True)
        self._reader.start()

    def _read(self) -> None:
        for line in self.proc.stdout:
            self.lines.append(line.rstrip("\n"))

    @property
    def output(self) -> str:
        return "\n".join(self.lines)

    def wait_for_line(self, text: str, timeout: float = 10.0) -> bool:
        return wait_for(lambda: text in self.output, timeout)

    def send_signal(self, sig: int) -> None:
        self.proc.send_signal(sig)

    def wait(self, timeout: float = 15.0) -> int:
        code = self.proc.wait(timeout)
        self._reader.join(5)
        return code

    def kill(self) -> None:
        if self.proc.poll() is None:
            self.proc.kill()
            self.proc.wait(5)


def blart_args(watched_file, *extra):
    return [
        "-f",
        str(watched_file),
        "-d",
        "100ms",
        "--log-level",
        "debug",
        "--no-colors",
        *extra,
    ]


@pytest.fixture
def start_blart():
    started = []

    def factory(argv):
        blart = BlartProcess(argv)
        started.append(blart)
        return blart

    yield factory
    for blart in started:
        blart.kill()


class TestStartup:
    def test_version(self, start_blart):
        blart = start_blart(["--version"])
        assert blart.wait() == 0
        assert blart.lines[0].startswith("blart version: ")

    def test_usage_error(self, start_blart):
        blart = start_blart([])
        assert blart.wait() == 1
        assert blart.lines[0] == "!! no files to watch"
        assert "usage: blart" in blart.output
        assert blart.lines[-1].startswith("blart version: ")

    def test_child_exit_ends_blart(self, start_blart, watched_file):
        blart = start_blart(
            blart_args(watched_file, "--", sys.executable, "-c", "pass")
        )
        assert blart.wait() == 0
        assert "child exited" in blart.output
        assert "now exiting" in blart.output


class TestRunning:
    def test_change_signals_child_and_term_shuts_down(
        self, start_blart, watched_file, child_script
    ):
        blart = start_blart(blart_args(watched_file, "--", *child_script.argv()))
        assert blart.wait_for_line("watching for changes")
        assert child_script.wait_ready()

        watched_file.write_text("setting = 2\n")
        assert wait_for(lambda: "SIGHUP" in child_script.received(), 5)
        assert "detected change" in blart.output
        assert "signalling child" in blart.output

        blart.send_signal(signal.SIGTERM)
        assert blart.wait() == 0
        assert child_script.received()[-1] == "SIGTERM"
        assert "attempting to shut down cleanly" in blart.output

    def test_burst_of_changes_signals_once(
        self, start_blart, watched_file, child_script
    ):
        blart = start_blart(
            [
                "-f",
                str(watched_file),
                "-d",
                "500ms",
                "--log-level",
                "debug",
                "--no-colors",
                "--",
                *child_script.argv(),
            ]
        )
        assert blart.wait_for_line("watching for changes")
        assert child_script.wait_ready()

        for i in range(5):
            watched_file.write_text(f"setting = {i}\n")
            time.sleep(0.02)
        assert wait_for(lambda: "SIGHUP" in child_script.received(), 5)
        time.sleep(0.8)
        assert child_script.received().count("SIGHUP") == 1

        blart.send_signal(signal.SIGINT)
        assert blart.wait() == 0

    def test_other_signals_forwarded(self, start_blart, watched_file, child_script):
        blart = start_blart(blart_args(watched_file, "--", *child_script.argv()))
        assert blart.wait_for_line("watching for changes")
        assert child_script.wait_ready()

        blart.send_signal(signal.SIGUSR1)
        assert wait_for(lambda: child_script.received() == ["SIGUSR1"], 5)
        assert blart.proc.poll() is None

        blart.send_signal(signal.SIGTERM)
        assert blart.wait() == 0

    @pytest.mark.slow
    def test_stubborn_child_is_killed(self, start_blart, watched_file, child_script):
        blart = start_blart(
            blart_args(watched_file, "--", *child_script.argv(ignore_term=True))
        )
        assert blart.wait_for_line("watching for changes")
        assert child_script.wait_ready()

        start = time.monotonic()
        blart.send_signal(signal.SIGTERM)
        assert blart.wait(timeout=20) == 1
        elapsed = time.monotonic() - start

        assert elapsed >= 5.0
        assert "attempting to now kill child" in blart.output
        assert child_script.received() == ["SIGTERM"]
