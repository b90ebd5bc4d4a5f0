"""
Tests for blart.signals (signal name table).
"""

import signal

import pytest

from blart.exceptions import SignalNameError
from blart.signals import (
    SIGNALS,
    TERMINATION_SIGNALS,
    is_termination,
    relayable_signals,
    signal_by_name,
    signal_name,
)

posix = pytest.mark.posix


@pytest.mark.unit
class TestSignalByName:
    @posix
    @pytest.mark.parametrize("name", ["HUP", "hup", "SIGHUP", "sighup", " Hup "])
    def test_name_forms(self, name):
        assert signal_by_name(name) == signal.SIGHUP

    @posix
    def test_user_signals(self):
        assert signal_by_name("USR1") == signal.SIGUSR1
        assert signal_by_name("usr2") == signal.SIGUSR2

    def test_term_and_int(self):
        assert signal_by_name("TERM") == signal.SIGTERM
        assert signal_by_name("INT") == signal.SIGINT

    @pytest.mark.parametrize("name", ["BOGUS", "", "SIG", "CHLD", "STOP"])
    def test_unknown(self, name):
        with pytest.raises(SignalNameError) as exc_info:
            signal_by_name(name)
        assert exc_info.value.name == name

    def test_table_only_holds_platform_signals(self):
        for name, sig in SIGNALS.items():
            assert getattr(signal, "SIG" + name) == sig


@pytest.mark.unit
class TestSignalName:
    def test_known(self):
        assert signal_name(signal.SIGTERM) == "SIGTERM"

    def test_unknown_number(self):
        assert signal_name(12345) == "signal 12345"


@pytest.mark.unit
class TestTermination:
    def test_termination_signals(self):
        assert is_termination(signal.SIGTERM)
        assert is_termination(signal.SIGINT)

    @posix
    def test_kill_counts_as_termination(self):
        assert is_termination(signal.SIGKILL)
        assert signal.SIGKILL in TERMINATION_SIGNALS

    @posix
    def test_others_are_not(self):
        assert not is_termination(signal.SIGHUP)
        assert not is_termination(signal.SIGUSR1)
        assert not is_termination(signal.SIGWINCH)


@pytest.mark.unit
@posix
class TestRelayableSignals:
    def test_excludes_uncatchable_and_chld(self):
        relayable = relayable_signals()
        assert signal.SIGKILL not in relayable
        assert signal.SIGSTOP not in relayable
        assert signal.SIGCHLD not in relayable

    def test_includes_common_signals(self):
        relayable = relayable_signals()
        for sig in (signal.SIGHUP, signal.SIGINT, signal.SIGTERM, signal.SIGUSR1):
            assert sig in relayable

    def test_sorted_and_unique(self):
        relayable = [int(s) for s in relayable_signals()]
        assert relayable == sorted(set(relayable))
