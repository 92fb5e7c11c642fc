"""Tests for the bounded service port wait"""

from unittest.mock import patch

from component_deploy.core.readiness import (
    ConnectProbe,
    ListenerTableProbe,
    PortProbe,
    ReadinessWaiter,
    listener_table_has_port,
)
from component_deploy.models.config import ReadinessConfig

SS_OUTPUT = """State  Recv-Q Send-Q Local Address:Port Peer Address:Port Process
LISTEN 0      100    127.0.0.1:8005     0.0.0.0:*
LISTEN 0      100    *:8080             *:*
"""

NETSTAT_OUTPUT = """Active Internet connections (only servers)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 0.0.0.0:22              0.0.0.0:*               LISTEN
tcp6       0      0 :::8080                 :::*                    LISTEN
"""


class FakeClock:

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedProbe(PortProbe):
    """Reports listening once it has been asked `ready_after` times"""

    name = "scripted"

    def __init__(self, ready_after=None, available=True):
        self.ready_after = ready_after
        self._available = available
        self.calls = 0

    def available(self):
        return self._available

    def is_listening(self, host, port):
        self.calls += 1
        return self.ready_after is not None and self.calls > self.ready_after


def make_waiter(probe, timeout=20, interval=5, clock=None):
    clock = clock or FakeClock()
    config = ReadinessConfig(timeout=timeout, interval=interval)
    return ReadinessWaiter(config, probes=[probe], sleep=clock.sleep, clock=clock), clock


class TestReadinessWaiter:

    def test_ready_immediately(self):
        waiter, clock = make_waiter(ScriptedProbe(ready_after=0))

        result = waiter.wait()

        assert result.ready
        assert result.waited == 0
        assert result.mechanism == "scripted"
        assert clock.sleeps == []

    def test_ready_after_polls(self):
        waiter, clock = make_waiter(ScriptedProbe(ready_after=2))

        result = waiter.wait()

        assert result.ready
        assert clock.sleeps == [5, 5]
        assert result.waited == 10

    def test_timeout_is_not_an_error(self):
        waiter, clock = make_waiter(ScriptedProbe(), timeout=10, interval=5)

        result = waiter.wait()

        assert not result.ready
        assert result.waited == 10
        assert clock.sleeps == [5, 5]

    def test_last_sleep_is_capped_by_timeout(self):
        waiter, clock = make_waiter(ScriptedProbe(), timeout=7, interval=5)

        waiter.wait()

        assert clock.sleeps == [5, 2]

    def test_zero_timeout_polls_once(self):
        probe = ScriptedProbe()
        waiter, clock = make_waiter(probe, timeout=0)

        assert not waiter.wait().ready
        assert probe.calls == 1

    def test_first_available_probe_is_used(self):
        unavailable = ScriptedProbe(ready_after=0, available=False)
        fallback = ScriptedProbe(ready_after=0)
        clock = FakeClock()
        waiter = ReadinessWaiter(ReadinessConfig(), probes=[unavailable, fallback],
                                 sleep=clock.sleep, clock=clock)

        assert waiter.wait().ready
        assert unavailable.calls == 0
        assert fallback.calls == 1

    def test_no_probe_available(self):
        waiter, _ = make_waiter(ScriptedProbe(available=False))

        assert not waiter.wait().ready


class TestProbes:

    def test_ss_listener_table(self):
        assert listener_table_has_port(SS_OUTPUT, 8080)
        assert listener_table_has_port(SS_OUTPUT, 8005)
        assert not listener_table_has_port(SS_OUTPUT, 80)

    def test_netstat_listener_table(self):
        assert listener_table_has_port(NETSTAT_OUTPUT, 8080)
        assert not listener_table_has_port(NETSTAT_OUTPUT, 8443)

    def test_listener_probe_availability(self):
        with patch("component_deploy.core.readiness.shutil.which", return_value=None):
            assert not ListenerTableProbe("ss").available()
        with patch("component_deploy.core.readiness.shutil.which", return_value="/usr/sbin/ss"):
            assert ListenerTableProbe("ss").available()

    def test_connect_probe_refused(self):
        with patch("component_deploy.core.readiness.socket.create_connection",
                   side_effect=ConnectionRefusedError()):
            assert not ConnectProbe().is_listening("127.0.0.1", 8080)
