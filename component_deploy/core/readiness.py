"""Bounded wait for the application server port"""

import logging
import shutil
import socket
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ..models.config import ReadinessConfig
from ..models.result import ReadinessResult


class PortProbe(ABC):
    """One way of telling whether something listens on a port"""

    name = "probe"

    @abstractmethod
    def available(self) -> bool:
        """Whether this mechanism can be used on this host"""
        pass

    @abstractmethod
    def is_listening(self, host: str, port: int) -> bool:
        pass


class ListenerTableProbe(PortProbe):
    """Inspects the kernel listener table through ss or netstat"""

    def __init__(self, binary: str, timeout: float = 10):
        self.binary = binary
        self.name = binary
        self.timeout = timeout

    def available(self) -> bool:
        return shutil.which(self.binary) is not None

    def is_listening(self, host: str, port: int) -> bool:
        try:
            result = subprocess.run(
                [self.binary, "-tnl"],
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except (OSError, subprocess.TimeoutExpired):
            return False

        return listener_table_has_port(result.stdout, port)


class ConnectProbe(PortProbe):
    """Opens a TCP connection to the service"""

    name = "connect"

    def __init__(self, timeout: float = 5):
        self.timeout = timeout

    def available(self) -> bool:
        return True

    def is_listening(self, host: str, port: int) -> bool:
        try:
            with socket.create_connection((host, port), timeout=self.timeout):
                return True
        except OSError:
            return False


def listener_table_has_port(table: str, port: int) -> bool:
    """Check ss/netstat -tnl output for a local address on port"""
    suffix = f":{port}"
    for line in table.splitlines():
        columns = line.split()
        # Local address is the fourth column in both tools
        if len(columns) >= 4 and columns[3].endswith(suffix):
            return True
    return False


def default_probes() -> List[PortProbe]:
    return [ListenerTableProbe("ss"), ListenerTableProbe("netstat"), ConnectProbe()]


class ReadinessWaiter:
    """Polls the service port every interval until ready or timeout

    A timeout is reported, never raised: the health checks that follow
    are what signal a server that did not come up.
    """

    def __init__(
        self,
        config: ReadinessConfig,
        probes: Optional[List[PortProbe]] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        self.config = config
        self.probes = probes if probes is not None else default_probes()
        self.sleep = sleep
        self.clock = clock
        self.logger = logging.getLogger(self.__class__.__name__)

    def select_probe(self) -> Optional[PortProbe]:
        """First available probe in preference order"""
        for probe in self.probes:
            if probe.available():
                return probe
        return None

    def wait(self) -> ReadinessResult:
        host, port = self.config.host, self.config.port
        probe = self.select_probe()
        if probe is None:
            self.logger.error("No port probing mechanism available")
            return ReadinessResult(ready=False)

        self.logger.info(f"Waiting for service (port {port}) to become available "
                         f"[{probe.name}, timeout {self.config.timeout:g}s]...")
        start = self.clock()

        while True:
            if probe.is_listening(host, port):
                waited = self.clock() - start
                self.logger.info(f"Service is now listening on port {port} (waited {waited:.0f}s).")
                return ReadinessResult(ready=True, waited=waited, mechanism=probe.name)

            elapsed = self.clock() - start
            if elapsed >= self.config.timeout:
                self.logger.error(
                    f"ERROR: Service did not start listening on port {port} "
                    f"within {self.config.timeout:g}s."
                )
                self.logger.warning("Continuing to health checks anyway.")
                return ReadinessResult(ready=False, waited=elapsed, mechanism=probe.name)

            self.sleep(min(self.config.interval, self.config.timeout - elapsed))
