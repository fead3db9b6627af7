from __future__ import annotations

import os
import signal
import time
from typing import Callable, List, Optional

import psutil

from seqdeploy.core.models import StopResult

GRACE_PERIOD_SECONDS = 2

_TOLERATED_ERRORS = (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess)


def find_matching_processes(pattern: str) -> List[psutil.Process]:
    """Return processes whose command line contains `pattern`, excluding this one."""
    own_pid = os.getpid()
    matches: List[psutil.Process] = []
    for proc in psutil.process_iter(["pid", "cmdline"]):
        if proc.info["pid"] == own_pid:
            continue
        cmdline = proc.info.get("cmdline") or []
        if pattern in " ".join(cmdline):
            matches.append(proc)
    return matches


def send_signal(proc: psutil.Process, signum: int) -> bool:
    """Signal one process, returning False when it vanished or refused."""
    try:
        proc.send_signal(signum)
    except _TOLERATED_ERRORS:
        return False
    return True


class ProcessStopper:
    """
    Stops every running instance of a service binary.

    Sends SIGINT, waits a fixed grace period, then SIGKILLs whatever still
    matches. Matching is by command-line substring, so it is inherently racy
    with PID reuse. Nothing here ever raises to the caller.
    """

    def __init__(
        self,
        finder: Callable[[str], List[psutil.Process]] = find_matching_processes,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.finder = finder
        self.sleep = sleep or time.sleep

    def stop(self, pattern: str) -> StopResult:
        result = StopResult()
        running = self._find(pattern)
        if not running:
            return result

        for proc in running:
            send_signal(proc, signal.SIGINT)
            result.interrupted.append(proc.pid)

        self.sleep(GRACE_PERIOD_SECONDS)

        for proc in self._find(pattern):
            if send_signal(proc, signal.SIGKILL):
                result.killed.append(proc.pid)

        return result

    def _find(self, pattern: str) -> List[psutil.Process]:
        try:
            return self.finder(pattern)
        except (psutil.Error, OSError):
            return []
