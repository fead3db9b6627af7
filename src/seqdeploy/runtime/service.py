from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.utils.diagnostics import CommandResult, DeployStepError, HealthCheckFailed

SETTLE_SECONDS = 5

LAUNCH_STEP = "launch"
HEALTH_STEP = "health"


@dataclass(frozen=True)
class LaunchedService:
    """Identity of a detached service process. Nothing supervises it after launch."""

    pid: int
    argv: List[str]
    log_path: Path


def runner_command(binary: Path, config_path: Path) -> List[str]:
    return [str(binary), "--config", str(config_path)]


def launch_detached(argv: List[str], cwd: Path, log_path: Path) -> LaunchedService:
    """
    Start `argv` in its own session with stdout and stderr appended to `log_path`.

    The child is not waited on and keeps running after this process exits.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("ab") as log_handle:
            process = subprocess.Popen(
                argv,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=log_handle,
                stderr=subprocess.STDOUT,
                start_new_session=True,
                close_fds=True,
            )
    except OSError as exc:
        raise DeployStepError(LAUNCH_STEP, f"Unable to start `{' '.join(argv)}`: {exc}") from exc

    return LaunchedService(pid=process.pid, argv=list(argv), log_path=log_path)


class HealthChecker:
    """Single-shot health verification through the companion client binary."""

    def __init__(
        self,
        runner: CommandRunner,
        settle_seconds: float = SETTLE_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.runner = runner
        self.settle_seconds = settle_seconds
        self.sleep = sleep or time.sleep

    def probe(self, client: Path, health_args: List[str], cwd: Optional[Path] = None) -> CommandResult:
        """Run the health subcommand once, without waiting. Unrunnable clients count as unhealthy."""
        argv = [str(client), *health_args]
        try:
            return self.runner.run(argv, cwd=cwd)
        except OSError as exc:
            return CommandResult(argv=argv, returncode=127, stderr=str(exc))

    def verify(self, client: Path, health_args: List[str], cwd: Optional[Path] = None) -> CommandResult:
        """Wait the settle period, probe exactly once, and raise HealthCheckFailed on non-zero status."""
        self.sleep(self.settle_seconds)
        result = self.probe(client, health_args, cwd=cwd)
        if not result.ok:
            raise HealthCheckFailed(str(result), result=result)
        return result
