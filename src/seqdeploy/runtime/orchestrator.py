from __future__ import annotations

import os
from typing import Callable, Mapping, Optional

from seqdeploy.core.context import DeployContext
from seqdeploy.core.models import DeployOutcome, DeployResult
from seqdeploy.runtime.build import STEP_NAME as BUILD_STEP, build_binaries
from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.runtime.deploy_log import DeployLog, tail_lines
from seqdeploy.runtime.process import ProcessStopper
from seqdeploy.runtime.service import (
    HEALTH_STEP,
    LAUNCH_STEP,
    HealthChecker,
    LaunchedService,
    launch_detached,
    runner_command,
)
from seqdeploy.runtime.source import STEP_NAME as SYNC_STEP, SourceSynchronizer, SyncMode
from seqdeploy.utils.diagnostics import CommandResult, DeployStepError, HealthCheckFailed

ACTOR_ENV_VAR = "GITHUB_ACTOR"
UNKNOWN_ACTOR = "unknown"

Notifier = Callable[[str, str], None]
Emitter = Callable[[str], None]


def resolve_actor(argument: Optional[str], environ: Optional[Mapping[str, str]] = None) -> str:
    """Pick the actor from the argument, then $GITHUB_ACTOR, then the literal 'unknown'."""
    if argument:
        return argument
    env = os.environ if environ is None else environ
    return env.get(ACTOR_ENV_VAR) or UNKNOWN_ACTOR


def _silent_notify(message: str, severity: str = "info") -> None:
    return None


def _silent_emit(line: str) -> None:
    return None


class DeployOrchestrator:
    """
    Runs the restart procedure for the sequencer service.

    Steps run strictly in order: stop, sync, build, launch, verify. Stop
    failures are tolerated. Every fatal failure, expected or not, lands in the
    one failure path that records the failure line; there is no rollback, so a
    failed build leaves the service stopped.
    """

    def __init__(
        self,
        context: DeployContext,
        runner: Optional[CommandRunner] = None,
        stopper: Optional[ProcessStopper] = None,
        health_checker: Optional[HealthChecker] = None,
        launcher: Callable[..., LaunchedService] = launch_detached,
        deploy_log: Optional[DeployLog] = None,
        notify: Optional[Notifier] = None,
        emit: Optional[Emitter] = None,
    ) -> None:
        self.context = context
        self.runner = runner or CommandRunner()
        self.stopper = stopper or ProcessStopper()
        self.health_checker = health_checker or HealthChecker(self.runner)
        self.launcher = launcher
        self.deploy_log = deploy_log or DeployLog(context.paths.deploy_log)
        self.synchronizer = SourceSynchronizer(context.repository, self.runner)
        self.notify = notify or _silent_notify
        self.emit = emit or _silent_emit

    def run(self, actor: str) -> DeployResult:
        """Execute one deploy for an already-resolved actor."""
        self.deploy_log.append(f"Deployment initiated by: {actor}")

        self.stop_prior_instance()

        step = SYNC_STEP
        try:
            self.sync_source()
            step = BUILD_STEP
            self.build()
            step = LAUNCH_STEP
            launched = self.launch()
            step = HEALTH_STEP
            self.verify_health()
        except DeployStepError as exc:
            if isinstance(exc, HealthCheckFailed):
                self.notify("Sequencer failed health check", "error")
                self.report_client_output(exc.result)
                self.dump_runtime_log()
            elif exc.result is not None and exc.result.stderr.strip():
                self.notify(exc.result.stderr.strip(), "error")
            return self._fail(actor, exc.step, exc.message)
        except Exception as exc:
            self.notify(f"Unexpected error during {step}: {exc}", "error")
            return self._fail(actor, step, str(exc))

        self.notify("Sequencer started successfully and is healthy", "success")
        self.deploy_log.append(f"Deployment completed successfully by: {actor}")
        return DeployResult(actor=actor, outcome=DeployOutcome.SUCCESS, runner_pid=launched.pid)

    def stop_prior_instance(self) -> None:
        runner_name = self.context.service.runner
        self.notify(f"Stopping current {runner_name}...", "info")
        result = self.stopper.stop(runner_name)
        if result.killed:
            self.notify(f"Force killed {runner_name} pids: {result.killed}", "warning")
        elif result.found:
            self.notify(f"Interrupted {runner_name} pids: {result.interrupted}", "info")

    def sync_source(self) -> None:
        work_dir = self.context.paths.code_dir
        if self.synchronizer.plan(work_dir) == SyncMode.UPDATE:
            self.notify("Updating existing repository...", "info")
        else:
            self.notify("Cloning repository...", "info")
        self.synchronizer.sync(work_dir)

    def build(self) -> None:
        self.notify(f"Building {' and '.join(self.context.build.binaries)}...", "info")
        build_binaries(self.context.build, self.context.paths.code_dir, self.runner)

    def launch(self) -> LaunchedService:
        paths = self.context.paths
        self.notify(f"Starting {self.context.service.runner}...", "info")
        argv = runner_command(self.context.runner_binary, paths.service_config)
        return self.launcher(argv, paths.code_dir, paths.runtime_log)

    def verify_health(self) -> None:
        self.health_checker.verify(
            self.context.client_binary,
            self.context.service.health_args,
            cwd=self.context.paths.code_dir,
        )

    def report_client_output(self, result: Optional[CommandResult]) -> None:
        if result is None:
            return
        if result.stdout.strip():
            self.notify(result.stdout.strip(), "warning")
        if result.stderr.strip():
            self.notify(result.stderr.strip(), "error")

    def dump_runtime_log(self) -> None:
        log_path = self.context.paths.runtime_log
        try:
            lines = tail_lines(log_path, self.context.service.tail_lines)
        except OSError as exc:
            self.notify(f"Unable to read {log_path}: {exc}", "warning")
            return
        for line in lines:
            self.emit(line)

    def _fail(self, actor: str, step: str, message: str) -> DeployResult:
        self.notify(f"Deployment failed by: {actor}", "error")
        self.deploy_log.append(f"Deployment failed by: {actor}")
        return DeployResult(
            actor=actor,
            outcome=DeployOutcome.FAILED,
            failed_step=step,
            message=message,
        )
