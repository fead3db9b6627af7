from __future__ import annotations

from pathlib import Path
from typing import List

from seqdeploy.core.models import RELEASE_PROFILE, BuildSettings
from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.utils.diagnostics import CommandResult

STEP_NAME = "build"


def build_command(settings: BuildSettings) -> List[str]:
    """Return the toolchain argv building every configured binary in one invocation."""
    argv = [settings.tool, "build", f"--{RELEASE_PROFILE}"]
    for binary in settings.binaries:
        argv.extend(["--bin", binary])
    return argv


def build_binaries(settings: BuildSettings, work_dir: Path, runner: CommandRunner) -> CommandResult:
    """
    Compile the service runner and its client in release mode.

    Compiler output streams straight to the terminal. A failed build raises DeployStepError.
    """
    return runner.check(STEP_NAME, build_command(settings), cwd=work_dir, capture=False)
