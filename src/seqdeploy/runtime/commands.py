from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from seqdeploy.utils.diagnostics import CommandResult, DeployStepError


class CommandRunner:
    """Runs external tools synchronously, capturing their output or passing it through."""

    def run(self, argv: Sequence[str], cwd: Optional[Path] = None, capture: bool = True) -> CommandResult:
        """
        Run a command to completion. Raises OSError when it cannot be started.

        With `capture=False` the child inherits this process's stdout and stderr,
        so long-running tools show their progress; the result then carries empty output.
        """
        completed = subprocess.run(
            list(argv),
            cwd=str(cwd) if cwd is not None else None,
            capture_output=capture,
            text=True,
            errors="replace",
        )
        return CommandResult(
            argv=[str(arg) for arg in argv],
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def check(
        self,
        step: str,
        argv: Sequence[str],
        cwd: Optional[Path] = None,
        capture: bool = True,
    ) -> CommandResult:
        """Run a command and raise DeployStepError unless it exits with status 0."""
        try:
            result = self.run(argv, cwd=cwd, capture=capture)
        except OSError as exc:
            raise DeployStepError(step, f"Unable to run `{' '.join(str(a) for a in argv)}`: {exc}") from exc

        if not result.ok:
            raise DeployStepError(step, str(result), result=result)
        return result
