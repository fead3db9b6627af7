import pytest
import sys
from pathlib import Path
from typing import List, Optional, Sequence

# Ensure src/ is in the python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from seqdeploy.core.context import DeployContext
from seqdeploy.core.models import DeployPaths, StopResult
from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.utils.diagnostics import CommandResult


class FakeCommandRunner(CommandRunner):
    """
    Records every command instead of executing it.
    Any command containing a token listed in `fail_on` exits with status 1.
    """

    def __init__(self, fail_on: Optional[Sequence[str]] = None, events: Optional[List[str]] = None):
        self.fail_on = set(fail_on or [])
        self.calls: List[tuple] = []
        self.captures: List[bool] = []
        self.events = events if events is not None else []

    def run(self, argv, cwd=None, capture=True) -> CommandResult:
        argv = [str(arg) for arg in argv]
        self.calls.append((argv, cwd))
        self.captures.append(capture)
        self.events.append(" ".join(Path(argv[0]).name.split() + argv[1:]))
        failed = any(token in self.fail_on for token in argv)
        return CommandResult(
            argv=argv,
            returncode=1 if failed else 0,
            stderr="boom" if failed else "",
        )

    def argvs(self) -> List[List[str]]:
        return [argv for argv, _ in self.calls]


class FakeStopper:
    """Stands in for ProcessStopper and records when it was asked to stop."""

    def __init__(self, events: Optional[List[str]] = None, result: Optional[StopResult] = None):
        self.events = events if events is not None else []
        self.result = result or StopResult()
        self.patterns: List[str] = []

    def stop(self, pattern: str) -> StopResult:
        self.patterns.append(pattern)
        self.events.append(f"stop {pattern}")
        return self.result


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def deploy_root(tmp_path):
    """
    Returns a temporary directory to act as the deployment root (normally /opt/lssa).
    """
    return tmp_path


@pytest.fixture
def deploy_context(deploy_root):
    return DeployContext(paths=DeployPaths(root=deploy_root))
