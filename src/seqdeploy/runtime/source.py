from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List

from seqdeploy.core.models import RepositorySettings
from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.utils.diagnostics import CommandResult, DeployStepError

STEP_NAME = "sync"


class SyncMode(str, Enum):
    UPDATE = "update"
    CLONE = "clone"


@dataclass(frozen=True)
class SyncResult:
    """Which path the sync took and the git commands it ran."""

    mode: SyncMode
    commands: List[CommandResult]


def has_checkout(work_dir: Path) -> bool:
    return (work_dir / ".git").is_dir()


class SourceSynchronizer:
    """Brings the working directory to the tip of the configured remote branch."""

    def __init__(self, repository: RepositorySettings, runner: CommandRunner, git: str = "git") -> None:
        self.repository = repository
        self.runner = runner
        self.git = git

    def plan(self, work_dir: Path) -> SyncMode:
        return SyncMode.UPDATE if has_checkout(work_dir) else SyncMode.CLONE

    def update_commands(self) -> List[List[str]]:
        repo = self.repository
        return [
            [self.git, "fetch", repo.remote],
            [self.git, "checkout", repo.branch],
            [self.git, "reset", "--hard", repo.tracking_ref],
        ]

    def clone_commands(self) -> List[List[str]]:
        repo = self.repository
        return [
            [self.git, "clone", repo.url, "."],
            [self.git, "checkout", repo.branch],
        ]

    def sync(self, work_dir: Path) -> SyncResult:
        """
        Fetch and hard-reset an existing checkout, or clone a fresh one.

        Local modifications are discarded; untracked files are left in place.
        Git progress streams straight to the terminal. Any failing git command
        raises DeployStepError.
        """
        mode = self.plan(work_dir)
        if mode == SyncMode.CLONE:
            try:
                work_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DeployStepError(STEP_NAME, f"Unable to create working directory {work_dir}: {exc}") from exc
            commands = self.clone_commands()
        else:
            commands = self.update_commands()

        results = [self.runner.check(STEP_NAME, argv, cwd=work_dir, capture=False) for argv in commands]
        return SyncResult(mode=mode, commands=results)
