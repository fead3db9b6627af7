from enum import Enum
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ROOT = Path("/opt/lssa")
DEFAULT_REMOTE_URL = "https://github.com/vacp2p/nescience-testnet.git"
RELEASE_PROFILE = "release"


class FrameworkSettings(BaseSettings):
    """
    Tool-level settings (the 'seqdeploy' section in seqdeploy.yaml).
    """
    model_config = SettingsConfigDict(env_prefix='SEQDEPLOY_', extra='ignore')

    env: str = "production"


class DeployPaths(BaseModel):
    """
    Filesystem layout of a deployment host (the 'paths' section).

    Everything hangs off a single root; the four derived locations are fixed.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    root: Path = DEFAULT_ROOT

    @property
    def code_dir(self) -> Path:
        return self.root / "code"

    @property
    def deploy_log(self) -> Path:
        return self.root / "deploy.log"

    @property
    def service_config(self) -> Path:
        return self.root / "configs" / "sequencer"

    @property
    def runtime_log(self) -> Path:
        return self.root / "sequencer.log"


class RepositorySettings(BaseModel):
    """
    Source checkout settings (the 'repository' section).
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    url: str = DEFAULT_REMOTE_URL
    remote: str = "origin"
    branch: str = "main"

    @property
    def tracking_ref(self) -> str:
        return f"{self.remote}/{self.branch}"


class BuildSettings(BaseModel):
    """
    Toolchain invocation settings (the 'build' section).
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    tool: str = "cargo"
    binaries: List[str] = Field(default_factory=lambda: ["sequencer_runner", "wallet"], min_length=1)

    @property
    def target_dir(self) -> Path:
        return Path("target") / RELEASE_PROFILE


class ServiceSettings(BaseModel):
    """
    Runtime service settings (the 'service' section).
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    runner: str = "sequencer_runner"
    client: str = "wallet"
    health_args: List[str] = Field(default_factory=lambda: ["command", "check-health"])
    tail_lines: int = Field(default=50, ge=1)


class DeployOutcome(str, Enum):
    """Final classification of a deploy run."""

    SUCCESS = "success"
    FAILED = "failed"


class DeployResult(BaseModel):
    """Summary of one deploy run, returned by the orchestrator."""

    actor: str
    outcome: DeployOutcome
    failed_step: Optional[str] = None
    message: Optional[str] = None
    runner_pid: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.outcome == DeployOutcome.SUCCESS

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class StopResult(BaseModel):
    """Signals sent while stopping a prior service instance."""

    interrupted: List[int] = Field(default_factory=list)
    killed: List[int] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.interrupted)
