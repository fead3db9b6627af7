from typing import List, Optional
from pydantic import BaseModel

class CommandResult(BaseModel):
    """
    Outcome of one external command invocation (git, cargo, wallet).
    """
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def command_line(self) -> str:
        return " ".join(self.argv)

    def __str__(self) -> str:
        return f"`{self.command_line()}` exited with status {self.returncode}"

class DeployStepError(Exception):
    """
    Fatal failure of a deploy step. Every instance routes to the single
    failure sink in the orchestrator.
    """
    def __init__(self, step: str, message: str, result: Optional[CommandResult] = None):
        self.step = step
        self.message = message
        self.result = result
        super().__init__(f"Deploy step '{step}' failed: {message}")

class HealthCheckFailed(DeployStepError):
    """
    The health-check client reported the freshly launched service as unhealthy.
    """
    def __init__(self, message: str, result: Optional[CommandResult] = None):
        super().__init__("health", message, result=result)

class ConfigurationError(Exception):
    """
    Raised when seqdeploy.yaml cannot be parsed or fails validation.
    """
    def __init__(self, message: str, path: str = None):
        self.message = message
        self.path = path
        loc = f" in '{path}'" if path else ""
        super().__init__(f"Configuration Error{loc}: {message}")
