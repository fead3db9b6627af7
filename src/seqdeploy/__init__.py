"""Restart, rebuild and health-check the sequencer service on a deployment host."""

from seqdeploy.core.context import DeployContext
from seqdeploy.core.models import DeployOutcome, DeployResult
from seqdeploy.runtime.orchestrator import DeployOrchestrator, resolve_actor

__version__ = "0.1.0"

__all__ = [
	"DeployContext",
	"DeployOrchestrator",
	"DeployOutcome",
	"DeployResult",
	"resolve_actor",
]
