"""Deploy steps and the orchestrator that sequences them."""

from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.runtime.deploy_log import DeployLog, format_log_line, tail_lines
from seqdeploy.runtime.orchestrator import DeployOrchestrator, resolve_actor
from seqdeploy.runtime.process import GRACE_PERIOD_SECONDS, ProcessStopper, find_matching_processes
from seqdeploy.runtime.service import SETTLE_SECONDS, HealthChecker, LaunchedService, launch_detached
from seqdeploy.runtime.source import SourceSynchronizer, SyncMode, SyncResult

__all__ = [
	"CommandRunner",
	"DeployLog",
	"DeployOrchestrator",
	"GRACE_PERIOD_SECONDS",
	"HealthChecker",
	"LaunchedService",
	"ProcessStopper",
	"SETTLE_SECONDS",
	"SourceSynchronizer",
	"SyncMode",
	"SyncResult",
	"find_matching_processes",
	"format_log_line",
	"launch_detached",
	"resolve_actor",
	"tail_lines",
]
