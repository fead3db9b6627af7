import typer
from pathlib import Path
from typing import Optional

from seqdeploy.cli.formatter import OutputFormatter
from seqdeploy.config.loader import load_config
from seqdeploy.core.context import DeployContext
from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.runtime.deploy_log import tail_lines
from seqdeploy.runtime.orchestrator import ACTOR_ENV_VAR, DeployOrchestrator, resolve_actor
from seqdeploy.runtime.process import find_matching_processes
from seqdeploy.runtime.service import HealthChecker
from seqdeploy.utils.diagnostics import ConfigurationError

app = typer.Typer(name="seqdeploy", help="Sequencer deploy CLI", rich_markup_mode=None, no_args_is_help=True)

CONFIG_EXIT_CODE = 2


def _default_config_path() -> Path:
    return Path.cwd() / "seqdeploy.yaml"


def _load_context(config: Optional[Path]) -> DeployContext:
    config_path = config if config is not None else _default_config_path()
    if config is not None and not config_path.exists():
        OutputFormatter.log(f"Config file '{config_path}' does not exist.", severity="error")
        raise typer.Exit(code=CONFIG_EXIT_CODE)

    try:
        return DeployContext.from_config(load_config(config_path), path=config_path)
    except ConfigurationError as exc:
        OutputFormatter.log(str(exc), severity="error")
        raise typer.Exit(code=CONFIG_EXIT_CODE)


@app.command()
def deploy(
    actor: Optional[str] = typer.Argument(
        None,
        help=f"Operator identity recorded in the deploy log. Falls back to ${ACTOR_ENV_VAR}, then 'unknown'.",
        show_default=False,
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to seqdeploy.yaml."),
):
    """
    Stop the running sequencer, rebuild it from the latest source, relaunch it and verify health.
    """
    resolved_actor = resolve_actor(actor)
    context = _load_context(config)

    orchestrator = DeployOrchestrator(
        context,
        notify=OutputFormatter.log,
        emit=typer.echo,
    )

    try:
        result = orchestrator.run(resolved_actor)
    except OSError as exc:
        OutputFormatter.log(f"Unable to write deploy log: {exc}", severity="critical")
        raise typer.Exit(code=1)

    OutputFormatter.print_result(result, env=context.settings.env)
    raise typer.Exit(code=result.exit_code)


@app.command()
def status(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to seqdeploy.yaml."),
):
    """
    Report running sequencer processes and the current health-check result.
    """
    context = _load_context(config)
    runner_name = context.service.runner

    pids = sorted(proc.pid for proc in find_matching_processes(runner_name))
    probe = HealthChecker(CommandRunner()).probe(
        context.client_binary,
        context.service.health_args,
        cwd=context.paths.code_dir,
    )

    OutputFormatter.print_data(
        {
            "env": context.settings.env,
            "service": runner_name,
            "pids": pids,
            "healthy": probe.ok,
            "health_check": {
                "command": probe.command_line(),
                "returncode": probe.returncode,
            },
        }
    )
    if not probe.ok:
        OutputFormatter.log(f"{runner_name} is not healthy: {probe}", severity="warning")
        raise typer.Exit(code=1)


@app.command()
def logs(
    lines: int = typer.Option(50, "--lines", "-n", min=1, help="Number of trailing lines to print."),
    runtime: bool = typer.Option(False, "--runtime", help="Show the service runtime log instead of the deploy log."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to seqdeploy.yaml."),
):
    """
    Print the tail of the deploy log, or of the sequencer runtime log.
    """
    context = _load_context(config)
    log_path = context.paths.runtime_log if runtime else context.paths.deploy_log

    if not log_path.exists():
        OutputFormatter.log(f"Log file '{log_path}' does not exist.", severity="warning")
        raise typer.Exit(code=1)

    OutputFormatter.print_lines(tail_lines(log_path, lines))


if __name__ == "__main__":
    app()
