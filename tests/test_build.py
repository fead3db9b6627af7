import sys
from pathlib import Path

import pytest

from seqdeploy.core.models import BuildSettings
from seqdeploy.runtime.build import build_binaries, build_command
from seqdeploy.runtime.commands import CommandRunner
from seqdeploy.utils.diagnostics import DeployStepError
from conftest import FakeCommandRunner


def test_build_command_requests_both_release_binaries():
    assert build_command(BuildSettings()) == [
        "cargo", "build", "--release", "--bin", "sequencer_runner", "--bin", "wallet",
    ]


def test_build_runs_in_working_directory(tmp_path):
    runner = FakeCommandRunner()

    build_binaries(BuildSettings(), tmp_path, runner)

    assert runner.calls == [(build_command(BuildSettings()), tmp_path)]
    assert runner.captures == [False]


def test_build_profile_is_always_release():
    settings = BuildSettings(profile="dev")

    assert "--release" in build_command(settings)
    assert "--dev" not in build_command(settings)
    assert settings.target_dir == Path("target") / "release"


def test_build_failure_is_fatal(tmp_path):
    runner = FakeCommandRunner(fail_on=["build"])

    with pytest.raises(DeployStepError) as exc_info:
        build_binaries(BuildSettings(), tmp_path, runner)

    assert exc_info.value.step == "build"
    assert "exited with status 1" in exc_info.value.message


def test_command_runner_check_reports_exit_status(tmp_path):
    runner = CommandRunner()

    with pytest.raises(DeployStepError) as exc_info:
        runner.check("build", [sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(3)"], cwd=tmp_path)

    assert exc_info.value.result.returncode == 3
    assert exc_info.value.result.stderr == "nope"


def test_command_runner_check_wraps_missing_executable(tmp_path):
    with pytest.raises(DeployStepError) as exc_info:
        CommandRunner().check("build", [str(tmp_path / "no-such-cargo"), "build"])

    assert exc_info.value.step == "build"
    assert exc_info.value.result is None
    assert "Unable to run" in exc_info.value.message


def test_command_runner_captures_stdout(tmp_path):
    result = CommandRunner().check("build", [sys.executable, "-c", "print('built')"], cwd=tmp_path)

    assert result.ok
    assert result.stdout.strip() == "built"


def test_command_runner_passes_output_through_when_not_capturing(tmp_path, capfd):
    result = CommandRunner().check("build", [sys.executable, "-c", "print('Compiling wallet')"], cwd=tmp_path, capture=False)

    assert result.ok
    assert result.stdout == ""
    assert "Compiling wallet" in capfd.readouterr().out
