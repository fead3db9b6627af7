import json

from seqdeploy.cli.formatter import OutputFormatter
from seqdeploy.core.models import DeployOutcome, DeployResult


def test_log_prefixes_by_severity(capsys):
    OutputFormatter.log("Stopping current sequencer_runner...", severity="info")
    OutputFormatter.log("Sequencer started successfully and is healthy", severity="success")
    OutputFormatter.log("Deployment failed by: alice", severity="error")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[DEPLOY] Stopping current sequencer_runner..." in captured.err
    assert "✓ Sequencer started successfully and is healthy" in captured.err
    assert "✗ Deployment failed by: alice" in captured.err


def test_log_does_not_interpret_brackets_as_markup(capsys):
    OutputFormatter.log("Interrupted sequencer_runner pids: [bold]", severity="info")

    assert "pids: [bold]" in capsys.readouterr().err


def test_result_table_includes_expected_columns(capsys):
    result = DeployResult(actor="alice", outcome=DeployOutcome.FAILED, failed_step="build", message="boom")

    OutputFormatter.print_result(result)

    err = capsys.readouterr().err
    assert "Deploy Summary" in err
    assert "Failed Step" in err
    assert "FAILED" in err
    assert "build" in err


def test_result_table_title_names_environment(capsys):
    result = DeployResult(actor="alice", outcome=DeployOutcome.SUCCESS, runner_pid=4242)

    OutputFormatter.print_result(result, env="testnet")

    assert "Deploy Summary (testnet)" in capsys.readouterr().err


def test_print_data_emits_json_to_stdout(capsys):
    OutputFormatter.print_data({"service": "sequencer_runner", "pids": [1, 2]})

    assert json.loads(capsys.readouterr().out) == {"service": "sequencer_runner", "pids": [1, 2]}


def test_print_lines_emits_raw_lines(capsys):
    OutputFormatter.print_lines(["[2026-10-19 12:00:00 UTC] Deployment initiated by: alice"])

    assert capsys.readouterr().out == "[2026-10-19 12:00:00 UTC] Deployment initiated by: alice\n"
