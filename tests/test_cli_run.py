"""Tests for cli_run: the compose and run entry points."""

import json
import os
import subprocess
import sys
import textwrap
from unittest.mock import MagicMock, patch

import pytest

from args import parse_args
from cli_run import (
    LaunchError,
    build_environment,
    compose_command,
    execute,
    format_command_line,
    prepare_working_directory,
    run_command,
)
from constants import ExitCodes
from runtime.java import JavaNotFoundError

SEP = os.pathsep


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep tests away from any fxrun.yml or FXRUN_CONFIG on the host."""
    monkeypatch.delenv("FXRUN_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


def _config(tmp_path, text):
    path = tmp_path / "launch.yml"
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


class TestRunArgParsing:
    """Tests for 'fxrun' CLI argument parsing."""

    def test_run_defaults(self):
        ns = parse_args(["run"])
        assert ns.action == "run"
        assert ns.LOG_LEVEL == "INFO"
        assert ns.OPTIONS == []
        assert ns.SKIP is False

    def test_compose_flags(self):
        ns = parse_args(["compose", "--legacy", "--json", "-m", "app.Main"])
        assert ns.action == "compose"
        assert ns.LEGACY is True
        assert ns.JSON is True
        assert ns.MAIN_CLASS == "app.Main"

    def test_repeatable_entries(self):
        ns = parse_args(["compose", "--classpath", "a.jar", "--classpath", "b.jar",
                         "--option=-Xmx1g", "--option=-Da=b"])
        assert ns.CLASSPATH == ["a.jar", "b.jar"]
        assert ns.OPTIONS == ["-Xmx1g", "-Da=b"]

    def test_runtime_path_option_choices(self):
        assert parse_args(["run", "--runtime-path-option", "MODULEPATH"]).RUNTIME_PATH_OPTION == "modulepath"
        with pytest.raises(SystemExit):
            parse_args(["run", "--runtime-path-option", "both"])

    def test_no_action_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])
        assert exc_info.value.code == 2


class TestComposeCommand:
    """Tests for compose_command output."""

    def test_prints_one_argument_per_line(self, tmp_path, capsys):
        path = _config(tmp_path, """\
            main_class: Main
            runtime_path_option: classpath
            options: ["-Dfoo=bar"]
            classpath: [x.jar]
            commandline_args: --flag value
        """)
        with pytest.raises(SystemExit) as exc_info:
            compose_command(parse_args(["compose", "-c", path, "--loglevel", "ERROR"]))
        assert exc_info.value.code == ExitCodes.SUCCESS.value
        assert capsys.readouterr().out.splitlines() == ["-Dfoo=bar", "-classpath", "x.jar", "Main", "--flag", "value"]

    def test_json_output_with_legacy(self, tmp_path, capsys):
        path = _config(tmp_path, """\
            main_class: app.Main
            output_directory: target/classes
            modulepath:
              - path: fx.jar
                module: javafx.controls
            classpath: [util.jar]
        """)
        with pytest.raises(SystemExit):
            compose_command(parse_args(["compose", "-c", path, "--legacy", "--json", "--loglevel", "ERROR"]))
        assert json.loads(capsys.readouterr().out) == [
            "-classpath", f"target/classes{SEP}util.jar", "app.Main",
        ]

    def test_invalid_config_exits(self, tmp_path):
        path = _config(tmp_path, "unknown_key: 1\n")
        with pytest.raises(SystemExit) as exc_info:
            compose_command(parse_args(["compose", "-c", path, "--loglevel", "CRITICAL"]))
        assert exc_info.value.code == ExitCodes.CONFIG_ERROR.value


class TestExecute:
    """Tests for execute()."""

    def test_returns_exit_code(self):
        with patch("cli_run.subprocess.run", return_value=MagicMock(returncode=3)) as mock_run:
            assert execute(["java", "Main"], "wd", {"A": "1"}) == 3
        mock_run.assert_called_once_with(["java", "Main"], cwd="wd", env={"A": "1"}, check=False)

    def test_output_file_captures_streams(self, tmp_path):
        output_file = tmp_path / "logs" / "nested" / "run.log"
        command = [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"]
        assert execute(command, output_file=str(output_file)) == 0
        content = output_file.read_text()
        assert "out" in content
        assert "err" in content

    def test_spawn_failure_raises(self):
        with patch("cli_run.subprocess.run", side_effect=FileNotFoundError("no java")):
            with pytest.raises(LaunchError):
                execute(["missing-java"])


def test_prepare_working_directory_creates(tmp_path):
    target = tmp_path / "a" / "b"
    assert prepare_working_directory(str(target)) == str(target)
    assert target.is_dir()
    assert prepare_working_directory(None) is None


def test_build_environment_overlays(monkeypatch):
    monkeypatch.setenv("FXRUN_TEST_BASE", "base")
    env = build_environment((("FXRUN_TEST_EXTRA", "x"),))
    assert env["FXRUN_TEST_BASE"] == "base"
    assert env["FXRUN_TEST_EXTRA"] == "x"
    assert "FXRUN_TEST_EXTRA" not in os.environ


class TestRunCommand:
    """Tests for run_command orchestration."""

    def _run(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            run_command(parse_args(argv))
        return exc_info.value.code

    @patch("cli_run.execute", return_value=0)
    @patch("cli_run.is_legacy_runtime", return_value=False)
    @patch("cli_run.locate_executable", return_value="/jdk/bin/java")
    def test_successful_run(self, mock_locate, mock_legacy, mock_execute, tmp_path):
        path = _config(tmp_path, """\
            main_class: app.Main
            modulepath:
              - path: fx.jar
                module: javafx.graphics
            environment: {PRISM_ORDER: sw}
            working_directory: workdir
        """)
        code = self._run(["run", "-c", path, "--args", "a b", "--loglevel", "ERROR"])
        assert code == 0
        command, working_directory, env, output_file = mock_execute.call_args[0]
        assert command == ["/jdk/bin/java", "--module-path", "fx.jar", "--add-modules", "javafx.graphics",
                           "app.Main", "a", "b"]
        assert working_directory == "workdir"
        assert env["PRISM_ORDER"] == "sw"
        assert output_file is None
        assert (tmp_path / "workdir").is_dir()
        mock_legacy.assert_called_once_with("/jdk/bin/java")

    @patch("cli_run.execute", return_value=0)
    @patch("cli_run.is_legacy_runtime", return_value=True)
    @patch("cli_run.locate_executable", return_value="/jdk8/bin/java")
    def test_legacy_runtime_uses_classpath(self, mock_locate, mock_legacy, mock_execute, tmp_path):
        path = _config(tmp_path, """\
            main_class: app.Main
            output_directory: out
            modulepath: [fx.jar]
        """)
        assert self._run(["run", "-c", path, "--loglevel", "ERROR"]) == 0
        command = mock_execute.call_args[0][0]
        assert command == ["/jdk8/bin/java", "-classpath", f"out{SEP}", "app.Main"]

    @patch("cli_run.execute", return_value=1)
    @patch("cli_run.is_legacy_runtime", return_value=False)
    @patch("cli_run.locate_executable", return_value="java")
    def test_nonzero_exit_propagates(self, mock_locate, mock_legacy, mock_execute, caplog):
        code = self._run(["run", "-m", "app.Main", "--loglevel", "ERROR"])
        assert code == 1
        assert "execution is: '1'" in caplog.text

    @patch("cli_run.execute", side_effect=LaunchError("Command execution failed."))
    @patch("cli_run.is_legacy_runtime", return_value=False)
    @patch("cli_run.locate_executable", return_value="java")
    def test_launch_error_exit_code(self, mock_locate, mock_legacy, mock_execute):
        assert self._run(["run", "-m", "app.Main", "--loglevel", "CRITICAL"]) == ExitCodes.EXECUTION_ERROR.value

    @patch("cli_run.execute", side_effect=KeyboardInterrupt)
    @patch("cli_run.is_legacy_runtime", return_value=False)
    @patch("cli_run.locate_executable", return_value="java")
    def test_interrupt_exit_code(self, mock_locate, mock_legacy, mock_execute):
        assert self._run(["run", "-m", "app.Main", "--loglevel", "CRITICAL"]) == 130

    @patch("cli_run.locate_executable")
    def test_skip(self, mock_locate):
        assert self._run(["run", "--skip", "-m", "app.Main", "--loglevel", "ERROR"]) == 0
        mock_locate.assert_not_called()

    @patch("cli_run.locate_executable")
    def test_missing_main_class(self, mock_locate):
        assert self._run(["run", "--loglevel", "CRITICAL"]) == ExitCodes.CONFIG_ERROR.value
        mock_locate.assert_not_called()

    @patch("cli_run.locate_executable", side_effect=JavaNotFoundError("nope"))
    def test_java_not_found(self, mock_locate):
        assert self._run(["run", "-m", "app.Main", "--loglevel", "CRITICAL"]) == ExitCodes.FILE_ERROR.value


def test_execute_real_exit_code():
    assert execute([sys.executable, "-c", "raise SystemExit(4)"]) == 4


def test_format_command_line():
    if os.name == "nt":
        assert format_command_line(["a b", "c"]) == subprocess.list2cmdline(["a b", "c"])
    else:
        assert format_command_line(["a", "b"]) == "a b"
        assert format_command_line(["java", "-Dname=A B", "it's"]) == "java '-Dname=A B' 'it'\"'\"'s'"
