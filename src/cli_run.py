"""CLI entry points for composing and running Java launch commands.

``run`` locates the java executable, probes whether it predates the module
system, composes the argument vector and runs it. ``compose`` prints the
vector without running anything.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
import sys
from typing import Any, Dict, List, Mapping, Optional, Sequence

from cli_config import ConfigError, load_launch_settings
from common.logging_utils import Timer, add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from launch import compose_request
from runtime.java import JavaNotFoundError, is_legacy_runtime, locate_executable

logger = logging.getLogger(__name__)


class LaunchError(RuntimeError):
    """Raised when the java process cannot be started or its output captured."""


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    # Honor CLI --loglevel
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()

    configure_logging()

    level_name = str(getattr(args, "LOG_LEVEL", None) or "INFO").upper()
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def prepare_working_directory(path: Optional[str]) -> Optional[str]:
    """Create the working directory if it does not exist yet."""
    if not path:
        return None
    if not os.path.isdir(path):
        logger.info("Creating working directory: %s", path)
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise LaunchError(f"Could not create working directory {path}: {e}") from e
    return path


def build_environment(extra: Sequence[Sequence[str]] = ()) -> Dict[str, str]:
    """Return a copy of the current environment updated with configured variables."""
    env = os.environ.copy()
    env.update({key: value for key, value in extra})
    return env


def format_command_line(command: Sequence[str]) -> str:
    return subprocess.list2cmdline(list(command)) if os.name == "nt" else shlex.join(command)


def execute(
    command: List[str],
    working_directory: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    output_file: Optional[str] = None,
) -> int:
    """Run ``command`` and return its exit code.

    With ``output_file`` both stdout and stderr are written to that file;
    otherwise the child inherits the current streams.

    Raises:
        LaunchError: If the process cannot be started or the output file
            cannot be written.
    """
    if is_debug_enabled(logger):
        logger.debug("Executing command line: %s", format_command_line(command), extra=extra_context(
            event="function_entry", component="launcher", action="execute", count=len(command),
        ))

    with Timer() as t:
        try:
            if output_file:
                parent = os.path.dirname(os.path.abspath(output_file))
                if not os.path.isdir(parent):
                    try:
                        os.makedirs(parent, exist_ok=True)
                    except OSError:
                        logger.warning("Could not create non existing parent directories for log file: %s",
                                       output_file)
                with open(output_file, "wb") as out:
                    result = subprocess.run(  # noqa: S603
                        command, cwd=working_directory, env=env, stdout=out, stderr=subprocess.STDOUT,
                        check=False,
                    )
            else:
                result = subprocess.run(command, cwd=working_directory, env=env, check=False)  # noqa: S603
        except OSError as e:
            logger.error("Command execution failed: %s", e)
            raise LaunchError("Command execution failed.") from e

    if is_debug_enabled(logger):
        logger.debug("Command finished", extra=extra_context(
            event="function_exit", component="launcher", action="execute",
            outcome="success" if result.returncode == 0 else "failure",
            status_code=result.returncode, duration_ms=t.duration_ms(),
        ))
    return result.returncode


def compose_command(args: Any) -> None:
    """Entry point for the compose mode: print the launch arguments.

    Args:
        args: Parsed CLI arguments namespace.
    """
    _setup_logging(args)
    try:
        settings = load_launch_settings(args)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    arguments = compose_request(settings.request, legacy=bool(getattr(args, "LEGACY", False)))
    if getattr(args, "JSON", False):
        print(json.dumps(arguments))
    else:
        for argument in arguments:
            print(argument)
    sys.exit(ExitCodes.SUCCESS.value)


def run_command(args: Any) -> None:
    """Entry point for the run mode.

    Args:
        args: Parsed CLI arguments namespace.
    """
    _setup_logging(args)

    try:
        settings = load_launch_settings(args)
        if settings.skip:
            logger.info("skipping execute as per configuration")
            sys.exit(ExitCodes.SUCCESS.value)
        if not settings.executable:
            raise ConfigError("The parameter 'executable' is missing or invalid")
        if not settings.request.main_class:
            raise ConfigError("The parameter 'main_class' is missing")
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    env = build_environment(settings.environment)
    try:
        executable = locate_executable(settings.executable, env)
    except JavaNotFoundError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    legacy = is_legacy_runtime(executable)
    if legacy:
        logger.info("Target runtime predates the module system; using classpath only")

    command = [executable] + compose_request(settings.request, legacy=legacy)
    logger.info("Running: %s", settings.request.main_class)

    exit_code = ExitCodes.EXECUTION_ERROR.value
    try:
        working_directory = prepare_working_directory(settings.working_directory)
        exit_code = execute(command, working_directory, env, settings.output_file)
        if exit_code != 0:
            logger.error("Result of %s execution is: '%d'.", format_command_line(command), exit_code)
    except LaunchError as e:
        logger.error("%s", e)
        exit_code = ExitCodes.EXECUTION_ERROR.value
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = ExitCodes.INTERRUPTED.value

    sys.exit(exit_code)
