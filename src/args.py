"""Argument parsing functionality for fxrun."""

import argparse

from constants import Constants
from launch.models import PathMode


def _add_common_arguments(parser):
    """Options shared by every subcommand."""
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to launch configuration file (YAML or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--executable",
                        dest="EXECUTABLE",
                        help="Java executable, either a path or a name found on PATH",
                        action="store",
                        type=str)
    parser.add_argument("-m", "--main-class",
                        dest="MAIN_CLASS",
                        help="Main class to launch",
                        action="store",
                        type=str)
    parser.add_argument("--module",
                        dest="MODULE",
                        help="Name of the application module",
                        action="store",
                        type=str)
    parser.add_argument("--runtime-path-option",
                        dest="RUNTIME_PATH_OPTION",
                        help="Force classpath or modulepath launch semantics",
                        action="store",
                        type=str.lower,
                        choices=[mode.value for mode in PathMode])
    parser.add_argument("-O", "--option",
                        dest="OPTIONS",
                        help="JVM option string, tokenized like the config 'options' entries (repeatable)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--args",
                        dest="COMMANDLINE_ARGS",
                        help="Arguments passed to the application's main method",
                        action="store",
                        type=str)
    parser.add_argument("--output-directory",
                        dest="OUTPUT_DIRECTORY",
                        help="Build output directory for classpath launches",
                        action="store",
                        type=str)
    parser.add_argument("--classpath",
                        dest="CLASSPATH",
                        help="Classpath entry (repeatable)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--modulepath",
                        dest="MODULEPATH",
                        help="Module path entry (repeatable)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default="INFO")
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="fxrun",
        description="fxrun - compose and run Java/JavaFX launch commands",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action")

    run_parser = subparsers.add_parser("run", help="Compose the launch command and run it")
    _add_common_arguments(run_parser)
    run_parser.add_argument("--working-directory",
                            dest="WORKING_DIRECTORY",
                            help="Directory the application runs in (created if missing)",
                            action="store",
                            type=str)
    run_parser.add_argument("--output-file",
                            dest="OUTPUT_FILE",
                            help="Redirect the application's stdout and stderr to this file",
                            action="store",
                            type=str)
    run_parser.add_argument("--skip",
                            dest="SKIP",
                            help="Skip execution",
                            action="store_true")

    compose_parser = subparsers.add_parser("compose", help="Print the launch arguments without running them")
    _add_common_arguments(compose_parser)
    compose_parser.add_argument("--legacy",
                                dest="LEGACY",
                                help="Compose for a runtime without module system support",
                                action="store_true")
    compose_parser.add_argument("--json",
                                dest="JSON",
                                help="Print the arguments as a JSON array",
                                action="store_true")

    args = parser.parse_args(argv)
    if args.action is None:
        parser.print_help()
        parser.exit(2)
    return args
