"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    EXECUTION_ERROR = 3
    INTERRUPTED = 130


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Module names contributed by the platform dependencies start with this prefix.
    JAVAFX_PREFIX = "javafx"
    # Placeholder jars that only carry an Automatic-Module-Name end with this suffix.
    EMPTY_MODULE_SUFFIX = "Empty"

    DEFAULT_EXECUTABLE = "java"
    DEFAULT_CONFIG_FILE = "fxrun.yml"
    CONFIG_SECTION = "fxrun"
    ENV_CONFIG = "FXRUN_CONFIG"
    ENV_LOG_LEVEL = "FXRUN_LOG_LEVEL"
    ENV_JAVA_HOME = "JAVA_HOME"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    FIRST_MODULAR_JAVA = 9
    VERSION_PROBE_TIMEOUT = 10  # seconds
    RELEASE_FILE = "release"
