"""Java runtime discovery and version probing.

Locates the ``java`` executable and decides whether it predates the module
system, in which case launches fall back to classpath-only arguments.
"""
from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
from typing import Mapping, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)

# Matches "1.8.0_292", "17.0.2", "21", "9-ea" inside quotes or after JAVA_VERSION=
_VERSION_RE = re.compile(r'(?:version|JAVA_VERSION=)\s*"?(\d+)(?:\.(\d+))?')


class JavaNotFoundError(FileNotFoundError):
    """Raised when the configured java executable cannot be located."""


def locate_executable(executable: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Resolve ``executable`` to a path.

    Args:
        executable: A path or a bare command name such as "java".
        env: Environment used for PATH and JAVA_HOME lookups (defaults to os.environ).

    Returns:
        Path to the executable.

    Raises:
        JavaNotFoundError: If nothing matching can be found.
    """
    env = os.environ if env is None else env
    if os.path.isfile(executable):
        return executable

    found = shutil.which(executable, path=env.get("PATH"))
    if found:
        return found

    java_home_dir = env.get(Constants.ENV_JAVA_HOME)
    if java_home_dir:
        found = shutil.which(executable, path=os.path.join(java_home_dir, "bin"))
        if found:
            return found

    raise JavaNotFoundError(f"Executable '{executable}' not found on PATH or in JAVA_HOME")


def java_home(executable_path: str) -> str:
    """Return the installation root two levels above ``bin/java``."""
    return os.path.dirname(os.path.dirname(os.path.abspath(executable_path)))


def parse_java_version(text: Optional[str]) -> Optional[int]:
    """Extract the major version from ``java -version`` or release file text."""
    if not text:
        return None
    match = _VERSION_RE.search(text)
    if match is None:
        return None
    major = int(match.group(1))
    if major == 1 and match.group(2) is not None:
        # Pre-9 scheme: 1.8 means Java 8
        return int(match.group(2))
    return major


def _read_release_file(home: str) -> Optional[str]:
    release = os.path.join(home, Constants.RELEASE_FILE)
    if not os.path.isfile(release):
        return None
    try:
        with open(release, encoding="utf-8") as fh:
            return fh.read()
    except OSError as exc:
        logger.debug("Could not read %s: %s", release, exc)
        return None


def _run_version_probe(executable_path: str) -> Optional[str]:
    try:
        result = subprocess.run(  # noqa: S603
            [executable_path, "-version"],
            capture_output=True,
            text=True,
            timeout=Constants.VERSION_PROBE_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("Failed to probe java version with %s: %s", executable_path, exc)
        return None
    # java prints its version banner on stderr
    return (result.stderr or "") + (result.stdout or "")


def detect_java_version(executable_path: str) -> Optional[int]:
    """Major version of the runtime behind ``executable_path``, if known."""
    version = parse_java_version(_read_release_file(java_home(executable_path)))
    source = "release_file"
    if version is None:
        version = parse_java_version(_run_version_probe(executable_path))
        source = "version_probe"

    if is_debug_enabled(logger):
        logger.debug("Detected java version", extra=extra_context(
            event="decision", component="runtime", action="detect_java_version",
            outcome="unknown" if version is None else "found",
            source=source, java_version=version,
        ))
    return version


def is_legacy_runtime(executable_path: str) -> bool:
    """True when the runtime predates the module system.

    An unknown version is treated as module-capable.
    """
    version = detect_java_version(executable_path)
    if version is None:
        logger.warning("Could not determine java version for %s; assuming a modular runtime",
                       executable_path)
        return False
    return version < Constants.FIRST_MODULAR_JAVA
