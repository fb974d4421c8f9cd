"""Launch configuration loading and CLI overrides.

Reads the YAML configuration file, validates it against a JSON schema and
folds CLI overrides on top (CLI has the highest precedence) to produce an
immutable LaunchSettings value.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml
from jsonschema import Draft7Validator

from constants import Constants
from launch.models import LaunchRequest, LaunchSettings, ModuleDescriptor, PathElement, PathMode

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the launch configuration is missing or invalid."""


_STRING_LIST = {"type": "array", "items": {"type": "string"}}

_MODULE_SCHEMA = {
    "oneOf": [
        {"type": "string", "minLength": 1},
        {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "requires": _STRING_LIST,
                "exports": _STRING_LIST,
            },
            "additionalProperties": False,
        },
    ]
}

_PATH_ENTRY_SCHEMA = {
    "oneOf": [
        {"type": "string", "minLength": 1},
        {
            "type": "object",
            "required": ["path"],
            "properties": {
                "path": {"type": "string", "minLength": 1},
                "module": {"oneOf": [_MODULE_SCHEMA, {"type": "null"}]},
            },
            "additionalProperties": False,
        },
    ]
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "executable": {"type": "string", "minLength": 1},
        "main_class": {"type": "string", "minLength": 1},
        "module": _MODULE_SCHEMA,
        "runtime_path_option": {
            "type": "string",
            "pattern": "(?i)^(" + "|".join(mode.value for mode in PathMode) + ")$",
        },
        "options": {"type": "array", "items": {"type": ["string", "null"]}},
        "commandline_args": {"type": ["string", "null"]},
        "output_directory": {"type": "string"},
        "classpath": {"type": "array", "items": _PATH_ENTRY_SCHEMA},
        "modulepath": {"type": "array", "items": _PATH_ENTRY_SCHEMA},
        "working_directory": {"type": "string"},
        "output_file": {"type": "string"},
        "environment": {"type": "object", "additionalProperties": {"type": ["string", "number", "boolean"]}},
        "skip": {"type": "boolean"},
    },
    "additionalProperties": False,
}


def validate_config(data: Dict[str, Any]) -> None:
    """Validate config data strictly and raise on the first error."""
    validator = Draft7Validator(CONFIG_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise ConfigError(f"Invalid configuration at '{path}': {first.message}")


def default_config_path() -> Optional[str]:
    """Config file to use when none was given on the command line."""
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        return env_path
    if os.path.isfile(Constants.DEFAULT_CONFIG_FILE):
        return Constants.DEFAULT_CONFIG_FILE
    return None


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load and validate the launch configuration file.

    Args:
        config_path: Path to a YAML (or JSON) config file, or None.

    Returns:
        Configuration dict; empty when no path was given.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")

    # Extract fxrun section if present
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{Constants.CONFIG_SECTION}' in {config_path} must be a mapping")

    validate_config(section)
    logger.debug("Loaded config from %s", config_path)
    return section


def parse_module(value: Any) -> Optional[ModuleDescriptor]:
    """Build a ModuleDescriptor from a bare name or a {name, requires, exports} mapping."""
    if value is None:
        return None
    if isinstance(value, str):
        return ModuleDescriptor(name=value)
    return ModuleDescriptor(
        name=value["name"],
        requires=tuple(value.get("requires") or ()),
        exports=tuple(value.get("exports") or ()),
    )


def parse_path_entry(value: Any) -> PathElement:
    if isinstance(value, str):
        return PathElement(path=value)
    return PathElement(path=value["path"], descriptor=parse_module(value.get("module")))


def _parse_path_mode(value: Optional[str]) -> Optional[PathMode]:
    if value is None:
        return None
    try:
        return PathMode(str(value).lower())
    except ValueError as e:
        raise ConfigError(f"Unknown runtime path option: {value}") from e


def _paths(elements: Iterable[PathElement]) -> Tuple[str, ...]:
    return tuple(element.path for element in elements)


def _override(args: Any, attr: str, current: Any) -> Any:
    value = getattr(args, attr, None)
    return current if value is None else value


def build_launch_settings(data: Dict[str, Any], args: Any = None) -> LaunchSettings:
    """Merge config ``data`` with CLI ``args`` overrides into LaunchSettings.

    Scalar CLI values replace file values; repeatable CLI values (options,
    classpath and modulepath entries) are appended after the file's entries.
    """
    options: List[Optional[str]] = list(data.get("options") or [])
    options.extend(getattr(args, "OPTIONS", None) or [])

    classpath = [parse_path_entry(entry) for entry in data.get("classpath") or []]
    classpath.extend(PathElement(path=p) for p in getattr(args, "CLASSPATH", None) or [])
    modulepath = [parse_path_entry(entry) for entry in data.get("modulepath") or []]
    modulepath.extend(PathElement(path=p) for p in getattr(args, "MODULEPATH", None) or [])

    module = parse_module(data.get("module"))
    cli_module = getattr(args, "MODULE", None)
    if cli_module:
        module = ModuleDescriptor(name=cli_module)

    request = LaunchRequest(
        options=tuple(o for o in options if o is not None),
        classpath=_paths(classpath),
        modulepath=_paths(modulepath),
        path_elements=tuple(modulepath) + tuple(classpath),
        module_descriptor=module,
        main_class=_override(args, "MAIN_CLASS", data.get("main_class")),
        commandline_args=_override(args, "COMMANDLINE_ARGS", data.get("commandline_args")),
        output_directory=_override(args, "OUTPUT_DIRECTORY", data.get("output_directory")),
        runtime_path_option=_parse_path_mode(
            _override(args, "RUNTIME_PATH_OPTION", data.get("runtime_path_option"))
        ),
    )

    environment = data.get("environment") or {}
    return LaunchSettings(
        request=request,
        executable=_override(args, "EXECUTABLE", data.get("executable", Constants.DEFAULT_EXECUTABLE)),
        working_directory=_override(args, "WORKING_DIRECTORY", data.get("working_directory")),
        output_file=_override(args, "OUTPUT_FILE", data.get("output_file")),
        environment=tuple((str(k), str(v)) for k, v in environment.items()),
        skip=bool(getattr(args, "SKIP", False) or data.get("skip", False)),
    )


def load_launch_settings(args: Any) -> LaunchSettings:
    """Load the config named by ``args`` (or the default one) and apply overrides."""
    config_path = getattr(args, "CONFIG", None) or default_config_path()
    data = load_config(config_path)
    if config_path:
        logger.info("Loaded launch config from: %s", config_path)
    return build_launch_settings(data, args)
