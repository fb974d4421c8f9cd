"""Data models for launch command composition."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class PathMode(Enum):
    """Enum for the runtime path strategy requested by the user."""
    CLASSPATH = "classpath"
    MODULEPATH = "modulepath"


@dataclass(frozen=True)
class ModuleDescriptor:
    """Module identity; only ``name`` takes part in composition."""
    name: str
    requires: Tuple[str, ...] = ()
    exports: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PathElement:
    """A resolved classpath/modulepath entry and its module, if it has one."""
    path: str
    descriptor: Optional[ModuleDescriptor] = None

    @property
    def module_name(self) -> Optional[str]:
        return self.descriptor.name if self.descriptor is not None else None


@dataclass(frozen=True)
class MainClassSpec:
    """Main class to launch, optionally bound to a named module."""
    class_name: str
    module: Optional[ModuleDescriptor] = None


@dataclass(frozen=True)
class PathDecision:
    """Which path clauses a launch emits."""
    use_module_path: bool
    use_classpath: bool
    prefix_output_directory: bool


@dataclass(frozen=True)
class LaunchRequest:
    """Every caller-supplied fact needed to compose one launch command."""
    options: Tuple[str, ...] = ()
    classpath: Tuple[str, ...] = ()
    modulepath: Tuple[str, ...] = ()
    path_elements: Tuple[PathElement, ...] = ()
    module_descriptor: Optional[ModuleDescriptor] = None
    main_class: Optional[str] = None
    commandline_args: Optional[str] = None
    output_directory: Optional[str] = None
    runtime_path_option: Optional[PathMode] = None

    @property
    def main_class_spec(self) -> Optional[MainClassSpec]:
        if self.main_class is None:
            return None
        return MainClassSpec(class_name=self.main_class, module=self.module_descriptor)


# Final argument vector handed to the process launcher.
ArgumentVector = List[str]


@dataclass(frozen=True)
class LaunchSettings:
    """Launcher-side settings that surround a LaunchRequest."""
    request: LaunchRequest
    executable: str = "java"
    working_directory: Optional[str] = None
    output_file: Optional[str] = None
    environment: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    skip: bool = False
