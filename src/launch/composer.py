"""Composition of the Java launch argument vector.

Clauses are emitted in a fixed order:

1. user options, each tokenized
2. ``--module-path <entries> --add-modules <modules>``
3. ``-classpath <entries>``, optionally prefixed by the build output directory
4. the main class, as ``--module <module>/<class>`` for modular launches
5. the trailing command line arguments, tokenized
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from .models import ArgumentVector, LaunchRequest, MainClassSpec, PathDecision
from .modules import resolve_add_modules
from .path_mode import resolve_path_mode
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

MODULE_PATH_FLAG = "--module-path"
ADD_MODULES_FLAG = "--add-modules"
CLASSPATH_FLAG = "-classpath"
MODULE_FLAG = "--module"


def join_paths(entries: Iterable[str]) -> str:
    return os.pathsep.join(entries)


def build_classpath(
    entries: Sequence[str],
    output_directory: Optional[str],
    prefix_output_directory: bool,
) -> str:
    """Join classpath entries, leading with the output directory when asked."""
    classpath = ""
    if prefix_output_directory and output_directory:
        classpath = output_directory + os.pathsep
    return classpath + join_paths(entries)


def main_class_arguments(main_class: MainClassSpec) -> List[str]:
    """Invocation clause for the main class.

    A class bound to a module launches as ``--module module/Class``; a class
    name that already names its module is passed through unchanged.
    """
    if main_class.module is None:
        return [main_class.class_name]
    if "/" in main_class.class_name:
        return [MODULE_FLAG, main_class.class_name]
    return [MODULE_FLAG, f"{main_class.module.name}/{main_class.class_name}"]


def compose(
    options: Iterable[Optional[str]],
    decision: PathDecision,
    add_modules: Optional[str],
    classpath: Sequence[str],
    modulepath: Sequence[str],
    output_directory: Optional[str],
    main_class: Optional[MainClassSpec],
    trailing_args: Optional[str],
) -> ArgumentVector:
    """Build the ordered argument vector for a Java launch.

    No escaping is applied; the result is handed to the process launcher
    as-is.
    """
    arguments: ArgumentVector = []

    for option in options:
        if option is not None:
            arguments.extend(tokenize(option))

    if decision.use_module_path:
        arguments.extend([
            MODULE_PATH_FLAG, join_paths(modulepath),
            ADD_MODULES_FLAG, add_modules or "",
        ])

    if decision.use_classpath:
        arguments.extend([
            CLASSPATH_FLAG,
            build_classpath(classpath, output_directory, decision.prefix_output_directory),
        ])

    if main_class is not None:
        arguments.extend(main_class_arguments(main_class))

    arguments.extend(tokenize(trailing_args))
    return arguments


def compose_request(request: LaunchRequest, legacy: bool) -> ArgumentVector:
    """Resolve path mode and module set for ``request`` and compose the vector."""
    decision = resolve_path_mode(
        legacy=legacy,
        preference=request.runtime_path_option,
        modulepath_non_empty=bool(request.modulepath),
        classpath_non_empty=bool(request.classpath),
    )
    add_modules = None
    if decision.use_module_path:
        add_modules = resolve_add_modules(request.module_descriptor, request.path_elements)
        if not add_modules:
            logger.warning("No modules resolved for %s; passing an empty value", ADD_MODULES_FLAG)

    arguments = compose(
        options=request.options,
        decision=decision,
        add_modules=add_modules,
        classpath=request.classpath,
        modulepath=request.modulepath,
        output_directory=request.output_directory,
        main_class=request.main_class_spec,
        trailing_args=request.commandline_args,
    )
    if is_debug_enabled(logger):
        logger.debug("Composed launch arguments", extra=extra_context(
            event="function_exit", component="composer", action="compose_request",
            outcome="success", count=len(arguments),
        ))
    return arguments
