"""Selection between module-path and classpath launch clauses."""

import logging
from typing import Optional

from common.logging_utils import extra_context, is_debug_enabled
from .models import PathDecision, PathMode

logger = logging.getLogger(__name__)


def _prefers_module_path(preference: Optional[PathMode]) -> bool:
    if preference is None:
        return False
    if preference is PathMode.MODULEPATH:
        return True
    if preference is PathMode.CLASSPATH:
        return False
    raise ValueError(f"Unknown path mode: {preference!r}")


def resolve_path_mode(
    legacy: bool,
    preference: Optional[PathMode],
    modulepath_non_empty: bool,
    classpath_non_empty: bool = False,
) -> PathDecision:
    """Decide which path clauses to emit.

    A legacy runtime never gets module-system arguments and always gets a
    classpath clause. Otherwise the module path is used when requested or when
    module path entries were resolved. Both clauses may apply at once.

    Raises:
        ValueError: If ``preference`` is neither None nor a PathMode member,
            whether or not the runtime is legacy.
    """
    prefers_module_path = _prefers_module_path(preference)
    explicit_classpath = preference is PathMode.CLASSPATH
    use_module_path = not legacy and (prefers_module_path or modulepath_non_empty)
    use_classpath = legacy or classpath_non_empty or explicit_classpath

    decision = PathDecision(
        use_module_path=use_module_path,
        use_classpath=use_classpath,
        prefix_output_directory=legacy or explicit_classpath,
    )
    if is_debug_enabled(logger):
        logger.debug("Resolved path mode", extra=extra_context(
            event="decision", component="path_mode", action="resolve_path_mode",
            outcome="modulepath" if use_module_path else "classpath",
            legacy=legacy, use_classpath=use_classpath,
        ))
    return decision
