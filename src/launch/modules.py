"""Computation of the ``--add-modules`` value."""

from typing import Iterable, Optional

from constants import Constants
from .models import ModuleDescriptor, PathElement


def has_module_name(element: PathElement) -> bool:
    """True when the entry is a named module."""
    return bool(element.module_name)


def is_domain_module(name: str, prefix: str = Constants.JAVAFX_PREFIX) -> bool:
    return name.startswith(prefix)


def is_empty_module(name: str, suffix: str = Constants.EMPTY_MODULE_SUFFIX) -> bool:
    """Placeholder modules exist only to carry an automatic module name."""
    return name.endswith(suffix)


def resolve_add_modules(
    main_module: Optional[ModuleDescriptor],
    discovered: Iterable[PathElement],
    prefix: str = Constants.JAVAFX_PREFIX,
    empty_suffix: str = Constants.EMPTY_MODULE_SUFFIX,
) -> str:
    """Return the comma-separated module list for ``--add-modules``.

    An explicit module descriptor wins outright. Otherwise the discovered
    entries are filtered, in order, to named domain modules that are not
    empty placeholders. Entries without a module name are skipped.
    """
    if main_module is not None:
        return main_module.name

    names = (element.module_name for element in discovered if has_module_name(element))
    return ",".join(
        name for name in names
        if is_domain_module(name, prefix) and not is_empty_module(name, empty_suffix)
    )
