"""Java launch command composition."""

from .composer import compose, compose_request
from .models import (
    ArgumentVector,
    LaunchRequest,
    LaunchSettings,
    MainClassSpec,
    ModuleDescriptor,
    PathDecision,
    PathElement,
    PathMode,
)
from .modules import resolve_add_modules
from .path_mode import resolve_path_mode
from .tokenizer import tokenize

__all__ = [
    "ArgumentVector",
    "LaunchRequest",
    "LaunchSettings",
    "MainClassSpec",
    "ModuleDescriptor",
    "PathDecision",
    "PathElement",
    "PathMode",
    "compose",
    "compose_request",
    "resolve_add_modules",
    "resolve_path_mode",
    "tokenize",
]
