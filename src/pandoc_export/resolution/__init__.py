"""Converter executable resolution."""

from pandoc_export.resolution.resolver import Resolver, first_success, tool_not_found
from pandoc_export.resolution.strategies import (
    DEFAULT_STRATEGIES,
    ResolutionContext,
    Strategy,
    candidate_directories,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "ResolutionContext",
    "Resolver",
    "Strategy",
    "candidate_directories",
    "first_success",
    "tool_not_found",
]
