"""Vocabulary lookups backed by built-in and project CodeSystems."""

from dsflint.terminology.cache import (
    TerminologyCache,
    default_cache,
    reset_default_cache,
)

__all__ = ["TerminologyCache", "default_cache", "reset_default_cache"]
