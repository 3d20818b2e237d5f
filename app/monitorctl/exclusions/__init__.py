"""Exclusion normalization and matching.

This module turns user-authored exclusion strings into anchored,
case-insensitive match rules that a directory scanner can apply to
relative paths.
"""

from monitorctl.exclusions.compiler import (
    CompileError,
    CompileResult,
    ExclusionRule,
    MatchRule,
    any_matches,
    build_rules,
    compile_all,
    compile_exclusion,
)
from monitorctl.exclusions.normalize import normalize_candidate, normalize_exclusion

__all__ = [
    "CompileError",
    "CompileResult",
    "ExclusionRule",
    "MatchRule",
    "any_matches",
    "build_rules",
    "compile_all",
    "compile_exclusion",
    "normalize_candidate",
    "normalize_exclusion",
]
