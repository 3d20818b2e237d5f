"""Compilation of exclusion strings into anchored match rules.

A match rule is a literal, case-insensitive, segment-anchored comparison:
the rule for ``logs`` matches ``logs`` and ``logs\\2024`` but never
``logs2`` or ``old\\logs``. User content is never interpreted as a wildcard
or regular expression.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from monitorctl.exclusions.normalize import CANONICAL_SEPARATOR, normalize_exclusion

logger = logging.getLogger(__name__)


class CompileError(ValueError):
    """Raised when an exclusion cannot be turned into a match rule.

    Attributes:
        raw: The exclusion string as authored.
        reason: Human-readable explanation of the failure.
    """

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Cannot compile exclusion {raw!r}: {reason}")


@dataclass(frozen=True, slots=True)
class MatchRule:
    """Anchored matcher for one normalized exclusion.

    Attributes:
        normalized: Normalized exclusion text the rule was built from.
    """

    normalized: str

    def __post_init__(self) -> None:
        """Validate rule data after initialization."""
        if not self.normalized.strip():
            msg = "Match rule cannot be built from an empty exclusion"
            raise ValueError(msg)

    @property
    def pattern(self) -> str:
        """Equivalent regular expression text, for display and export."""
        return f"^{re.escape(self.normalized)}($|{re.escape(CANONICAL_SEPARATOR)})"

    def matches(self, candidate: str) -> bool:
        """Check whether a normalized candidate path is covered by this rule.

        Args:
            candidate: Relative path already passed through the normalizer.

        Returns:
            True if the candidate equals the exclusion or lies below it.
        """
        value = candidate.lower()
        if value == self.normalized:
            return True
        return value.startswith(self.normalized + CANONICAL_SEPARATOR)


@dataclass(frozen=True, slots=True)
class ExclusionRule:
    """One exclusion string together with its normalized and compiled forms.

    Attributes:
        raw: Exclusion as authored by the user.
        normalized: Result of ``normalize_exclusion(raw)``.
        compiled: Match rule, or None if compilation failed.
        error: Failure reason when ``compiled`` is None.
    """

    raw: str
    normalized: str
    compiled: MatchRule | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Outcome of compiling a batch of exclusions.

    Attributes:
        patterns: Successfully compiled rules, in input order.
        total: Number of raw exclusions supplied.
        compiled: Number of exclusions that produced a rule.
        failures: One error per exclusion that could not be compiled.
    """

    patterns: tuple[MatchRule, ...]
    total: int
    compiled: int
    failures: tuple[CompileError, ...] = ()

    @property
    def failed(self) -> int:
        """Number of exclusions that were dropped."""
        return self.total - self.compiled


def compile_exclusion(raw: str) -> MatchRule:
    """Compile a single raw exclusion into a match rule.

    Args:
        raw: Exclusion string as authored.

    Returns:
        MatchRule for the normalized exclusion.

    Raises:
        CompileError: If the exclusion is empty after normalization.
    """
    normalized = normalize_exclusion(raw)
    if not normalized.strip():
        raise CompileError(raw, "exclusion is empty after normalization")
    return MatchRule(normalized=normalized)


def compile_all(raw_exclusions: Sequence[str]) -> CompileResult:
    """Compile a list of exclusions, skipping the ones that fail.

    A failing exclusion never aborts the batch. The input sequence is not
    modified; failed entries are only missing from the compiled output.

    Args:
        raw_exclusions: Exclusion strings in their authored order.

    Returns:
        CompileResult with the compiled rules and per-entry failures.
    """
    patterns: list[MatchRule] = []
    failures: list[CompileError] = []

    for raw in raw_exclusions:
        try:
            patterns.append(compile_exclusion(raw))
        except CompileError as e:
            logger.debug("Skipping exclusion %r: %s", e.raw, e.reason)
            failures.append(e)

    return CompileResult(
        patterns=tuple(patterns),
        total=len(raw_exclusions),
        compiled=len(patterns),
        failures=tuple(failures),
    )


def build_rules(raw_exclusions: Iterable[str]) -> list[ExclusionRule]:
    """Describe every exclusion with its normalized and compiled forms.

    Args:
        raw_exclusions: Exclusion strings in their authored order.

    Returns:
        One ExclusionRule per input, including the ones that failed.
    """
    rules: list[ExclusionRule] = []
    for raw in raw_exclusions:
        normalized = normalize_exclusion(raw)
        try:
            rules.append(ExclusionRule(raw, normalized, compiled=compile_exclusion(raw)))
        except CompileError as e:
            rules.append(ExclusionRule(raw, normalized, error=e.reason))
    return rules


def any_matches(patterns: Iterable[MatchRule], candidate_path: str) -> bool:
    """Check whether any rule excludes the candidate path.

    The candidate must be normalized with ``normalize_candidate`` first.

    Args:
        patterns: Compiled rules of one monitored directory.
        candidate_path: Normalized path relative to that directory.

    Returns:
        True if at least one rule matches.
    """
    return any(rule.matches(candidate_path) for rule in patterns)
