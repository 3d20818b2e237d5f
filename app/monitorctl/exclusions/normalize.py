"""Canonical form for exclusion strings and candidate paths.

Exclusions are authored by hand ("Temp/", "\\logs\\", "Cache"), while the
scanning side produces relative paths with whatever separators the platform
uses. Both sides go through the same normalization so that matching is a plain
string comparison.
"""

# Characters trimmed from both ends of an exclusion before comparison
SEPARATORS = "\\/"

# Canonical separator used in normalized paths
CANONICAL_SEPARATOR = "\\"


def normalize_exclusion(raw: str) -> str:
    """Normalize a raw exclusion string into its comparable form.

    Leading and trailing runs of ``\\`` and ``/`` are removed, remaining
    forward slashes become backslashes, and the result is lowercased.
    ``str.lower()`` does not depend on the process locale, so the same
    input always yields the same output.

    Args:
        raw: Exclusion string as written in the settings file.

    Returns:
        Normalized string. Empty input yields an empty string.
    """
    trimmed = raw.strip(SEPARATORS)
    return trimmed.replace("/", CANONICAL_SEPARATOR).lower()


# Candidate paths must be normalized exactly like exclusions.
normalize_candidate = normalize_exclusion
