"""Damerau-Levenshtein distance (optimal string alignment variant)."""

from rapidfuzz.distance import OSA


def damerau_levenshtein(source: str, target: str) -> int:
    """Minimum insertions, deletions, substitutions and adjacent transpositions.

    Every operation costs 1 and no substring is edited more than once.
    """
    return OSA.distance(source, target)
