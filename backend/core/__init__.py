"""
Name matching core: normalization, tiered single-name resolution and batch
reconciliation. Pure functions; the token dictionary is read once at import.
"""
from backend.core.match import (
    MatchMethod,
    MatchResult,
    levenshtein_distance,
    resolve,
    suggest_matches,
)
from backend.core.normalize import normalize_name
from backend.core.reconcile import UnvalidatedCandidate, reconcile_batch

__all__ = [
    "MatchMethod",
    "MatchResult",
    "levenshtein_distance",
    "resolve",
    "suggest_matches",
    "normalize_name",
    "UnvalidatedCandidate",
    "reconcile_batch",
]
