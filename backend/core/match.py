"""
Match a single detected card name against the missing list.

Three tiers, first success wins:
1. Exact match on normalized names (confidence 1.0)
2. Containment: one normalized name contains the other and the shorter is
   more than 70% of the longer (confidence = length ratio)
3. Fuzzy: best Levenshtein similarity over the whole list, accepted above 0.75

Ties always go to the earliest entry in the canonical list. The matched name
is returned exactly as written in the list, never in normalized form.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from backend.core.normalize import normalize_name


CONTAINMENT_THRESHOLD = 0.7
FUZZY_THRESHOLD = 0.75


class MatchMethod(str, Enum):
    """Which tier produced the match."""
    EXACT = "exact"
    CONTAINMENT = "containment"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    """Result of resolving one detected name."""
    matched_name: Optional[str]
    confidence: float  # 0.0 to 1.0
    method: MatchMethod = MatchMethod.NONE

    @property
    def is_match(self) -> bool:
        return self.matched_name is not None


NO_MATCH = MatchResult(matched_name=None, confidence=0.0, method=MatchMethod.NONE)


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic unweighted edit distance (insert, delete, substitute all cost 1).

    The table has len(b) + 1 rows and len(a) + 1 columns.
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,      # insertion
                    matrix[i - 1][j] + 1,      # deletion
                )

    return matrix[len(b)][len(a)]


def levenshtein_similarity(a: str, b: str) -> float:
    """1 - distance / longest length; two empty strings are identical (1.0)."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / max_len


def _normalized(canonical_list: Sequence[str]) -> List[Tuple[str, str]]:
    return [(c, normalize_name(c)) for c in canonical_list]


def _try_exact(query: str, candidates: List[Tuple[str, str]]) -> Optional[MatchResult]:
    for original, norm in candidates:
        if norm == query:
            return MatchResult(original, 1.0, MatchMethod.EXACT)
    return None


def _try_containment(query: str, candidates: List[Tuple[str, str]]) -> Optional[MatchResult]:
    for original, norm in candidates:
        if query in norm or norm in query:
            longest = max(len(query), len(norm))
            if longest == 0:
                continue
            similarity = min(len(query), len(norm)) / longest
            if similarity > CONTAINMENT_THRESHOLD:
                return MatchResult(original, similarity, MatchMethod.CONTAINMENT)
    return None


def _try_fuzzy(query: str, candidates: List[Tuple[str, str]]) -> Optional[MatchResult]:
    best_match = None
    best_score = 0.0

    for original, norm in candidates:
        similarity = levenshtein_similarity(query, norm)
        # strict > keeps the earliest of equal scores
        if similarity > best_score:
            best_score = similarity
            best_match = original

    if best_match is not None and best_score > FUZZY_THRESHOLD:
        return MatchResult(best_match, best_score, MatchMethod.FUZZY)
    return None


def resolve(detected: str, canonical_list: Sequence[str]) -> MatchResult:
    """
    Resolve a detected (possibly noisy) name to an entry of the missing list.

    Args:
        detected: Raw name as read from the image
        canonical_list: The missing list, in sheet order

    Returns:
        MatchResult with the canonical entry, or NO_MATCH
    """
    query = normalize_name(detected)
    candidates = _normalized(canonical_list)

    for tier in (_try_exact, _try_containment, _try_fuzzy):
        result = tier(query, candidates)
        if result is not None:
            return result

    return NO_MATCH


def suggest_matches(
    detected: str,
    canonical_list: Sequence[str],
    limit: int = 5,
    score_cutoff: float = 0.3,
) -> List[MatchResult]:
    """
    Rank missing-list entries by similarity to a detected name.

    Useful for showing alternatives when a detection is ambiguous. Scores use
    rapidfuzz's ratio on normalized names and are 0-1. Entries scoring below
    score_cutoff are left out; equal scores keep list order.
    """
    query = normalize_name(detected)
    if not query:
        return []

    scored: List[MatchResult] = []
    for original, norm in _normalized(canonical_list):
        if not norm:
            continue
        score = fuzz.ratio(query, norm) / 100.0
        if score >= score_cutoff:
            method = MatchMethod.EXACT if norm == query else MatchMethod.FUZZY
            scored.append(MatchResult(original, score, method))

    # sort is stable, so ties stay in list order
    scored.sort(key=lambda m: m.confidence, reverse=True)
    if limit is not None:
        scored = scored[:limit]
    return scored
