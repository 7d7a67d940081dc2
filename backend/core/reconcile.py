"""
Batch reconciliation of vision model output against the missing list.

The model is asked to answer only with names from the list, but nothing
guarantees it does. Every name it returns is wrapped as an
UnvalidatedCandidate and only becomes a canonical name once it passes
reconcile_batch.

This is looser than backend.core.match.resolve: a plain
case-insensitive equals-or-substring test on the raw strings, no
normalization and no edit distance.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union


@dataclass(frozen=True)
class UnvalidatedCandidate:
    """A name reported by the vision model, not yet checked against the list."""
    raw: str

    def __str__(self) -> str:
        return self.raw


def _corresponds(detected: str, canonical: str) -> bool:
    d = detected.lower()
    c = canonical.lower()
    return c == d or d in c or c in d


def find_canonical(detected: str, canonical_list: Sequence[str]) -> Optional[str]:
    """First entry of the list that corresponds to the detected name, or None."""
    for canonical in canonical_list:
        if _corresponds(detected, canonical):
            return canonical
    return None


def reconcile_batch(
    detected_names: Iterable[Union[str, UnvalidatedCandidate]],
    canonical_list: Sequence[str],
) -> List[str]:
    """
    Filter detected names down to missing-list entries.

    Each detected name is kept only if some list entry equals it, contains it
    or is contained by it (case-insensitive), and is replaced by the first
    such entry. Output follows input order; duplicates are kept.

    Args:
        detected_names: Names returned by the vision model
        canonical_list: The missing list, in sheet order

    Returns:
        Canonical names, verbatim from canonical_list
    """
    reconciled: List[str] = []
    for name in detected_names:
        raw = name.raw if isinstance(name, UnvalidatedCandidate) else name
        canonical = find_canonical(raw, canonical_list)
        if canonical is not None:
            reconciled.append(canonical)
    return reconciled
