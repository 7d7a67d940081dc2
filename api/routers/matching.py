"""
Matching router: exposes the name-matching core.

This router provides endpoints for:
- Normalizing a card name into its comparison key
- Resolving one detected name (exact -> containment -> fuzzy)
- Reconciling a batch of detected names (case-insensitive substring test)
- Ranked suggestions for an ambiguous name

When canonical_names is omitted the stored missing list is used.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_scanner_store
from application.ports import ScannerStore
from backend.core.match import MatchResult, resolve, suggest_matches
from backend.core.normalize import normalize_name
from backend.core.reconcile import reconcile_batch

router = APIRouter(
    prefix="/matching",
    tags=["Matching"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class NormalizeRequest(BaseModel):
    """Request model for normalizing a name."""
    name: str = Field(..., description="Raw card name")


class NormalizeResponse(BaseModel):
    """Response model for a normalized name."""
    name: str
    normalized: str


class ResolveRequest(BaseModel):
    """Request model for resolving a single detected name."""
    detected_name: str = Field(..., description="Name as read from the image")
    canonical_names: Optional[List[str]] = Field(
        None, description="Missing list to match against (default: stored list)"
    )


class MatchResponse(BaseModel):
    """Response model for a match result."""
    matched_name: Optional[str] = Field(None, description="Missing-list entry, verbatim")
    confidence: float = Field(..., description="Match confidence (0.0 to 1.0)")
    method: str = Field(..., description="Tier that produced the match")

    @classmethod
    def from_match(cls, match: MatchResult) -> "MatchResponse":
        """Convert MatchResult to response model."""
        return cls(
            matched_name=match.matched_name,
            confidence=match.confidence,
            method=match.method.value,
        )


class ReconcileRequest(BaseModel):
    """Request model for reconciling vision output."""
    detected_names: List[str] = Field(..., max_length=500)
    canonical_names: Optional[List[str]] = Field(
        None, description="Missing list to match against (default: stored list)"
    )


class ReconcileResponse(BaseModel):
    """Response model for reconciled names."""
    names: List[str] = Field(..., description="Canonical names, in detection order")
    count: int


class SuggestRequest(BaseModel):
    """Request model for ranked suggestions."""
    detected_name: str
    canonical_names: Optional[List[str]] = None
    limit: int = Field(5, ge=1, le=50)


class SuggestResponse(BaseModel):
    """Response model for ranked suggestions."""
    suggestions: List[MatchResponse]


def _canonical(names: Optional[List[str]], store: ScannerStore) -> List[str]:
    return names if names is not None else store.load_missing_list()


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(request: NormalizeRequest) -> NormalizeResponse:
    """Return the comparison key for a card name."""
    return NormalizeResponse(name=request.name, normalized=normalize_name(request.name))


@router.post("/resolve", response_model=MatchResponse)
def resolve_name(
    request: ResolveRequest,
    store: ScannerStore = Depends(get_scanner_store),
) -> MatchResponse:
    """
    Resolve a detected name to a missing-list entry.

    Tiers, first success wins:
    1. Exact normalized match (confidence: 1.0)
    2. Containment with length ratio > 0.7
    3. Levenshtein similarity > 0.75
    """
    canonical = _canonical(request.canonical_names, store)
    return MatchResponse.from_match(resolve(request.detected_name, canonical))


@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile(
    request: ReconcileRequest,
    store: ScannerStore = Depends(get_scanner_store),
) -> ReconcileResponse:
    """Filter detected names to missing-list entries, mapped to canonical form."""
    canonical = _canonical(request.canonical_names, store)
    names = reconcile_batch(request.detected_names, canonical)
    return ReconcileResponse(names=names, count=len(names))


@router.post("/suggest", response_model=SuggestResponse)
def suggest(
    request: SuggestRequest,
    store: ScannerStore = Depends(get_scanner_store),
) -> SuggestResponse:
    """Ranked missing-list entries for an ambiguous name."""
    canonical = _canonical(request.canonical_names, store)
    matches = suggest_matches(request.detected_name, canonical, limit=request.limit)
    return SuggestResponse(suggestions=[MatchResponse.from_match(m) for m in matches])
