"""Pydantic models for the deinflection API requests and responses."""

from pydantic import BaseModel, Field

from settings import MAX_TEXT_LENGTH, MAX_WORD_LENGTH


# ============================================================================
# Request Models
# ============================================================================


class DeinflectRequest(BaseModel):
    """Request body for single-word deinflection."""
    word: str = Field(..., min_length=1, max_length=MAX_WORD_LENGTH, description="Inflected surface form")
    normalize: bool = Field(True, description="Fold half-width and katakana to hiragana first")


class DeinflectTextRequest(BaseModel):
    """Request body for prefix-scan deinflection of running text."""
    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Text starting with the word to look up")
    normalize: bool = Field(True, description="Fold half-width and katakana to hiragana first")


# ============================================================================
# Response Components
# ============================================================================


class CandidateResponse(BaseModel):
    """Single candidate base form."""
    index: int = Field(..., description="Position in discovery order (0 is the input)")
    term: str = Field(..., description="Candidate form")
    categories: list[str] = Field(default_factory=list, description="Grammatical categories, e.g. ['v5']")
    reasons: list[str] = Field(default_factory=list, description="Inflections undone, surface-most first")
    parent: int | None = Field(None, description="Index of the candidate this one was derived from")


class PrefixResult(BaseModel):
    """Candidates for one prefix of the requested text."""
    prefix: str = Field(..., description="Prefix that was deinflected")
    candidates: list[CandidateResponse] = Field(default_factory=list)
    count: int = Field(0, description="Number of candidates")


class RuleSummary(BaseModel):
    """Rules sharing one reason label."""
    reason: str = Field(..., description="Reason label, e.g. 'passive'")
    count: int = Field(..., description="Number of rules with this label")


# ============================================================================
# Response Models
# ============================================================================


class DeinflectResponse(BaseModel):
    """Response for /deinflect endpoint."""
    word: str = Field(..., description="Word as received")
    normalized: str = Field(..., description="Word after kana normalization")
    candidates: list[CandidateResponse] = Field(default_factory=list)
    count: int = Field(0, description="Number of candidates")


class DeinflectTextResponse(BaseModel):
    """Response for /deinflect_text endpoint."""
    text: str = Field(..., description="Text as received")
    normalized: str = Field(..., description="Text after kana normalization")
    prefixes: list[PrefixResult] = Field(default_factory=list, description="Longest prefix first")


class RulesResponse(BaseModel):
    """Response for /rules endpoint."""
    total: int = Field(..., description="Number of rules in the active catalog")
    reasons: list[RuleSummary] = Field(default_factory=list)
