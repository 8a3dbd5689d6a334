"""Deinflection service - builds API responses on top of the engine.

This module contains the functions used by the API:
- deinflect_word: All candidate base forms of one word
- deinflect_text: Candidates for every prefix of running text
- describe_rules: Summary of the active rule catalog
"""

import logging
from collections import Counter
from functools import lru_cache

import jaconv

import settings
from models import (
    CandidateResponse,
    DeinflectResponse,
    DeinflectTextResponse,
    PrefixResult,
    RuleSummary,
    RulesResponse,
)
from services.categories import format_categories
from services.deinflector import Deinflections
from services.rules import RuleCatalog, default_catalog

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_catalog() -> RuleCatalog:
    """Get the catalog used by the service (custom file or bundled table)."""
    if settings.RULES_PATH is not None:
        return RuleCatalog.from_file(settings.RULES_PATH)
    return default_catalog()


def normalize_kana(text: str) -> str:
    """Fold half-width katakana to full-width, then katakana to hiragana.

    The bundled rules are written in hiragana, so カタカナ inflections
    (e.g. タベタ) only match after this step. Kanji and ASCII pass through.
    """
    return jaconv.kata2hira(jaconv.h2z(text))


def _candidates(result: Deinflections) -> list[CandidateResponse]:
    return [
        CandidateResponse(
            index=candidate.index,
            term=result.to_string(candidate),
            categories=format_categories(candidate.categories),
            reasons=list(result.reason_chain(candidate)),
            parent=candidate.parent,
        )
        for candidate in result
    ]


# ============================================================================
# Service Functions
# ============================================================================


def deinflect_word(word: str, normalize: bool = True) -> DeinflectResponse:
    """List every candidate base form of ``word``.

    Raises:
        InvalidInputError: If the (normalized) word is empty.
    """
    normalized = normalize_kana(word) if normalize else word
    result = Deinflections.from_word(normalized, get_catalog())
    candidates = _candidates(result)
    return DeinflectResponse(
        word=word,
        normalized=normalized,
        candidates=candidates,
        count=len(candidates),
    )


def deinflect_text(text: str, normalize: bool = True) -> DeinflectTextResponse:
    """Deinflect each prefix of ``text``, longest first."""
    normalized = normalize_kana(text) if normalize else text
    prefixes = []
    for result in Deinflections.from_text(normalized, get_catalog()):
        candidates = _candidates(result)
        prefixes.append(PrefixResult(prefix=result.source, candidates=candidates, count=len(candidates)))

    logger.debug("Scanned %d prefixes of %r", len(prefixes), normalized)
    return DeinflectTextResponse(text=text, normalized=normalized, prefixes=prefixes)


def describe_rules() -> RulesResponse:
    """Count the rules of the active catalog per reason label."""
    catalog = get_catalog()
    counts = Counter(rule.reason for rule in catalog)
    return RulesResponse(
        total=len(catalog),
        reasons=[RuleSummary(reason=reason, count=counts[reason]) for reason in catalog.reasons()],
    )
