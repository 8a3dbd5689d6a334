"""Breadth-first deinflection of Japanese surface forms.

Starting from the input word, every rule whose match suffix ends the current
term is applied, producing a new candidate. Candidates are deduplicated on
``(term, categories)``, which guarantees termination even when rules can
re-derive a form already seen.

Example:
    聞かれました
      -> 聞かれる   (polite past)
      -> 聞く       (polite past, passive)
"""

import logging
from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Self

from services.categories import Category
from services.errors import InvalidInputError
from services.rules import RuleCatalog, default_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One reachable form inside a ``Deinflections`` result set.

    ``parent`` is the index of the candidate this one was derived from, or
    ``None`` for the input word.
    """

    index: int
    term: str
    categories: Category
    reason: str | None = None
    parent: int | None = None

    @property
    def is_root(self) -> bool:
        return self.parent is None


def _check_word(word: str) -> None:
    if not isinstance(word, str):
        raise InvalidInputError(f"Expected a string, got {type(word).__name__}")
    if not word:
        raise InvalidInputError("Cannot deinflect an empty word")


class Deinflections:
    """Every candidate base form reachable from one surface form.

    The result set is fully built on construction and never changes. The first
    candidate is always the input word itself.
    """

    __slots__ = ("_source", "_candidates")

    def __init__(self, source: str, candidates: Sequence[Candidate]):
        self._source = source
        self._candidates = tuple(candidates)

    @classmethod
    def from_word(cls, word: str, catalog: RuleCatalog | None = None) -> Self:
        """Expand ``word`` through every applicable rule chain.

        Args:
            word: Non-empty surface form, e.g. "食べさせられた".
            catalog: Rules to apply; defaults to the bundled catalog.

        Raises:
            InvalidInputError: If ``word`` is empty or not a string.
        """
        _check_word(word)
        if catalog is None:
            catalog = default_catalog()

        root = Candidate(index=0, term=word, categories=Category.UNCONSTRAINED)
        candidates = [root]
        seen = {(root.term, root.categories)}
        queue = deque([root])

        while queue:
            current = queue.popleft()
            for rule in catalog.lookup(current.term):
                # The input word itself may start any rule chain
                if (
                    not current.is_root
                    and rule.required_categories
                    and not rule.required_categories & current.categories
                ):
                    continue

                term = rule.apply(current.term)
                if not term:
                    continue

                key = (term, rule.result_categories)
                if key in seen:
                    continue
                seen.add(key)

                candidate = Candidate(
                    index=len(candidates),
                    term=term,
                    categories=rule.result_categories,
                    reason=rule.reason,
                    parent=current.index,
                )
                candidates.append(candidate)
                queue.append(candidate)

        logger.debug("Deinflected %r into %d candidates", word, len(candidates))
        return cls(word, candidates)

    @classmethod
    def from_text(cls, text: str, catalog: RuleCatalog | None = None) -> list[Self]:
        """Deinflect every prefix of ``text``, longest first.

        Useful when the end of the word inside a sentence is unknown: the
        caller can look up each prefix's candidates and keep the longest hit.
        """
        _check_word(text)
        if catalog is None:
            catalog = default_catalog()
        return [cls.from_word(text[:end], catalog) for end in range(len(text), 0, -1)]

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        """The surface form this result set was built from."""
        return self._source

    @property
    def root(self) -> Candidate:
        return self._candidates[0]

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __getitem__(self, index: int) -> Candidate:
        return self._candidates[index]

    def __repr__(self) -> str:
        return f"Deinflections({self._source!r}, {len(self._candidates)} candidates)"

    def to_string(self, candidate: Candidate) -> str:
        return candidate.term

    def parent(self, candidate: Candidate) -> Candidate | None:
        if candidate.parent is None:
            return None
        return self._candidates[candidate.parent]

    def path(self, candidate: Candidate) -> tuple[Candidate, ...]:
        """Candidates from the input word down to ``candidate``."""
        steps = []
        node: Candidate | None = candidate
        while node is not None:
            steps.append(node)
            node = self.parent(node)
        return tuple(reversed(steps))

    def reason_chain(self, candidate: Candidate) -> tuple[str, ...]:
        """Reasons in the order they were undone, surface-most first.

        For 聞く derived from 聞かれました this is ``("polite past", "passive")``.
        """
        return tuple(node.reason for node in self.path(candidate) if node.reason is not None)

    def find(self, term: str) -> tuple[Candidate, ...]:
        """All candidates whose term equals ``term``."""
        return tuple(candidate for candidate in self._candidates if candidate.term == term)


def deinflect(word: str, catalog: RuleCatalog | None = None) -> Deinflections:
    """Shortcut for ``Deinflections.from_word``."""
    return Deinflections.from_word(word, catalog)
