"""Deinflection rule catalog.

A catalog is an immutable, ordered collection of suffix-rewrite rules with an
index from match suffix to rule positions. It is built once, validated at
construction, and shared read-only by every deinflection call.

Catalogs can be built from:
- ``Rule`` objects directly
- the yomichan ``deinflect.json`` layout (``RuleCatalog.from_mapping``)
- a JSON or gzipped JSON file in that layout (``RuleCatalog.from_file``)
- the bundled Japanese rule table (``default_catalog``)
"""

import gzip
import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Any, Self

from services.categories import Category, parse_categories
from services.errors import CatalogError

logger = logging.getLogger(__name__)

# Number of malformed rules listed in a CatalogError message
_ERROR_PREVIEW = 25


@dataclass(frozen=True, slots=True)
class Rule:
    """One grammatical transformation step.

    Attributes:
        match_suffix: Characters that must end the current term.
        replace_suffix: Characters substituted for ``match_suffix``.
        required_categories: Categories the input must share with the rule;
            empty means the rule accepts any input.
        result_categories: Categories assigned to the produced term.
        reason: Label of the transformation (e.g. "passive"), never matched on.
    """

    match_suffix: str
    replace_suffix: str
    required_categories: Category
    result_categories: Category
    reason: str

    def apply(self, term: str) -> str:
        """Swap ``match_suffix`` at the end of ``term`` for ``replace_suffix``."""
        return term[: len(term) - len(self.match_suffix)] + self.replace_suffix


def _rule_problems(rule: Rule) -> list[str]:
    """List everything that makes ``rule`` unusable in a catalog."""
    if not isinstance(rule, Rule):
        return [f"expected Rule, got {type(rule).__name__}"]

    problems = [
        f"{name} must be str, got {type(getattr(rule, name)).__name__}"
        for name in ("match_suffix", "replace_suffix", "reason")
        if not isinstance(getattr(rule, name), str)
    ]
    problems.extend(
        f"{name} must be Category, got {type(getattr(rule, name)).__name__}"
        for name in ("required_categories", "result_categories")
        if not isinstance(getattr(rule, name), Category)
    )
    if problems:
        return problems

    if not rule.match_suffix:
        problems.append("empty match suffix")
    elif rule.match_suffix == rule.replace_suffix and rule.required_categories == rule.result_categories:
        problems.append(f"no-op rewrite {rule.match_suffix!r} -> {rule.replace_suffix!r}")
    return problems


def _tag_list(reason: str, entry: Mapping[str, Any], key: str) -> list[str]:
    """Read a yomichan ``rulesIn``/``rulesOut`` list, absent meaning empty."""
    tags = entry.get(key, [])
    if not isinstance(tags, (list, tuple)) or not all(isinstance(tag, str) for tag in tags):
        raise CatalogError(f"Malformed {reason!r} entry {entry!r}: {key} must be a list of tags")
    return list(tags)


def _yomichan_rule(reason: str, kana_in: str, kana_out: str, rules_in: Iterable[str], rules_out: Iterable[str]) -> Rule:
    """Build a rule from yomichan-style fields.

    An empty ``rules_in`` list marks a rule that only applies to an
    unconstrained (uninflected) form; an empty ``rules_out`` list leaves the
    result unconstrained, so any later rule may follow it.
    """
    return Rule(
        match_suffix=kana_in,
        replace_suffix=kana_out,
        required_categories=parse_categories(rules_in, empty=Category.UNCONSTRAINED),
        result_categories=parse_categories(rules_out, empty=Category.ANY),
        reason=reason,
    )


@dataclass(frozen=True)
class RuleCatalog:
    """Validated, read-only rule table with a suffix index.

    Rules keep the order they were given in; ``lookup`` always returns matches
    in that order regardless of suffix length.
    """

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

        errors: list[str] = []
        for position, rule in enumerate(self.rules):
            reason = getattr(rule, "reason", "?")
            errors.extend(f"Rule {position} ({reason!r}): {problem}" for problem in _rule_problems(rule))

        if errors:
            preview = "\n".join(f"- {item}" for item in errors[:_ERROR_PREVIEW])
            rest = len(errors) - min(_ERROR_PREVIEW, len(errors))
            more = f"\n- ... and {rest} more" if rest > 0 else ""
            raise CatalogError(f"Rule catalog is malformed ({len(errors)} errors):\n{preview}{more}")

        logger.debug("Built rule catalog with %d rules", len(self.rules))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[Mapping[str, Any]]]) -> Self:
        """Build a catalog from the yomichan ``deinflect.json`` layout.

        Args:
            data: Mapping of reason label to rule entries, each entry holding
                ``kanaIn``, ``kanaOut``, ``rulesIn`` and ``rulesOut``.

        Returns:
            Catalog with rules in mapping order.

        Raises:
            CatalogError: If an entry lacks fields, has mistyped fields or uses
                unknown tags.
        """
        if not isinstance(data, Mapping):
            raise CatalogError(f"Expected a mapping of reason to rules, got {type(data).__name__}")

        rules: list[Rule] = []
        for reason, entries in data.items():
            if not isinstance(entries, (list, tuple)):
                raise CatalogError(f"Expected a list of {reason!r} entries, got {type(entries).__name__}")
            for entry in entries:
                try:
                    kana_in = entry["kanaIn"]
                    kana_out = entry["kanaOut"]
                except (KeyError, TypeError) as e:
                    raise CatalogError(f"Malformed {reason!r} entry {entry!r}: missing {e}") from e
                rules.append(
                    _yomichan_rule(
                        reason,
                        kana_in,
                        kana_out,
                        _tag_list(reason, entry, "rulesIn"),
                        _tag_list(reason, entry, "rulesOut"),
                    )
                )
        return cls(tuple(rules))

    @classmethod
    def from_table(cls, table: Mapping[str, Iterable[tuple[str, str, str, str]]]) -> Self:
        """Build a catalog from compact ``(kana_in, kana_out, rules_in, rules_out)`` rows.

        Category tags inside a row are space separated, e.g. ``"v1 vk"``.
        """
        rules = [
            _yomichan_rule(reason, kana_in, kana_out, rules_in.split(), rules_out.split())
            for reason, rows in table.items()
            for kana_in, kana_out, rules_in, rules_out in rows
        ]
        return cls(tuple(rules))

    @classmethod
    def from_file(cls, path: Path | str) -> Self:
        """Load a catalog from a ``deinflect.json`` file (optionally ``.gz``).

        Raises:
            CatalogError: If the file cannot be read or parsed.
        """
        path = Path(path)
        opener = gzip.open if path.suffix == ".gz" else open
        try:
            with opener(path, "rt", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CatalogError(f"Could not read rule catalog {path}: {e}") from e

        catalog = cls.from_mapping(data)
        logger.info("Loaded %d deinflection rules from %s", len(catalog), path)
        return catalog

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------

    @cached_property
    def suffix_index(self) -> dict[str, tuple[int, ...]]:
        """Map each match suffix to the positions of its rules."""
        index: dict[str, list[int]] = {}
        for position, rule in enumerate(self.rules):
            index.setdefault(rule.match_suffix, []).append(position)
        return {suffix: tuple(positions) for suffix, positions in index.items()}

    @cached_property
    def longest_suffix(self) -> int:
        """Length of the longest match suffix in the catalog."""
        return max((len(suffix) for suffix in self.suffix_index), default=0)

    def lookup(self, term: str) -> tuple[Rule, ...]:
        """Return every rule whose match suffix ends ``term``, in catalog order."""
        index = self.suffix_index
        positions: list[int] = []
        for length in range(1, min(self.longest_suffix, len(term)) + 1):
            positions.extend(index.get(term[-length:], ()))
        positions.sort()
        return tuple(self.rules[position] for position in positions)

    def reasons(self) -> tuple[str, ...]:
        """Distinct reason labels in first-seen order."""
        return tuple(dict.fromkeys(rule.reason for rule in self.rules))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)


@lru_cache(maxsize=1)
def default_catalog() -> RuleCatalog:
    """Get the process-wide catalog built from the bundled rule table."""
    from services.rule_data import DEINFLECTION_RULES

    return RuleCatalog.from_table(DEINFLECTION_RULES)
