"""Grammatical categories used to gate which deinflection rules may chain.

A rule requires its input to belong to one of a set of categories and tags its
output with another set. Sets are plain ``enum.Flag`` values so the gate is a
single intersection.
"""

from collections.abc import Iterable
from enum import Flag

from services.errors import CatalogError


class Category(Flag):
    """Word classes and conjugation patterns (品詞)."""

    V1 = 1                  # 一段 ichidan verb
    V5 = 1 << 1             # 五段 godan verb
    VS = 1 << 2             # する verb
    VK = 1 << 3             # 来る verb
    VZ = 1 << 4             # ずる verb
    ADJ_I = 1 << 5          # い-adjective
    IRU = 1 << 6            # て-form waiting for いる / しまう / おる
    UNCONSTRAINED = 1 << 7  # uninflected surface form, not a real word class

    ANY = (1 << 8) - 1


GRAMMATICAL = Category.ANY & ~Category.UNCONSTRAINED

# Tag spelling used by the rule catalog files
CATEGORY_TAGS: dict[str, Category] = {
    "v1": Category.V1,
    "v5": Category.V5,
    "vs": Category.VS,
    "vk": Category.VK,
    "vz": Category.VZ,
    "adj-i": Category.ADJ_I,
    "iru": Category.IRU,
    "unconstrained": Category.UNCONSTRAINED,
}

_TAG_NAMES = {category: tag for tag, category in CATEGORY_TAGS.items()}


def parse_categories(tags: Iterable[str] | str, *, empty: Category = Category(0)) -> Category:
    """Combine catalog tags into a category set.

    Args:
        tags: Tag names such as ``"v1"`` or ``"adj-i"``, or a single tag.
        empty: Value returned when ``tags`` holds no tag at all.

    Returns:
        The union of the named categories.

    Raises:
        CatalogError: If a tag is not a known category.
    """
    if isinstance(tags, str):
        tags = [tags]

    result = Category(0)
    seen = False
    for tag in tags:
        seen = True
        try:
            result |= CATEGORY_TAGS[tag.strip().lower()]
        except KeyError:
            raise CatalogError(f"Unknown category tag: {tag!r}") from None
    return result if seen else empty


def format_categories(categories: Category) -> list[str]:
    """Render a category set as catalog tags in declaration order."""
    return [_TAG_NAMES[member] for member in Category if member in categories]
