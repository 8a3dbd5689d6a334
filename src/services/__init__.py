"""Deinflection services module."""

from .categories import Category, format_categories, parse_categories
from .deinflector import Candidate, Deinflections, deinflect
from .errors import CatalogError, InvalidInputError
from .rules import Rule, RuleCatalog, default_catalog

__all__ = [
    # Categories
    "Category",
    "format_categories",
    "parse_categories",
    # Rule catalog
    "Rule",
    "RuleCatalog",
    "default_catalog",
    # Engine
    "Candidate",
    "Deinflections",
    "deinflect",
    # Errors
    "CatalogError",
    "InvalidInputError",
]
