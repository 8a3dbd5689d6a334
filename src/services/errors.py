"""Exceptions raised by the deinflection services.

Both subclass ``ValueError`` so callers that already treat bad input as a
``ValueError`` (the HTTP layer maps it to 400) need no special casing.
"""


class CatalogError(ValueError):
    """A rule catalog is malformed and cannot be built."""


class InvalidInputError(ValueError):
    """The word handed to the engine is not a valid surface form."""
