"""Component categories addressable by local pointers.

Each category names the path segment used in pointers and knows how to look
a component up in the document's ``components`` table. The resolver is
written once against this interface.
"""

from __future__ import annotations

from typing import Any


class Category:
    """A kind of component (schema, response, ...) in the components table."""

    def __init__(self, name: str, segment: str) -> None:
        self.name = name
        self.segment = segment

    def lookup(self, components: dict[str, Any], name: str) -> dict[str, Any] | None:
        """Return the reference-or-inline entry called ``name``, if any."""
        table = components.get(self.segment)
        if not isinstance(table, dict):
            return None
        entry = table.get(name)
        if not isinstance(entry, dict):
            return None
        return entry

    def __repr__(self) -> str:
        return f"Category({self.name!r}, {self.segment!r})"


SCHEMA = Category("schema", "schemas")
RESPONSE = Category("response", "responses")
PARAMETER = Category("parameter", "parameters")
REQUEST_BODY = Category("requestBody", "requestBodies")
EXAMPLE = Category("example", "examples")

CATEGORIES: dict[str, Category] = {
    c.name: c for c in (SCHEMA, RESPONSE, PARAMETER, REQUEST_BODY, EXAMPLE)
}

_BY_SEGMENT: dict[str, Category] = {c.segment: c for c in CATEGORIES.values()}


def get_category(category: Category | str) -> Category:
    """Look up a category by instance, name ("schema") or segment ("schemas").

    Raises KeyError for unknown categories.
    """
    if isinstance(category, Category):
        return category
    if category in CATEGORIES:
        return CATEGORIES[category]
    if category in _BY_SEGMENT:
        return _BY_SEGMENT[category]
    raise KeyError(f"Unknown component category: {category!r}")
