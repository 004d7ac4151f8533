"""Parse local $ref pointers.

Only the minimal local form is understood: ``#/components/<category>/<name>``.
No JSON Pointer escaping (``~0``/``~1``) or percent-decoding is applied.
"""

from __future__ import annotations

from typing import Any

REF_KEY = "$ref"
LOCAL_PREFIX = "#/"


def parse_ref(text: str) -> list[str]:
    """Split a pointer into path segments.

    Strips one leading ``#/`` and splits on ``/``. Never fails: a malformed
    pointer simply yields segments that won't match a component.

        >>> parse_ref("#/components/schemas/User")
        ['components', 'schemas', 'User']
    """
    if text.startswith(LOCAL_PREFIX):
        text = text[len(LOCAL_PREFIX):]
    return text.split("/")


def is_reference(node: Any) -> bool:
    """Check if a node is a ``{"$ref": "..."}`` reference."""
    return isinstance(node, dict) and isinstance(node.get(REF_KEY), str)


def get_ref(node: Any) -> str | None:
    """Return the pointer of a reference node, or None for inline values."""
    if is_reference(node):
        return node[REF_KEY]
    return None


def make_ref(category_segment: str, name: str) -> dict[str, str]:
    """Build a local reference node for a component."""
    return {REF_KEY: f"{LOCAL_PREFIX}components/{category_segment}/{name}"}
