"""Deep resolution of schema references.

Handles:
- $ref at the top level (chains followed, see resolver.follow_chain)
- object properties
- array items
- oneOf/allOf/anyOf members
- recursive schemas (left as $ref at the point of recursion)

``not`` sub-schemas are left as they are, as are ``additionalProperties``.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from . import config
from .categories import SCHEMA
from .pointer import REF_KEY, get_ref, is_reference
from .resolver import follow_chain

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = ("string", "number", "integer", "boolean")
COMPOSITION_KEYS = ("oneOf", "allOf", "anyOf")

# Key holding the nested schema(s) walked for each kind
_NESTED_KEYS = {
    "object": "properties",
    "array": "items",
    "oneOf": "oneOf",
    "allOf": "allOf",
    "anyOf": "anyOf",
}


def _primary_type(schema_type: Any) -> str | None:
    """Pick the effective type; OpenAPI 3.1 allows a list like ["string", "null"]."""
    if isinstance(schema_type, list):
        for t in schema_type:
            if t != "null":
                return t
        return None
    if isinstance(schema_type, str):
        return schema_type
    return None


def schema_kind(schema: Any) -> str:
    """Classify a schema node.

    Returns one of "reference", "object", "array", "string", "number",
    "integer", "boolean", "oneOf", "allOf", "anyOf", "not" or "any".
    An explicit ``type`` wins over composition keywords.
    """
    if not isinstance(schema, dict):
        return "any"
    if is_reference(schema):
        return "reference"

    schema_type = _primary_type(schema.get("type"))
    if schema_type == "object":
        return "object"
    if schema_type == "array":
        return "array"
    if schema_type in PRIMITIVE_TYPES:
        return schema_type
    if schema_type is not None:
        return "any"

    for key in COMPOSITION_KEYS:
        if key in schema:
            return key
    if "not" in schema:
        return "not"
    if "properties" in schema:
        return "object"
    if "items" in schema:
        return "array"
    return "any"


def _expand(
    value: Any,
    document: dict[str, Any],
    active: tuple[str, ...],
    depth: int,
) -> Any | None:
    """Resolve one schema node and recurse into its substructure.

    Builds the result level by level: only the nested schema key of this
    level is walked, every other key is copied whole.
    """
    ref = get_ref(value)
    if ref is not None:
        target, chain = follow_chain(SCHEMA, ref, document)
        if target is None:
            return None
        active = active + tuple(chain)
        value = target
    if not isinstance(value, dict):
        return copy.deepcopy(value)

    kind = schema_kind(value)
    nested_key = _NESTED_KEYS.get(kind)
    schema = {
        key: child if key == nested_key else copy.deepcopy(child)
        for key, child in value.items()
    }
    if nested_key is None or nested_key not in schema:
        return schema

    child = schema[nested_key]
    if kind == "object" and isinstance(child, dict):
        properties = {}
        for name, prop in child.items():
            properties[name] = _expand_nested(prop, document, active, depth + 1)
        schema[nested_key] = properties
    elif kind == "array":
        schema[nested_key] = _expand_nested(child, document, active, depth + 1)
    elif kind in COMPOSITION_KEYS and isinstance(child, list):
        members = []
        for member in child:
            members.append(_expand_nested(member, document, active, depth + 1))
        schema[nested_key] = members
    else:
        schema[nested_key] = copy.deepcopy(child)
    return schema


def _expand_site(
    node: Any,
    document: dict[str, Any],
    active: tuple[str, ...],
    depth: int,
) -> Any | None:
    """Expand a nested schema site; None if it must stay as it is."""
    ref = get_ref(node)
    if ref is not None and ref in active:
        logger.debug("Leaving recursive reference %r unexpanded", ref)
        return None
    if depth > config.MAX_SCHEMA_DEPTH:
        logger.warning("Schema nesting exceeds %d levels, stopping", config.MAX_SCHEMA_DEPTH)
        return None

    resolved = _expand(node, document, active, depth)
    if resolved is None:
        logger.debug("Could not resolve %r, keeping reference", ref)
    return resolved


def _expand_nested(
    node: Any,
    document: dict[str, Any],
    active: tuple[str, ...],
    depth: int,
) -> Any:
    """Expand a site inside a result, falling back to a copy of the original."""
    resolved = _expand_site(node, document, active, depth)
    if resolved is None:
        return copy.deepcopy(node)
    return resolved


def resolve_schema_deep(value: dict[str, Any], document: dict[str, Any]) -> dict[str, Any] | None:
    """Resolve a schema and every reference nested inside it.

    ``value`` is a reference node or an inline schema. Returns a new schema
    owned by the caller, or None if the top-level reference can't be
    resolved. Nested references that fail are left in place; use
    find_unresolved_refs() to detect them.
    """
    try:
        return _expand(value, document, (), 0)
    except RecursionError:
        logger.warning("Schema is nested too deeply to resolve")
        return None


def resolve_schema_list_deep(values: list[Any], document: dict[str, Any]) -> None:
    """Deep-resolve each schema in a list in place.

    Elements that can't be resolved are left untouched.
    """
    for i, value in enumerate(values):
        try:
            resolved = _expand_site(value, document, (), 0)
        except RecursionError:
            logger.warning("Schema at index %d is nested too deeply to resolve", i)
            continue
        if resolved is not None:
            values[i] = resolved


def find_unresolved_refs(node: Any, path: str = "") -> list[tuple[str, str]]:
    """List the ``$ref`` markers remaining in a tree as (location, pointer) pairs.

    Locations are slash-separated keys/indices from the root, e.g.
    ``properties/pet`` or ``oneOf/1``; the root itself is ``""``.
    """
    found: list[tuple[str, str]] = []
    if isinstance(node, dict):
        if is_reference(node):
            found.append((path, node[REF_KEY]))
        for key, child in node.items():
            if key == REF_KEY:
                continue
            found.extend(find_unresolved_refs(child, f"{path}/{key}" if path else str(key)))
    elif isinstance(node, list):
        for i, child in enumerate(node):
            found.extend(find_unresolved_refs(child, f"{path}/{i}" if path else str(i)))
    return found


def describe_schema(schema: Any) -> dict[str, Any]:
    """Summarize a schema's structure: its kind plus what it contains."""
    kind = schema_kind(schema)
    summary: dict[str, Any] = {"kind": kind}

    if kind == "reference":
        summary["ref"] = schema[REF_KEY]
    elif kind == "object":
        properties = schema.get("properties")
        summary["properties"] = list(properties) if isinstance(properties, dict) else []
    elif kind == "array":
        items = schema.get("items")
        summary["items"] = schema_kind(items) if items is not None else None
    elif kind in COMPOSITION_KEYS:
        members = schema.get(kind)
        summary["members"] = len(members) if isinstance(members, list) else 0

    return summary
