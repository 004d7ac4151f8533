"""Resolve local $ref pointers to component values.

Pointers must have the shape ``#/components/<category>/<name>``. A component
that is itself a reference is followed until an inline value is reached; the
category stays fixed for the whole chain. Every failure (bad shape, wrong
category, missing component, cycle, chain too long) comes back as None.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from . import config
from .categories import (
    EXAMPLE,
    PARAMETER,
    REQUEST_BODY,
    RESPONSE,
    SCHEMA,
    Category,
    get_category,
)
from .pointer import get_ref, parse_ref

logger = logging.getLogger(__name__)


def _lookup(category: Category, pointer: str, document: dict[str, Any]) -> dict[str, Any] | None:
    """Fetch the raw entry a pointer names, without following it."""
    parts = parse_ref(pointer)
    if len(parts) != 3 or parts[0] != "components" or parts[1] != category.segment:
        logger.debug("Pointer %r is not a local %s reference", pointer, category.name)
        return None

    components = document.get("components")
    if not isinstance(components, dict):
        logger.debug("Document has no components table (resolving %r)", pointer)
        return None

    entry = category.lookup(components, parts[2])
    if entry is None:
        logger.debug("No %s named %r", category.name, parts[2])
    return entry


def follow_chain(
    category: Category | str,
    pointer: str,
    document: dict[str, Any],
) -> tuple[dict[str, Any] | None, list[str]]:
    """Follow a pointer through any chained references.

    Returns the inline value (not copied) and the list of pointers visited
    on the way. The value is None if the chain fails anywhere.
    """
    category = get_category(category)
    chain: list[str] = []
    current = pointer

    while True:
        if current in chain:
            logger.warning("Reference cycle: %s", " -> ".join(chain + [current]))
            return None, chain
        if len(chain) >= config.MAX_CHAIN_DEPTH:
            logger.warning(
                "Reference chain from %r exceeds %d hops", pointer, config.MAX_CHAIN_DEPTH,
            )
            return None, chain
        chain.append(current)

        entry = _lookup(category, current, document)
        if entry is None:
            return None, chain

        next_ref = get_ref(entry)
        if next_ref is None:
            return entry, chain
        current = next_ref


def resolve_reference(
    category: Category | str,
    pointer: str,
    document: dict[str, Any],
) -> dict[str, Any] | None:
    """Resolve a pointer to an independent copy of the component it names."""
    value, _ = follow_chain(category, pointer, document)
    if value is None:
        return None
    return copy.deepcopy(value)


def resolve_reference_or(
    value: dict[str, Any],
    document: dict[str, Any],
    category: Category | str = SCHEMA,
) -> dict[str, Any] | None:
    """Resolve either an inline value or a reference node.

    Inline values are copied regardless of the document contents.
    """
    ref = get_ref(value)
    if ref is None:
        return copy.deepcopy(value)
    return resolve_reference(category, ref, document)


def resolve_schema_ref(pointer: str, document: dict[str, Any]) -> dict[str, Any] | None:
    """Resolve a ``#/components/schemas/...`` pointer (one level, not deep)."""
    return resolve_reference(SCHEMA, pointer, document)


def resolve_response_ref(pointer: str, document: dict[str, Any]) -> dict[str, Any] | None:
    return resolve_reference(RESPONSE, pointer, document)


def resolve_parameter_ref(pointer: str, document: dict[str, Any]) -> dict[str, Any] | None:
    return resolve_reference(PARAMETER, pointer, document)


def resolve_request_body_ref(pointer: str, document: dict[str, Any]) -> dict[str, Any] | None:
    return resolve_reference(REQUEST_BODY, pointer, document)


def resolve_example_ref(pointer: str, document: dict[str, Any]) -> dict[str, Any] | None:
    return resolve_reference(EXAMPLE, pointer, document)
