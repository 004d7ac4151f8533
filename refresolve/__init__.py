"""Resolve local $ref pointers in OpenAPI documents."""

from __future__ import annotations

from .categories import CATEGORIES, Category, get_category
from .loader import DocumentError, load_document
from .pointer import is_reference, parse_ref
from .resolver import (
    resolve_example_ref,
    resolve_parameter_ref,
    resolve_reference,
    resolve_reference_or,
    resolve_request_body_ref,
    resolve_response_ref,
    resolve_schema_ref,
)
from .schema import (
    describe_schema,
    find_unresolved_refs,
    resolve_schema_deep,
    resolve_schema_list_deep,
    schema_kind,
)

__all__ = [
    "CATEGORIES",
    "Category",
    "DocumentError",
    "describe_schema",
    "find_unresolved_refs",
    "get_category",
    "is_reference",
    "load_document",
    "parse_ref",
    "resolve_example_ref",
    "resolve_parameter_ref",
    "resolve_reference",
    "resolve_reference_or",
    "resolve_request_body_ref",
    "resolve_response_ref",
    "resolve_schema_deep",
    "resolve_schema_list_deep",
    "resolve_schema_ref",
    "schema_kind",
]
