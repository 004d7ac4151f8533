"""Build the report context for a whole document.

Walks every operation (request body, parameters, responses) and every
component schema, deep-resolving each schema site it finds, and assembles
the dict rendered by report.py.
"""

from __future__ import annotations

from typing import Any

from .categories import PARAMETER, REQUEST_BODY, RESPONSE
from .loader import get_components, get_paths
from .pointer import get_ref
from .resolver import resolve_reference_or
from .schema import describe_schema, find_unresolved_refs, resolve_schema_deep

# Operation keys of a path item, in the order they are reported
_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def _mapping_list(value: Any) -> list[dict[str, Any]]:
    """Keep the mapping entries of a list; anything else yields no entries."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _new_tally() -> dict[str, int]:
    return {"resolved": 0, "failed": 0, "unresolved_refs": 0}


def _schema_entry(
    node: Any, document: dict[str, Any], tally: dict[str, int],
) -> dict[str, Any]:
    """Deep-resolve one schema site and summarize the result."""
    ref = get_ref(node)
    resolved = resolve_schema_deep(node, document)
    if resolved is None:
        tally["failed"] += 1
        return {"ref": ref, "resolved": False, "summary": None, "unresolved": []}

    unresolved = [
        {"location": location, "ref": pointer}
        for location, pointer in find_unresolved_refs(resolved)
    ]
    tally["resolved"] += 1
    tally["unresolved_refs"] += len(unresolved)
    return {
        "ref": ref,
        "resolved": True,
        "summary": describe_schema(resolved),
        "unresolved": unresolved,
    }


def _content_entries(
    content: Any, document: dict[str, Any], tally: dict[str, int],
) -> list[dict[str, Any]]:
    """Resolve the schema of each media type in a content map."""
    entries = []
    if not isinstance(content, dict):
        return entries
    for media_type, media in content.items():
        schema = media.get("schema") if isinstance(media, dict) else None
        entries.append({
            "media_type": media_type,
            "schema": _schema_entry(schema, document, tally) if schema is not None else None,
        })
    return entries


def _request_body_entry(
    node: Any, document: dict[str, Any], tally: dict[str, int],
) -> dict[str, Any]:
    body = resolve_reference_or(node, document, REQUEST_BODY)
    return {
        "ref": get_ref(node),
        "resolved": isinstance(body, dict),
        "content": _content_entries(
            body.get("content") if isinstance(body, dict) else None, document, tally,
        ),
    }


def _parameter_entry(
    node: Any, document: dict[str, Any], tally: dict[str, int],
) -> dict[str, Any]:
    param = resolve_reference_or(node, document, PARAMETER)
    if not isinstance(param, dict):
        return {"ref": get_ref(node), "resolved": False, "name": None, "location": None, "schema": None}
    schema = param.get("schema")
    return {
        "ref": get_ref(node),
        "resolved": True,
        "name": param.get("name"),
        "location": param.get("in"),
        "schema": _schema_entry(schema, document, tally) if schema is not None else None,
    }


def _response_entry(
    status: str, node: Any, document: dict[str, Any], tally: dict[str, int],
) -> dict[str, Any]:
    response = resolve_reference_or(node, document, RESPONSE)
    return {
        "status": str(status),
        "ref": get_ref(node),
        "resolved": isinstance(response, dict),
        "content": _content_entries(
            response.get("content") if isinstance(response, dict) else None, document, tally,
        ),
    }


def _operation_entry(
    method: str,
    operation: dict[str, Any],
    shared_params: list[dict[str, Any]],
    document: dict[str, Any],
    tally: dict[str, int],
) -> dict[str, Any]:
    request_body = operation.get("requestBody")
    params = shared_params + _mapping_list(operation.get("parameters"))
    responses = operation.get("responses")
    if not isinstance(responses, dict):
        responses = {}
    return {
        "method": method.upper(),
        "operation_id": operation.get("operationId") or "unnamed",
        "request_body": (
            _request_body_entry(request_body, document, tally)
            if request_body is not None else None
        ),
        "parameters": [_parameter_entry(p, document, tally) for p in params],
        "responses": [
            _response_entry(status, response, document, tally)
            for status, response in responses.items()
        ],
    }


def build_context(document: dict[str, Any]) -> dict[str, Any]:
    """Build the full report context from an OpenAPI document."""
    tally = _new_tally()
    paths = []

    for path, path_item in get_paths(document).items():
        ref = get_ref(path_item)
        if ref is not None or not isinstance(path_item, dict):
            # Path item references are reported, not followed
            paths.append({"path": path, "ref": ref, "operations": []})
            continue

        shared_params = _mapping_list(path_item.get("parameters"))
        operations = [
            _operation_entry(method, path_item[method], shared_params, document, tally)
            for method in _METHODS
            if isinstance(path_item.get(method), dict)
        ]
        paths.append({"path": path, "ref": None, "operations": operations})

    schemas = []
    for name, schema in get_components(document, "schemas").items():
        entry = _schema_entry(schema, document, tally)
        entry["name"] = name
        schemas.append(entry)

    info = document.get("info") or {}
    return {
        "title": info.get("title", "untitled"),
        "version": info.get("version", "unknown"),
        "paths": paths,
        "schemas": schemas,
        "operation_count": sum(len(p["operations"]) for p in paths),
        "stats": tally,
    }
