"""Load an OpenAPI document from disk.

JSON by default; ``.yaml``/``.yml`` files go through PyYAML's safe loader.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from . import config

_YAML_SUFFIXES = {".yaml", ".yml"}


class DocumentError(ValueError):
    """The loaded file is not an OpenAPI document."""


def load_document(path: Path | str | None = None) -> dict[str, Any]:
    """Load the OpenAPI document at ``path`` (default: config.DEFAULT_SPEC_PATH)."""
    spec_file = Path(path) if path is not None else config.DEFAULT_SPEC_PATH
    with open(spec_file, encoding="utf-8") as f:
        if spec_file.suffix.lower() in _YAML_SUFFIXES:
            document = yaml.safe_load(f)
        else:
            document = json.load(f)

    if not isinstance(document, dict):
        raise DocumentError(
            f"{spec_file}: expected a mapping at the top level, got {type(document).__name__}"
        )
    return document


def get_paths(document: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return document.get("paths") or {}


def get_components(document: dict[str, Any], segment: str) -> dict[str, Any]:
    """Extract one components section (e.g. "schemas") from the document."""
    return (document.get("components") or {}).get(segment) or {}
