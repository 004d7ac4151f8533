"""Resolution limits and defaults.

Values are read from the environment once, at import time.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%r: must be >= 1", name, raw)
        return default
    return value


# Longest $ref -> $ref chain followed before giving up
MAX_CHAIN_DEPTH = _env_int("REFRESOLVE_MAX_CHAIN_DEPTH", 64)

# Deepest schema nesting expanded by the deep resolver
MAX_SCHEMA_DEPTH = _env_int("REFRESOLVE_MAX_SCHEMA_DEPTH", 128)

DEFAULT_SPEC_PATH = Path(
    os.environ.get("REFRESOLVE_SPEC") or Path.cwd() / "spec" / "openapi.json"
)
