"""Entry point: python -m refresolve [SPEC]

Loads an OpenAPI document and prints a report of every schema site with its
references resolved, or dumps one fully resolved component schema as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from . import config
from .context_builder import build_context
from .loader import DocumentError, load_document
from .pointer import make_ref
from .report import render_report, write_report
from .schema import resolve_schema_deep


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="refresolve",
        description="Resolve local $ref pointers in an OpenAPI document.",
    )
    parser.add_argument(
        "spec", nargs="?", type=Path, default=config.DEFAULT_SPEC_PATH,
        help="OpenAPI document (.json, .yaml or .yml)",
    )
    parser.add_argument("-o", "--output", type=Path, help="write the report to this file")
    parser.add_argument("--schema", help="print one component schema, fully resolved, as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        document = load_document(args.spec)
    except (OSError, json.JSONDecodeError, yaml.YAMLError, DocumentError) as e:
        print(f"error: cannot load {args.spec}: {e}", file=sys.stderr)
        return 1

    if args.schema:
        resolved = resolve_schema_deep(make_ref("schemas", args.schema), document)
        if resolved is None:
            print(f"error: schema {args.schema!r} could not be resolved", file=sys.stderr)
            return 1
        print(json.dumps(resolved, indent=2))
        return 0

    context = build_context(document)
    if args.output:
        write_report(context, args.output)
    else:
        print(render_report(context), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
