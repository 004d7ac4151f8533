"""Render the resolution report.

Takes the context from context_builder and produces a plain-text report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "report.txt.j2"


def render_report(context: dict[str, Any]) -> str:
    """Render the report template with the given context."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    template = env.get_template(REPORT_TEMPLATE)
    return template.render(**context)


def write_report(context: dict[str, Any], output_path: Path) -> None:
    """Render the report and write it to output_path."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report(context), encoding="utf-8")

    stats = context["stats"]
    print(
        f"Wrote {output_path} ({context['operation_count']} operations,"
        f" {stats['resolved']} schemas resolved, {stats['failed']} failed)"
    )
