"""Jinja2 template rendering for exported artifacts.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``src/exporters/templates/`` directory and renders them with context built
from the addon state.  Templates hold the fixed boilerplate of each output
format; everything computed (signatures, chords, joined regions) is prepared
in Python and passed in as plain strings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .hotkeys import format_chord


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

INDENT = "    "


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the exporters.

    Templates are loaded from a configurable directory.  Output is never
    HTML-escaped, and the single newline that ends every template file is
    dropped so fragments can be joined without stray blank lines.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["indent_lines"] = indent_lines
        self.env.filters["chord"] = format_chord

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"scaffold/node.h.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def indent_lines(value: str, prefix: str = INDENT) -> str:
    """Prefix every line of *value*, blank lines included.

    Unlike Jinja's built-in ``indent`` filter this also indents the first
    line and empty lines, so ``""`` becomes a single indented line.
    """
    return "\n".join(f"{prefix}{line}" for line in value.split("\n"))
