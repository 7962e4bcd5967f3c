"""
Jinja2 environment for code generation.

Templates live next to each language generator. Rendering keeps trailing
newlines and fails on undefined variables, so a missing context key is an
error rather than silently empty output.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import jinja2


class TemplateError(Exception):
    """A template could not be loaded or rendered."""

    pass


def indent_lines(value: str, level: int = 1, unit: str = "\t") -> str:
    """Prefix every non-blank line with level units of indentation."""
    prefix = unit * level
    return "\n".join(prefix + line if line.strip() else line for line in str(value).split("\n"))


class TemplateEngine:
    """Template loading and rendering for one generator."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir
        if template_dir is not None and template_dir.exists():
            loader: jinja2.BaseLoader = jinja2.FileSystemLoader(str(template_dir))
        else:
            loader = jinja2.DictLoader({})

        # Generated source is not markup, nothing is escaped
        self._env = jinja2.Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["indent"] = indent_lines

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            return self._env.get_template(template_name).render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        try:
            self._env.get_template(template_name)
        except jinja2.TemplateNotFound:
            return False
        return True


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine for the given directory (or in-memory)."""
    return TemplateEngine(template_dir)
