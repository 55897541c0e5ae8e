"""
Jinja2 environment for template-driven plugins.

Templates are registered in memory by name; the filters emit escaped
literals so templates never build quoted strings themselves.
"""

from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, StrictUndefined

from . import escaping


class TemplateError(Exception):
    """A template is missing or failed to render."""

    pass


class TemplateEngine:
    """Wrapper for a Jinja2 environment with code generation utilities."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize template engine.

        Args:
            templates: Mapping of template name to template source
        """
        self._env = Environment(
            loader=DictLoader(dict(templates or {})),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

        # Literal filters
        self._env.filters["pystr"] = escaping.PYTHON.literal
        self._env.filters["pyliteral"] = self._pyliteral_filter
        self._env.filters["pypairs"] = self._pypairs_filter
        self._env.filters["pydict"] = self._pydict_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    # Template filters

    def _pyliteral_filter(self, value: Any, indent: str = "    ", level: int = 0) -> str:
        return escaping.python_literal(value, indent, level)

    def _pypairs_filter(self, pairs, indent: str = "    ", level: int = 0) -> str:
        return escaping.python_pairs(pairs, indent, level)

    def _pydict_filter(self, pairs, indent: str = "    ", level: int = 0) -> str:
        return escaping.python_dict(pairs, indent, level)


def create_template_engine(templates: Optional[Dict[str, str]] = None) -> TemplateEngine:
    """Create a fresh template engine."""
    return TemplateEngine(templates)
