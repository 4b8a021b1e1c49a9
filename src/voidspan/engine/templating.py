# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Templating Engine

Jinja2 rendering of task argument maps for an execution layer.
"""

import base64
import json
import os
import re
from typing import Any, Callable, Dict, Optional

import yaml
from jinja2 import Environment, TemplateError as JinjaTemplateError, TemplateSyntaxError, Undefined

from voidspan.engine.errors import TemplateError


def _filter_to_yaml(value: Any) -> str:
    """Convert value to YAML string."""
    return yaml.dump(value, default_flow_style=False)


def _filter_bool(value: Any) -> bool:
    """Convert value to boolean."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ('true', 'yes', '1', 'on')
    return bool(value)


def _filter_regex_replace(value: str, pattern: str, replacement: str) -> str:
    """Regex replacement in string."""
    return re.sub(pattern, replacement, str(value))


def _filter_b64decode(value: str) -> str:
    """Decode base64 encoded string."""
    return base64.b64decode(value).decode('utf-8')


def _filter_b64encode(value: str) -> str:
    """Encode string to base64."""
    if isinstance(value, bytes):
        return base64.b64encode(value).decode('utf-8')
    return base64.b64encode(value.encode('utf-8')).decode('utf-8')


# Ansible filters that Jinja2 does not ship
CUSTOM_FILTERS: Dict[str, Callable[..., Any]] = {
    'bool': _filter_bool,
    'to_json': lambda x: json.dumps(x),
    'to_yaml': _filter_to_yaml,
    'basename': lambda p: os.path.basename(str(p)),
    'dirname': lambda p: os.path.dirname(str(p)),
    'regex_replace': _filter_regex_replace,
    'b64decode': _filter_b64decode,
    'b64encode': _filter_b64encode,
}


class TemplateEngine:
    """
    Jinja2 templating engine with Ansible-like behavior.

    Undefined variables render as empty strings, so a missing variable is
    not an error; Jinja2's own 'default' filter handles fallbacks. Syntax
    errors and unknown filters raise TemplateError.
    """

    def __init__(self):
        self.env = Environment(
            undefined=Undefined,
            # Don't auto-escape (we're not rendering HTML)
            autoescape=False,
            # Keep trailing newlines
            keep_trailing_newline=True,
        )

        for name, func in CUSTOM_FILTERS.items():
            self.env.filters[name] = func

    def render(self, template_str: str, variables: Dict[str, Any]) -> str:
        """
        Render a template string with variables.

        Raises:
            TemplateError: If the template is invalid or a filter is unknown
        """
        if not isinstance(template_str, str):
            return template_str

        # Fast path: no template markers
        if '{{' not in template_str and '{%' not in template_str:
            return template_str

        try:
            template = self.env.from_string(template_str)
            return template.render(variables)
        except TemplateSyntaxError as e:
            raise TemplateError(f"Template syntax error: {e}", template=template_str) from e
        except JinjaTemplateError as e:
            raise TemplateError(str(e), template=template_str) from e
        except (TypeError, ValueError) as e:
            # Raised by filters on bad input
            raise TemplateError(f"Filter error: {e}", template=template_str) from e

    def render_fields(self, fields: Dict[str, Any], scope: Dict[str, Any]) -> Dict[str, Any]:
        """
        Render every string leaf of a task argument map.

        Nested mappings and lists are walked; numbers, booleans and other
        non-string values are returned untouched. The input is not modified.
        """
        return {key: self._render_value(value, scope) for key, value in fields.items()}

    def _render_value(self, value: Any, scope: Dict[str, Any]) -> Any:
        if isinstance(value, str):
            return self.render(value, scope)
        if isinstance(value, dict):
            return self.render_fields(value, scope)
        if isinstance(value, list):
            return [self._render_value(item, scope) for item in value]
        return value


# Singleton instance for convenience
_engine: Optional[TemplateEngine] = None


def get_template_engine() -> TemplateEngine:
    """Get the singleton template engine instance."""
    global _engine
    if _engine is None:
        _engine = TemplateEngine()
    return _engine


def render(template_str: str, variables: Dict[str, Any]) -> str:
    """Convenience function to render a template."""
    return get_template_engine().render(template_str, variables)


def render_fields(fields: Dict[str, Any], scope: Dict[str, Any]) -> Dict[str, Any]:
    """Convenience function to render a task argument map."""
    return get_template_engine().render_fields(fields, scope)
