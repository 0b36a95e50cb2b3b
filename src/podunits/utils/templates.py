"""Template rendering utilities.

Unit files are rendered from string templates held in code, so the loader
serves a single in-memory template and callers register their own filters.
"""

import logging
from typing import Any, Callable, Dict, Optional

from jinja2 import Environment, BaseLoader, StrictUndefined, TemplateError


logger = logging.getLogger(__name__)


class StringTemplateLoader(BaseLoader):
    """Template loader for string templates."""

    def __init__(self, template_string: str):
        self.template_string = template_string

    def get_source(self, environment, template):
        return self.template_string, None, lambda: True


def render_template(
    template_str: str,
    filters: Optional[Dict[str, Callable[..., Any]]] = None,
    **context: Any,
) -> str:
    """Render a Jinja2 template string with given context.

    Undefined names raise instead of rendering empty, so a typo in a unit
    template cannot silently drop a setting.
    """
    try:
        # Whitespace control keeps line-oriented formats such as unit files tidy
        env = Environment(
            loader=StringTemplateLoader(template_str),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        if filters:
            env.filters.update(filters)

        template = env.get_template("")
        return template.render(**context)

    except TemplateError as e:
        logger.error(f"Template rendering error: {e}")
        raise
