"""Template rendering utilities."""

import logging
from pathlib import Path
from typing import Any
from jinja2 import Environment, BaseLoader, FileSystemLoader, TemplateError, StrictUndefined


logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class StringTemplateLoader(BaseLoader):
    """Template loader for string templates."""
    
    def __init__(self, template_string: str):
        self.template_string = template_string
        
    def get_source(self, environment, template):
        return self.template_string, None, lambda: True


def _packaged_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(template_str: str, **context: Any) -> str:
    """Render a Jinja2 template string with given context."""
    try:
        env = Environment(loader=StringTemplateLoader(template_str))
        template = env.get_template("")
        return template.render(**context)
        
    except TemplateError as e:
        logger.error(f"Template rendering error: {e}")
        raise


def render_packaged(name: str, **context: Any) -> str:
    """Render a template shipped in the package's templates directory."""
    try:
        template = _packaged_env().get_template(name)
        return template.render(**context)
        
    except TemplateError as e:
        logger.error(f"Error rendering {name}: {e}")
        raise
