from typing import Any, Dict

from jinja2 import Environment, PackageLoader

# Generated Python is not markup, so no autoescaping
_env = Environment(
    loader=PackageLoader("pystl", "templates"),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    """Render a Jinja2 template with the given context.

    Args:
        template_name: Name of the template relative to src/pystl/templates/
        context: Dictionary of variables to pass to the template

    Returns:
        Rendered source text
    """
    template = _env.get_template(template_name)
    return template.render(**context)
