"""Prompt templates shipped with the package."""

from jinja2 import Environment, PackageLoader, StrictUndefined

TEMPLATE_PACKAGE = "deskrelay.infrastructure.llm"


def create_jinja_env() -> Environment:
    """Create the environment loading prompts from the templates/ directory.

    Prompts are plain text, so nothing is escaped. A variable missing
    from the render context raises instead of rendering empty.
    """
    return Environment(
        loader=PackageLoader(TEMPLATE_PACKAGE, "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
