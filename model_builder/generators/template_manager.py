"""Template manager for loading and rendering Jinja2 class templates.

Provides a centralized interface for rendering PHP model classes from
Jinja2 templates stored in the templates/ directory.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from model_builder.schema.structure import ModelInfo
from model_builder.utils.config import BuilderOptions

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent.parent / "templates"


def php_export(value: Any) -> str:
    """Render a Python scalar or list as a PHP literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "array(" + ", ".join(php_export(v) for v in value) + ")"
    if isinstance(value, dict):
        items = ", ".join(f"{php_export(k)} => {php_export(v)}" for k, v in value.items())
        return "array(" + items + ")"
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class TemplateManager:
    """Loads and renders Jinja2 templates for PHP model classes.

    Templates are loaded from a configurable directory and rendered with
    ModelInfo structures built from the schema.
    """

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the template manager.

        Args:
            templates_dir: Path to the templates directory. Uses the
                default templates/ directory if not specified.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self._templates_path.exists():
            logger.warning("Templates directory not found: %s", self._templates_path)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_path)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False,
        )
        self._env.filters["php"] = php_export
        logger.debug("Template manager initialized with: %s", self._templates_path)

    def render_base_class(self, model: ModelInfo, options: BuilderOptions) -> str:
        """Render the regenerable base class of a model.

        Args:
            model: The model to render.
            options: Builder options (parent class, prefix, collection type).

        Returns:
            PHP source of the base class.
        """
        return self._render(
            "base_class.php.j2",
            model=model,
            class_name=options.base_class_prefix + model.name,
            parent_class=options.base_class_name,
            properties=model.property_tags(options.collection_type),
        )

    def render_record_stub(self, model: ModelInfo, options: BuilderOptions) -> str:
        """Render the customizable record class extending the base class."""
        return self._render(
            "record_stub.php.j2",
            model=model,
            parent_class=options.base_class_prefix + model.name,
        )

    def render_table_stub(self, model: ModelInfo) -> str:
        """Render the customizable table class of a model."""
        return self._render("table_stub.php.j2", model=model)

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render a template with the given context variables.

        Args:
            template_name: Name of the template file to render.
            **kwargs: Template context variables.

        Returns:
            Rendered template string.

        Raises:
            TemplateNotFound: If the template file does not exist.
        """
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered

    def list_templates(self) -> list[str]:
        """List all available template files.

        Returns:
            List of template file names.
        """
        return self._env.list_templates()
