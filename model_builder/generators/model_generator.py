"""PHP model class generation from a Doctrine YAML schema.

For every model the generator writes a base class into the base classes
directory (always overwritten), plus record and table stubs that are
only written when missing so user edits survive regeneration. Models
with a ``package`` are grouped under their plugin's directory.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol

from jinja2 import TemplateError

from model_builder.errors import GenerationError
from model_builder.generators.template_manager import TemplateManager
from model_builder.schema.loader import SchemaLoader, YamlSchemaLoader
from model_builder.schema.structure import ModelInfo, build_models
from model_builder.tokens import plugin_name
from model_builder.utils.config import BuilderOptions

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("yml",)


class ModelGenerator(Protocol):
    """Materializes model class files from a schema."""

    def import_schema(self, schema_path: str, fmt: str, output_dir: str) -> list[str]: ...


def package_directory(output_dir: str, package: Optional[str]) -> Path:
    """Return the directory holding a model's classes."""
    plugin = plugin_name({"package": package})
    return Path(output_dir) / plugin if plugin else Path(output_dir)


def base_class_path(
    output_dir: str,
    model: str,
    package: Optional[str],
    options: BuilderOptions,
) -> Path:
    """Return where the base class of a model is written.

    ``<output_dir>[/<plugin>]/<base dir>/<prefix><Model><suffix>``.
    """
    return (
        package_directory(output_dir, package)
        / options.base_classes_directory
        / f"{options.base_class_prefix}{model}{options.suffix}"
    )


class TemplateModelGenerator:
    """Generates PHP model classes by rendering Jinja2 templates.

    Args:
        options: Builder options controlling names and which classes
            are generated.
        template_manager: Renders the PHP templates.
        loader: Reads the schema file.
    """

    def __init__(
        self,
        options: Optional[BuilderOptions] = None,
        template_manager: Optional[TemplateManager] = None,
        loader: Optional[SchemaLoader] = None,
    ) -> None:
        self.options = options or BuilderOptions()
        self.templates = template_manager or TemplateManager()
        self.loader = loader or YamlSchemaLoader()

    def import_schema(self, schema_path: str, fmt: str, output_dir: str) -> list[str]:
        """Generate class files for every model in a schema.

        Args:
            schema_path: Path to the schema file.
            fmt: Schema format; only ``yml`` is supported.
            output_dir: Models root directory.

        Returns:
            Paths of the files written during this call.

        Raises:
            GenerationError: If the format is unsupported or a class
                cannot be rendered or written.
            SchemaNotFoundError: If the schema cannot be loaded.
        """
        if fmt not in SUPPORTED_FORMATS:
            raise GenerationError(f"Unsupported schema format: {fmt}")

        models = build_models(self.loader.load(schema_path))
        written: list[str] = []
        for model in models:
            try:
                written.extend(self._write_model(model, output_dir))
            except (TemplateError, OSError) as e:
                raise GenerationError(f"Failed to generate {model.name}: {e}") from e

        logger.info("Generated %d files for %d models", len(written), len(models))
        return written

    def _write_model(self, model: ModelInfo, output_dir: str) -> list[str]:
        options = self.options
        directory = package_directory(output_dir, model.package)
        written = []

        if options.generate_base_classes:
            path = base_class_path(output_dir, model.name, model.package, options)
            self._write(path, self.templates.render_base_class(model, options))
            written.append(str(path))

        stubs = [
            (
                directory / f"{model.name}{options.suffix}",
                lambda: self.templates.render_record_stub(model, options),
            )
        ]
        if options.generate_table_classes:
            stubs.append(
                (
                    directory / f"{model.name}Table{options.suffix}",
                    lambda: self.templates.render_table_stub(model),
                )
            )

        for path, render in stubs:
            if path.exists():
                logger.debug("Keeping existing %s", path)
                continue
            self._write(path, render())
            written.append(str(path))

        return written

    def _write(self, path: Path, code: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(code)
        logger.debug("Wrote %s", path)
