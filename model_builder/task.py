"""The doctrine:build-model task.

Generates model classes for the current schema, documents the magic
accessors of every base class and replaces the phpdoc placeholders in
the stubs created by this run and in all base classes. Custom classes
that already exist are never overwritten; only files in the base
classes directories are regenerated.
"""

import logging
from typing import Callable, Optional

from model_builder.annotator import AccessorDocAnnotator
from model_builder.generators.model_generator import ModelGenerator, base_class_path
from model_builder.schema.loader import SchemaLoader, prepare_schema_file
from model_builder.tokens import build_token_map, subpackage_tokens
from model_builder.utils.config import AppConfig, load_project_properties
from model_builder.utils.filesystem import replace_tokens
from model_builder.utils.finder import FileEnumerator
from model_builder.utils.logging import log_section

logger = logging.getLogger(__name__)


class BuildModelTask:
    """Creates classes for the current model.

    Args:
        config: Application configuration.
        schema_loader: Loads the consolidated schema.
        generator: Writes the class files.
        finder: Enumerates stub and base class files.
        autoload_reloader: Called once the classes are in place.
    """

    namespace = "doctrine"
    name = "build-model"
    brief_description = "Creates classes for the current model"

    def __init__(
        self,
        config: AppConfig,
        schema_loader: SchemaLoader,
        generator: ModelGenerator,
        finder: FileEnumerator,
        autoload_reloader: Optional[Callable[[], None]] = None,
    ) -> None:
        self.config = config
        self.schema_loader = schema_loader
        self.generator = generator
        self.finder = finder
        self.autoload_reloader = autoload_reloader

    def execute(self, application: Optional[str] = None, env: str = "dev") -> None:
        """Run the task.

        Args:
            application: Application name, informational only.
            env: Environment name, informational only; environment
                overrides are applied when the config is loaded.

        Raises:
            ConfigurationError: If required paths are not configured.
            SchemaNotFoundError: If the schema cannot be found or read.
            GenerationError: If the generator fails.
            OSError: If a generated file cannot be read or written.
        """
        log_section(logger, self.namespace, "generating model classes")
        logger.debug("application=%s env=%s", application, env)

        self.config.require_paths()
        options = self.config.builder
        paths = self.config.paths
        models_path = paths.models_path

        before = self._find_stubs()

        schema = prepare_schema_file(
            paths.yaml_schema_path,
            paths.cache_dir,
            paths.plugin_schema_dirs,
            loader=self.schema_loader,
        )
        self.generator.import_schema(schema, "yml", models_path)

        # markup base classes with magic methods
        if options.generate_base_classes:
            for model, definition in self.schema_loader.load(schema).items():
                file_path = base_class_path(
                    models_path, model, definition.get("package"), options
                )
                annotator = AccessorDocAnnotator(model, options.collection_type)
                annotator.annotate_file(str(file_path), subpackage_tokens(definition))

        project = load_project_properties(paths.properties_file, self.config.project)
        tokens = build_token_map(project)

        # cleanup new stub classes
        before_set = set(before)
        new_stubs = [path for path in self._find_stubs() if path not in before_set]
        replace_tokens(new_stubs, "", "", tokens)
        log_section(logger, "tokens", f"{len(new_stubs)} new stub classes")

        # cleanup base classes
        base_dirs = self.finder.find(
            models_path, name=options.base_classes_directory, type="dir"
        )
        base_files = self.finder.find(
            base_dirs, name=f"{options.base_class_prefix}*{options.suffix}", type="file"
        )
        replace_tokens(base_files, "", "", tokens)
        log_section(logger, "tokens", f"{len(base_files)} base classes")

        if self.autoload_reloader is not None:
            self.autoload_reloader()

    def _find_stubs(self) -> list[str]:
        options = self.config.builder
        return self.finder.find(
            self.config.paths.models_path,
            name=f"*{options.suffix}",
            type="file",
            prune=[options.base_classes_directory],
        )
