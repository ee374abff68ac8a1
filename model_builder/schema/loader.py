"""YAML schema loading and consolidation.

A schema maps model names to model definitions. The project schema and
every plugin schema are merged into one consolidated file that the
generator consumes; plugin models are tagged with a ``package`` so their
classes land in the plugin's model directory.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol

import yaml

from model_builder.errors import SchemaNotFoundError

logger = logging.getLogger(__name__)

SCHEMA_GLOB = "*.yml"
CONSOLIDATED_SCHEMA_NAME = "schema.yml"

# top-level schema keys that are defaults for the file's models
GLOBAL_KEYS = (
    "connection",
    "attributes",
    "templates",
    "actAs",
    "options",
    "package",
    "package_custom_path",
    "inheritance",
    "detect_relations",
)

ModelDefinitions = dict[str, dict[str, Any]]


class SchemaLoader(Protocol):
    """Loads model definitions from a schema path."""

    def load(self, path: str) -> ModelDefinitions: ...


class YamlSchemaLoader:
    """Loads Doctrine YAML schema files.

    A path may name a single file or a directory whose ``*.yml`` files
    are merged in name order. Model order follows the files. Global keys
    such as ``package`` or ``options`` at the top of a file are applied
    as defaults to that file's models.
    """

    def load(self, path: str) -> ModelDefinitions:
        """Load all model definitions found at a path.

        Args:
            path: Schema file or directory.

        Returns:
            Ordered mapping of model name to definition.

        Raises:
            SchemaNotFoundError: If the path is missing, or a file holds
                something other than a mapping of models, or a model
                definition is not a mapping.
        """
        schema_path = Path(path)
        if schema_path.is_dir():
            files = sorted(schema_path.glob(SCHEMA_GLOB))
        elif schema_path.is_file():
            files = [schema_path]
        else:
            raise SchemaNotFoundError(path)

        models: ModelDefinitions = {}
        for file_path in files:
            models.update(self._load_file(file_path))

        logger.debug("Loaded %d models from %s", len(models), path)
        return models

    def _load_file(self, file_path: Path) -> ModelDefinitions:
        with open(file_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise SchemaNotFoundError(str(file_path), f"invalid YAML ({e})") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SchemaNotFoundError(str(file_path), "schema is not a mapping of models")

        # globals apply to every model of the file that does not set them
        defaults = {key: data.pop(key) for key in GLOBAL_KEYS if key in data}

        models: ModelDefinitions = {}
        for name, definition in data.items():
            # a model declared with no attributes loads as None
            if definition is None:
                definition = {}
            if not isinstance(definition, dict):
                raise SchemaNotFoundError(str(file_path), f"model {name} is not a mapping")
            for key, value in defaults.items():
                definition.setdefault(key, copy.deepcopy(value))
            models[name] = definition
        return models


def plugin_package(plugin: str) -> str:
    """Return the package attribute given to a plugin's models."""
    return f"{plugin}.lib.model.doctrine"


def prepare_schema_file(
    schema_path: str,
    cache_dir: str,
    plugin_schema_dirs: Optional[Mapping[str, str]] = None,
    loader: Optional[SchemaLoader] = None,
) -> str:
    """Merge the project and plugin schemas into one YAML file.

    Plugin schemas are read first so that project definitions can
    override plugin models of the same name. Plugin models without an
    explicit ``package`` receive ``<plugin>.lib.model.doctrine``.

    Args:
        schema_path: Project schema file or directory.
        cache_dir: Directory that receives the consolidated file.
        plugin_schema_dirs: Mapping of plugin name to its schema path.
        loader: Schema loader; defaults to YamlSchemaLoader.

    Returns:
        Path to the consolidated schema file.

    Raises:
        SchemaNotFoundError: If the project schema, or a configured
            plugin schema, is missing or invalid.
    """
    loader = loader or YamlSchemaLoader()
    models: ModelDefinitions = {}

    for plugin, plugin_dir in (plugin_schema_dirs or {}).items():
        for name, definition in loader.load(plugin_dir).items():
            definition.setdefault("package", plugin_package(plugin))
            models[name] = definition

    models.update(loader.load(schema_path))
    if not models:
        raise SchemaNotFoundError(schema_path, "no models defined")

    target = Path(cache_dir) / CONSOLIDATED_SCHEMA_NAME
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        yaml.safe_dump(models, f, default_flow_style=False, sort_keys=False)

    logger.info("Consolidated %d models into %s", len(models), target)
    return str(target)
