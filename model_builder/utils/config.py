"""Configuration loader for the model builder.

Loads settings from configs/config.yaml and provides typed access to
the builder options, project paths, project properties and logging
configuration via dataclasses. Per-environment overrides live under
the ``environments`` key and are merged over the base sections.
"""

import configparser
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from model_builder.errors import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

DEFAULT_PROJECT_NAME = "symfony"
DEFAULT_PROJECT_AUTHOR = "Your name here"


@dataclass
class BuilderOptions:
    """Options handed to the model generator.

    Attributes:
        suffix: File suffix of every generated class file.
        base_classes_directory: Directory name holding base classes.
        base_class_prefix: Class name prefix of generated base classes.
        base_class_name: Parent class of every base class.
        generate_base_classes: Whether base classes are written.
        generate_table_classes: Whether table stubs are written.
        collection_type: Property type marking a to-many relation.
    """

    suffix: str = ".class.php"
    base_classes_directory: str = "base"
    base_class_prefix: str = "Base"
    base_class_name: str = "sfDoctrineRecord"
    generate_base_classes: bool = True
    generate_table_classes: bool = True
    collection_type: str = "Doctrine_Collection"


@dataclass
class PathsConfig:
    """Filesystem locations used by the build task."""

    models_path: str = "lib/model/doctrine"
    yaml_schema_path: str = "config/doctrine"
    cache_dir: str = "cache"
    properties_file: Optional[str] = "config/properties.ini"
    plugin_schema_dirs: dict[str, str] = field(default_factory=dict)


@dataclass
class ProjectProperties:
    """Project metadata substituted into generated phpdoc blocks."""

    name: Optional[str] = None
    author: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    builder: BuilderOptions = field(default_factory=BuilderOptions)
    paths: PathsConfig = field(default_factory=PathsConfig)
    project: ProjectProperties = field(default_factory=ProjectProperties)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    env: Optional[str] = None

    def require_paths(self) -> None:
        """Check that the paths without a usable default are set.

        Raises:
            ConfigurationError: If models_path or yaml_schema_path is empty.
        """
        if not self.paths.models_path:
            raise ConfigurationError("paths.models_path")
        if not self.paths.yaml_schema_path:
            raise ConfigurationError("paths.yaml_schema_path")


def _merge(base: dict, overrides: dict) -> dict:
    """Recursively merge override values into a copy of base."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _build_builder_options(data: dict[str, Any]) -> BuilderOptions:
    """Build BuilderOptions from a dictionary.

    Args:
        data: Dictionary with builder settings.

    Returns:
        A configured BuilderOptions instance.
    """
    return BuilderOptions(
        suffix=data.get("suffix", ".class.php"),
        base_classes_directory=data.get("base_classes_directory", "base"),
        base_class_prefix=data.get("base_class_prefix", "Base"),
        base_class_name=data.get("base_class_name", "sfDoctrineRecord"),
        generate_base_classes=data.get("generate_base_classes", True),
        generate_table_classes=data.get("generate_table_classes", True),
        collection_type=data.get("collection_type", "Doctrine_Collection"),
    )


def load_project_properties(
    properties_file: Optional[str],
    project: Optional[ProjectProperties] = None,
) -> ProjectProperties:
    """Fill missing project properties from a properties.ini file.

    Values already set on ``project`` win over the file. The file's
    ``[symfony]`` section provides ``name`` and ``author``.

    Args:
        properties_file: Path to the INI file, or None to skip it.
        project: Properties read from config.yaml.

    Returns:
        The merged ProjectProperties.
    """
    project = project or ProjectProperties()
    if not properties_file or not Path(properties_file).is_file():
        return project

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(properties_file, encoding="utf-8")
    if not parser.has_section("symfony"):
        return project

    section = parser["symfony"]
    logger.debug("Read project properties from %s", properties_file)
    return ProjectProperties(
        name=project.name or section.get("name"),
        author=project.author or section.get("author"),
    )


def load_config(
    config_path: Optional[str] = None, env: Optional[str] = None
) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values. When ``env``
    is given, the matching entry of the ``environments`` mapping is
    merged over the base sections.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.
        env: Optional environment name (dev, test, prod).

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig(env=env)

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    environments = raw.pop("environments", None) or {}
    if env and env in environments:
        logger.debug("Applying '%s' environment overrides", env)
        raw = _merge(raw, environments[env] or {})

    paths_data = raw.get("paths", {})
    paths_config = PathsConfig(
        models_path=paths_data.get("models_path", "lib/model/doctrine"),
        yaml_schema_path=paths_data.get("yaml_schema_path", "config/doctrine"),
        cache_dir=paths_data.get("cache_dir", "cache"),
        properties_file=paths_data.get("properties_file", "config/properties.ini"),
        plugin_schema_dirs=paths_data.get("plugin_schema_dirs") or {},
    )

    project_data = raw.get("project", {})
    project = ProjectProperties(
        name=project_data.get("name"),
        author=project_data.get("author"),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        file=logging_data.get("file"),
    )

    return AppConfig(
        builder=_build_builder_options(raw.get("builder", {})),
        paths=paths_config,
        project=project,
        logging=logging_config,
        env=env,
    )
