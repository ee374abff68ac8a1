"""CLI commands for the Doctrine model builder.

Provides the Click-based command group 'doctrine' with the
'build-model' subcommand.
"""

import logging
from typing import Optional

import click

from model_builder import __version__
from model_builder.errors import ModelBuilderError
from model_builder.generators.model_generator import TemplateModelGenerator
from model_builder.schema.loader import YamlSchemaLoader
from model_builder.task import BuildModelTask
from model_builder.utils.autoload import AutoloadReloader
from model_builder.utils.config import load_config
from model_builder.utils.finder import FileFinder
from model_builder.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="doctrine-build-model")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.yaml.",
)
@click.pass_context
def doctrine(ctx: click.Context, config_path: Optional[str]) -> None:
    """Doctrine Model Builder: generate PHP model classes from YAML schemas."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@doctrine.command("build-model")
@click.option("--application", default=None, help="The application name.")
@click.option("--env", default="dev", show_default=True, help="The environment.")
@click.option(
    "--models-path", type=click.Path(), default=None, help="Models root directory."
)
@click.option(
    "--schema", type=click.Path(), default=None, help="Schema file or directory."
)
@click.pass_context
def build_model(
    ctx: click.Context,
    application: Optional[str],
    env: str,
    models_path: Optional[str],
    schema: Optional[str],
) -> None:
    """Creates classes for the current model.

    Reads the schema information in config/doctrine/*.yml from the
    project and all configured plugins. Model classes are created in
    lib/model/doctrine. Custom classes are never overridden; only files
    in lib/model/doctrine/base are replaced.
    """
    config = load_config(ctx.obj.get("config_path"), env=env)
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )

    if models_path:
        config.paths.models_path = models_path
    if schema:
        config.paths.yaml_schema_path = schema
    logger.debug(
        "Building models in %s from %s",
        config.paths.models_path,
        config.paths.yaml_schema_path,
    )

    loader = YamlSchemaLoader()
    finder = FileFinder()
    task = BuildModelTask(
        config,
        schema_loader=loader,
        generator=TemplateModelGenerator(config.builder, loader=loader),
        finder=finder,
        autoload_reloader=AutoloadReloader(config.paths.cache_dir, finder),
    )

    try:
        task.execute(application=application, env=env)
    except ModelBuilderError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Model classes written to {config.paths.models_path}")
