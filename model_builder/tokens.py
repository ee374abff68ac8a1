"""Placeholder tokens written by the generator and their replacements."""

from typing import Any, Mapping, Optional

from model_builder.utils.config import (
    DEFAULT_PROJECT_AUTHOR,
    DEFAULT_PROJECT_NAME,
    ProjectProperties,
)
from model_builder.utils.filesystem import TokenMap

PACKAGE_TOKEN = "##PACKAGE##"
SUBPACKAGE_TOKEN = "##SUBPACKAGE##"
AUTHOR_TOKEN = "##NAME##"
EMAIL_TOKEN = " <##EMAIL##>"
EMPTY_BODY = "{\n\n}"
COMPACT_BODY = "{\n}\n"

DEFAULT_SUBPACKAGE = "model"


def build_token_map(project: ProjectProperties) -> TokenMap:
    """Build the ordered token map applied to stub and base classes.

    Args:
        project: Project name and author; missing values fall back to
            the framework defaults.

    Returns:
        Ordered ``(search, replace)`` pairs.
    """
    return [
        (PACKAGE_TOKEN, project.name or DEFAULT_PROJECT_NAME),
        (SUBPACKAGE_TOKEN, DEFAULT_SUBPACKAGE),
        (AUTHOR_TOKEN, project.author or DEFAULT_PROJECT_AUTHOR),
        (EMAIL_TOKEN, ""),
        (EMPTY_BODY, COMPACT_BODY),
    ]


def plugin_name(definition: Optional[Mapping[str, Any]]) -> str:
    """Return the plugin segment of a model's ``package`` attribute.

    ``orangehrmPimPlugin.lib.model.doctrine`` yields
    ``orangehrmPimPlugin``; a model without a package yields ``""``.
    """
    package = (definition or {}).get("package")
    if not package:
        return ""
    # a package without a dot has no plugin segment
    return package[: package.find(".")] if "." in package else ""


def subpackage_for(definition: Optional[Mapping[str, Any]]) -> str:
    """Derive the phpdoc subpackage for one model definition.

    The plugin segment is stripped of its ``orangehrm`` prefix and
    ``Plugin`` suffix; what remains names the module, giving
    ``model\\pim\\base`` for ``orangehrmPimPlugin`` and ``model\\base``
    for project models.
    """
    module = plugin_name(definition).replace("orangehrm", "").replace("Plugin", "")
    if module:
        return "model\\" + module.lower() + "\\base"
    return "model\\base"


def subpackage_tokens(definition: Optional[Mapping[str, Any]]) -> TokenMap:
    """Token map applied to one model's base class during annotation."""
    return [(SUBPACKAGE_TOKEN, subpackage_for(definition))]
