"""Data models for Doctrine schema definitions.

Defines dataclasses for columns, relations and models as they are read
from a YAML schema. These form the shared vocabulary between the schema
loader and the class generator templates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

_TYPE_RE = re.compile(r"^(\w+)(?:\((\d+)\))?$")

RELATION_MANY = "many"
RELATION_ONE = "one"


def split_alias(value: str) -> tuple[str, str]:
    """Split a ``name as alias`` declaration.

    >>> split_alias("emp_firstname as firstName")
    ('emp_firstname', 'firstName')
    >>> split_alias("id")
    ('id', 'id')
    """
    name, sep, alias = value.partition(" as ")
    name = name.strip()
    return name, alias.strip() if sep else name


def parse_type(value: str) -> tuple[str, Optional[int]]:
    """Split a Doctrine type declaration into type and length.

    >>> parse_type("string(255)")
    ('string', 255)
    """
    match = _TYPE_RE.match(value.strip())
    if not match:
        return value.strip(), None
    length = match.group(2)
    return match.group(1), int(length) if length else None


@dataclass
class ColumnInfo:
    """A table column mapped to a record field.

    Attributes:
        name: Column name in the database.
        field_name: Name of the record property.
        type: Doctrine type without length.
        length: Optional column length.
        options: Remaining column options (primary, notnull, ...).
    """

    name: str
    field_name: str
    type: str
    length: Optional[int] = None
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def declaration(self) -> str:
        """Column declaration passed to ``hasColumn()``."""
        if self.field_name == self.name:
            return self.name
        return f"{self.name} as {self.field_name}"

    @classmethod
    def from_definition(cls, key: str, definition: Any) -> ColumnInfo:
        """Build a column from its schema entry.

        The entry is either a bare type string (``string(255)``) or a
        mapping with ``type`` and optional ``name``/``length`` keys. An
        empty entry is a ``string`` column.
        """
        if definition is None:
            definition = {}
        elif not isinstance(definition, dict):
            definition = {"type": definition}
        options = dict(definition)

        column, field_name = split_alias(str(options.pop("name", key)))
        type_name, length = parse_type(str(options.pop("type", "string")))
        length = options.pop("length", length)
        return cls(
            name=column,
            field_name=field_name,
            type=type_name,
            length=length,
            options=options,
        )


@dataclass
class RelationInfo:
    """A relation from one model to another.

    Attributes:
        alias: Property name of the relation on the record.
        class_name: Related model name.
        type: ``one`` or ``many``.
        local: Local key column.
        foreign: Foreign key column.
        options: Remaining relation options.
    """

    alias: str
    class_name: str
    type: str = RELATION_ONE
    local: Optional[str] = None
    foreign: Optional[str] = None
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def is_many(self) -> bool:
        return self.type == RELATION_MANY

    @property
    def declaration(self) -> str:
        """Relation declaration passed to ``hasOne()``/``hasMany()``."""
        if self.alias == self.class_name:
            return self.class_name
        return f"{self.class_name} as {self.alias}"

    @property
    def definition_options(self) -> dict[str, Any]:
        """Options array passed alongside the declaration."""
        keys = {"local": self.local, "foreign": self.foreign}
        return {**{k: v for k, v in keys.items() if v is not None}, **self.options}

    @classmethod
    def from_definition(cls, alias: str, definition: Optional[dict]) -> RelationInfo:
        options = dict(definition or {})
        options.pop("foreignAlias", None)
        options.pop("foreignType", None)
        return cls(
            alias=alias,
            class_name=options.pop("class", alias),
            type=options.pop("type", RELATION_ONE),
            local=options.pop("local", None),
            foreign=options.pop("foreign", None),
            options=options,
        )


@dataclass
class ModelInfo:
    """A model (record class) defined in the schema.

    Attributes:
        name: Model class name.
        table_name: Database table name.
        package: Optional ``plugin.lib.model.doctrine`` package.
        columns: Mapped columns in declaration order.
        relations: Relations in declaration order.
    """

    name: str
    table_name: str
    package: Optional[str] = None
    columns: list[ColumnInfo] = field(default_factory=list)
    relations: list[RelationInfo] = field(default_factory=list)

    def property_tags(self, collection_type: str) -> list[tuple[str, str]]:
        """Return ``(type, name)`` pairs for the class ``@property`` tags."""
        tags = [(column.type, column.field_name) for column in self.columns]
        tags.extend(
            (collection_type if relation.is_many else relation.class_name, relation.alias)
            for relation in self.relations
        )
        return tags

    @classmethod
    def from_definition(cls, name: str, definition: Optional[dict]) -> ModelInfo:
        definition = definition or {}
        return cls(
            name=name,
            table_name=definition.get("tableName", _tableize(name)),
            package=definition.get("package"),
            columns=[
                ColumnInfo.from_definition(key, value)
                for key, value in (definition.get("columns") or {}).items()
            ],
            relations=[
                RelationInfo.from_definition(alias, value)
                for alias, value in (definition.get("relations") or {}).items()
            ],
        )


def _tableize(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def build_models(definitions: dict[str, dict]) -> list[ModelInfo]:
    """Build ModelInfo objects, adding inverse relations.

    A relation with a ``foreignAlias`` also defines the reverse relation
    on the related model. Its type is ``foreignType`` when given,
    otherwise the opposite side of a ``one`` relation is ``many``.
    """
    models = {name: ModelInfo.from_definition(name, d) for name, d in definitions.items()}

    for name, definition in definitions.items():
        for alias, relation in ((definition or {}).get("relations") or {}).items():
            relation = relation or {}
            foreign_alias = relation.get("foreignAlias")
            target = models.get(relation.get("class", alias))
            if not foreign_alias or target is None:
                continue
            if any(r.alias == foreign_alias for r in target.relations):
                continue

            default_type = (
                RELATION_MANY
                if relation.get("type", RELATION_ONE) == RELATION_ONE
                else RELATION_ONE
            )
            target.relations.append(
                RelationInfo(
                    alias=foreign_alias,
                    class_name=name,
                    type=relation.get("foreignType", default_type),
                    local=relation.get("foreign"),
                    foreign=relation.get("local"),
                )
            )

    return list(models.values())
