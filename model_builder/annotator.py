"""Accessor documentation for generated Doctrine base classes.

Reads the ``@property`` tags the generator writes into a base class
docblock and adds matching ``@method`` getter and setter lines below
them, column-aligned, so IDEs can resolve the record's magic accessors.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from model_builder.utils.filesystem import TokenMap, apply_tokens
from model_builder.utils.inflector import camelize

logger = logging.getLogger(__name__)

PROPERTY_RE = re.compile(r"@property (\w+) \$(\w+)")

DOC_PREFIX = " * "


@dataclass
class PropertyDeclaration:
    """A property declared by an ``@property TYPE $NAME`` tag."""

    name: str
    type: str


@dataclass
class AccessorDocLine:
    """One ``@method`` line describing a getter or a setter.

    Attributes:
        return_type: Type shown in the type column.
        accessor: Accessor call, e.g. ``getFirstName()``.
        description: Trailing human-readable description.
    """

    return_type: str
    accessor: str
    description: str

    def render(self, type_width: int, name_width: int) -> str:
        """Render the line with fixed-width type and accessor columns.

        ``name_width`` excludes the three-letter get/set prefix.
        """
        prefix, call = self.accessor[:3], self.accessor[3:]
        return (
            f"@method {self.return_type:<{type_width}} "
            f"{prefix}{call:<{name_width}} {self.description}"
        )


class AccessorDocAnnotator:
    """Injects getter/setter ``@method`` documentation into a base class.

    Args:
        model_name: Record class name, used as the setter return type.
        collection_type: Property type marking a to-many relation.
        line_separator: Line break used between inserted lines.
    """

    def __init__(
        self,
        model_name: str,
        collection_type: str = "Doctrine_Collection",
        line_separator: str = os.linesep,
    ) -> None:
        self.model_name = model_name
        self.collection_type = collection_type
        self.line_separator = line_separator

    def extract(self, code: str) -> tuple[dict[str, str], Optional[re.Match]]:
        """Collect the declared properties and the insertion anchor.

        A property name declared twice keeps its first position and its
        last type. The anchor is the last match in the source, whatever
        property it declares.

        Args:
            code: Full text of the class file.

        Returns:
            Ordered ``name -> type`` mapping and the anchor match, or an
            empty mapping and None when no tag is present.
        """
        properties: dict[str, str] = {}
        anchor = None
        for match in PROPERTY_RE.finditer(code):
            properties[match.group(2)] = match.group(1)
            anchor = match
        return properties, anchor

    def declarations(self, properties: dict[str, str]) -> list[PropertyDeclaration]:
        """Wrap an extracted mapping as PropertyDeclaration objects."""
        return [PropertyDeclaration(name, type_) for name, type_ in properties.items()]

    def synthesize(self, properties: dict[str, str]) -> list[str]:
        """Build the aligned getter and setter lines.

        The type column is as wide as the longest property type or the
        model name; the accessor column is two characters wider than the
        longest camelized property name. All getters come first, then all
        setters, each group in declaration order.

        Args:
            properties: Ordered ``name -> type`` mapping.

        Returns:
            The rendered ``@method`` lines, without comment prefix.
        """
        if not properties:
            return []

        declarations = self.declarations(properties)
        type_width = max(len(t) for t in [*properties.values(), self.model_name])
        name_width = max(len(camelize(d.name)) for d in declarations) + 2

        getters = []
        setters = []
        for declaration in declarations:
            camelized = camelize(declaration.name)
            kind = "collection" if declaration.type == self.collection_type else "value"

            getters.append(
                AccessorDocLine(
                    declaration.type,
                    f"get{camelized}()",
                    f"Returns the current record's \"{declaration.name}\" {kind}",
                )
            )
            setters.append(
                AccessorDocLine(
                    self.model_name,
                    f"set{camelized}()",
                    f"Sets the current record's \"{declaration.name}\" {kind}",
                )
            )

        return [line.render(type_width, name_width) for line in getters + setters]

    def render_block(self, lines: list[str]) -> str:
        """Join lines as docblock continuation lines."""
        return DOC_PREFIX + (self.line_separator + DOC_PREFIX).join(lines)

    def inject(self, code: str, anchor: re.Match, lines: list[str]) -> str:
        """Insert the documentation block right after the anchor match.

        One blank docblock line separates the anchor from the block.
        Nothing is removed from the source.
        """
        eol = self.line_separator
        position = anchor.end()
        insertion = eol + DOC_PREFIX + eol + self.render_block(lines)
        return code[:position] + insertion + code[position:]

    def annotate(self, code: str, tokens: TokenMap = ()) -> Optional[str]:
        """Annotate class source text.

        Args:
            code: Full text of the class file.
            tokens: Ordered token map applied after the injection.

        Returns:
            The annotated text, or None when the source declares no
            properties.
        """
        properties, anchor = self.extract(code)
        if anchor is None:
            return None

        code = self.inject(code, anchor, self.synthesize(properties))
        return apply_tokens(code, tokens)

    def annotate_file(self, file_path: str, tokens: TokenMap = ()) -> bool:
        """Annotate a class file in place.

        Args:
            file_path: Path to the generated base class.
            tokens: Ordered token map applied after the injection.

        Returns:
            True if the file was rewritten, False if it declares no
            properties and was left untouched.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read or written.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        # newline="" keeps the generator's line endings byte-for-byte
        with open(path, encoding="utf-8", newline="") as f:
            code = f.read()

        annotated = self.annotate(code, tokens)
        if annotated is None:
            logger.debug("No @property tags in %s, skipping", path)
            return False

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(annotated)
        logger.debug("Annotated %s", path)
        return True
