# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Read-only column metadata handed over by the host pipeline."""

from dataclasses import dataclass
from typing import Literal, get_args

SemanticType = Literal[
    "bool",
    "byte",
    "char",
    "double",
    "float",
    "int",
    "long",
    "short",
    "array",
    "stringlike",
    "object",
]

SEMANTIC_TYPES: frozenset[str] = frozenset(get_args(SemanticType))

PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {"bool", "byte", "char", "double", "float", "int", "long", "short"}
)

_JAVA_TYPE_NAMES: dict[str, str] = {
    "bool": "boolean",
    "byte": "byte",
    "char": "char",
    "double": "double",
    "float": "float",
    "int": "int",
    "long": "long",
    "short": "short",
    "stringlike": "String",
    "object": "Object",
}


@dataclass(frozen=True)
class ColumnDescriptor:
    """Describe one table column translated into a generated field.

    Attributes:
        name: Java property name of the generated field.
        semantic_type: Kind of the generated field type.
        nullable: Whether the column accepts SQL ``NULL``.
        is_identity: Whether the data store assigns the value (auto increment).
        length: Declared column length, when the column declares one.
        raw_column_name: Column name as found in the database.
        java_type: Declared Java type; derived from ``semantic_type`` when empty.
        array_element_type: Element kind of ``array`` columns.
    """

    name: str
    semantic_type: SemanticType
    nullable: bool = True
    is_identity: bool = False
    length: int | None = None
    raw_column_name: str = ""
    java_type: str = ""
    array_element_type: SemanticType = "byte"

    @property
    def is_primitive(self) -> bool:
        return self.semantic_type in PRIMITIVE_TYPES

    @property
    def is_character(self) -> bool:
        return self.semantic_type == "stringlike"

    @property
    def declared_type(self) -> str:
        """Return the Java type used in generated declarations."""
        if self.java_type:
            return self.java_type
        if self.semantic_type == "array":
            element = _JAVA_TYPE_NAMES.get(self.array_element_type, "Object")
            return f"{element}[]"
        return _JAVA_TYPE_NAMES.get(self.semantic_type, "Object")

    @property
    def getter_name(self) -> str:
        return getter_method_name(self.name, is_boolean=self.semantic_type == "bool")

    @property
    def setter_name(self) -> str:
        return setter_method_name(self.name)


def getter_method_name(property_name: str, is_boolean: bool = False) -> str:
    """Build a JavaBeans getter name.

    Args:
        property_name: Java property name.
        is_boolean: Whether the property is a primitive ``boolean``.

    Returns:
        ``isX`` for primitive booleans, ``getX`` otherwise.
    """
    prefix = "is" if is_boolean else "get"
    return prefix + _capitalize_property(property_name)


def setter_method_name(property_name: str) -> str:
    """Build a JavaBeans setter name."""
    return "set" + _capitalize_property(property_name)


def _capitalize_property(property_name: str) -> str:
    """Upper-case the first letter unless the second one already is.

    ``xCoord`` keeps its lower-case first letter so that introspection maps
    ``getxCoord`` back to ``xCoord``.
    """
    if not property_name or not property_name[0].islower():
        return property_name
    if len(property_name) > 1 and property_name[1].isupper():
        return property_name
    return property_name[0].upper() + property_name[1:]
