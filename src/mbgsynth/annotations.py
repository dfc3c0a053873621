# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Decide and apply serialization and validation annotations.

Decisions are pure values computed from a column and class-level flags.
Applying a decision appends the annotation texts to a field, accessor or
parameter and registers the imports on the class.
"""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from mbgsynth.column import ColumnDescriptor
from mbgsynth.model import Field, GeneratedClass, Method
from mbgsynth.options import ValidationOptions

logger = logging.getLogger(__name__)

JACKSON_PACKAGE = "com.fasterxml.jackson.annotation"
FIELD_CONSTANT_PREFIX = "FIELD_"
EMAIL_COLUMN_PATTERN = "e(-|_)*mail"

_EMAIL_COLUMN_RE = re.compile(EMAIL_COLUMN_PATTERN)


class Annotatable(Protocol):
    """Java element accepting annotations."""

    def add_annotation(self, annotation: str) -> None:
        """Append one annotation text."""


@dataclass(frozen=True)
class Annotation:
    """Represent one annotation usage.

    Attributes:
        name: Simple annotation name.
        parameters: Ordered ``(name, expression)`` pairs.
    """

    name: str
    parameters: tuple[tuple[str, str], ...] = ()

    def render(self) -> str:
        """Return the Java text, ``value`` alone being written positionally."""
        if not self.parameters:
            return f"@{self.name}"
        if len(self.parameters) == 1 and self.parameters[0][0] == "value":
            return f"@{self.name}({self.parameters[0][1]})"
        arguments = ", ".join(f"{key} = {value}" for key, value in self.parameters)
        return f"@{self.name}({arguments})"


@dataclass(frozen=True)
class AnnotationDecision:
    """Represent the annotations one element receives and their imports."""

    annotations: tuple[Annotation, ...] = ()
    imports: frozenset[str] = frozenset()

    def apply(self, element: Annotatable, target: GeneratedClass) -> None:
        """Append the annotations to ``element`` and the imports to ``target``."""
        for type_name in sorted(self.imports):
            target.add_imported_type(type_name)
        for annotation in self.annotations:
            element.add_annotation(annotation.render())


def field_constant_name(field_name: str) -> str:
    """Return the name of the constant holding ``field_name``."""
    return FIELD_CONSTANT_PREFIX + field_name.upper()


def field_name_constant(field_name: str) -> Field:
    """Build the ``public static final String`` constant naming a field."""
    return Field(
        name=field_constant_name(field_name),
        type="String",
        visibility="public",
        is_static=True,
        is_final=True,
        initialization_string=f'"{field_name}"',
    )


def _jackson(name: str, field_name: str) -> AnnotationDecision:
    return AnnotationDecision(
        annotations=(Annotation(name, (("value", field_constant_name(field_name)),)),),
        imports=frozenset({f"{JACKSON_PACKAGE}.{name}"}),
    )


def decide_getter_serialization(column: ColumnDescriptor) -> AnnotationDecision:
    return _jackson("JsonGetter", column.name)


def decide_setter_serialization(
    column: ColumnDescriptor, is_immutable: bool
) -> AnnotationDecision:
    """Decide the setter annotation; immutable classes get none."""
    if is_immutable:
        return AnnotationDecision()
    return _jackson("JsonSetter", column.name)


def decide_validation(
    column: ColumnDescriptor, options: ValidationOptions
) -> AnnotationDecision:
    """Decide the Bean Validation constraints of one column.

    Args:
        column: Column to decide for.
        options: Validation options.

    Returns:
        Constraints in order ``NotNull``, ``NotBlank``, ``Size``, ``Email``.
    """
    annotations: list[Annotation] = []
    if not column.nullable and not column.is_identity and not column.is_character:
        annotations.append(Annotation("NotNull"))

    if column.is_character:
        if not column.nullable:
            annotations.append(Annotation("NotBlank"))
        if column.length is not None:
            annotations.append(Annotation("Size", (("max", str(column.length)),)))
        else:
            logger.debug(
                f"Character column declares no length; no size constraint "
                f"(column={column.name})"
            )
        if is_email_column(
            column.raw_column_name or column.name,
            legacy_substring_match=options.legacy_email_substring_match,
        ):
            annotations.append(Annotation("Email"))

    return AnnotationDecision(
        annotations=tuple(annotations),
        imports=frozenset(
            f"{options.validation_package}.{annotation.name}"
            for annotation in annotations
        ),
    )


def is_email_column(column_name: str, legacy_substring_match: bool = False) -> bool:
    """Check whether a column name designates an email address.

    Args:
        column_name: Raw database column name.
        legacy_substring_match: Look for the pattern text itself instead of
            matching it, as earlier releases did.

    Returns:
        True when the column should carry an email constraint.
    """
    lowered = column_name.lower()
    if legacy_substring_match:
        return EMAIL_COLUMN_PATTERN in lowered
    return _EMAIL_COLUMN_RE.search(lowered) is not None


class SerializationAnnotator:
    """Apply Jackson annotations to generated members."""

    def add_field_constant(self, declared: Field, target: GeneratedClass) -> Field:
        """Add the constant naming ``declared`` to ``target``."""
        constant = field_name_constant(declared.name)
        target.add_field(constant)
        return constant

    def annotate_getter(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> None:
        decide_getter_serialization(column).apply(method, target)

    def annotate_setter(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> None:
        decide_setter_serialization(column, target.is_immutable).apply(method, target)

    def annotate_constructor(self, target: GeneratedClass) -> Method | None:
        """Mark the constructor of immutable or constructor-based classes.

        Args:
            target: Class being generated.

        Returns:
            The annotated constructor; ``None`` when the class needs no
            annotation or declares no constructor.
        """
        if not (target.is_immutable or target.is_constructor_based):
            return None
        constructors = target.constructors()
        if not constructors:
            logger.debug(
                f"No constructor to annotate (class={target.simple_name})"
            )
            return None
        constructor = constructors[0]
        AnnotationDecision(
            annotations=(Annotation("JsonCreator"),),
            imports=frozenset({f"{JACKSON_PACKAGE}.JsonCreator"}),
        ).apply(constructor, target)
        for parameter in constructor.parameters:
            _jackson("JsonProperty", parameter.name).apply(parameter, target)
        return constructor


class ValidationAnnotator:
    """Apply Bean Validation constraints to fields or to their getters."""

    def __init__(self, options: ValidationOptions) -> None:
        self._options = options

    def annotate_field(
        self, declared: Field, target: GeneratedClass, column: ColumnDescriptor
    ) -> None:
        if self._options.annotate_accessors:
            return
        decide_validation(column, self._options).apply(declared, target)

    def annotate_getter(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> None:
        if not self._options.annotate_accessors:
            return
        decide_validation(column, self._options).apply(method, target)
