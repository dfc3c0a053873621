# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Mutable in-memory model of one generated Java class."""

import logging
from dataclasses import dataclass, field
from typing import Literal

logger = logging.getLogger(__name__)

Visibility = Literal["public", "protected", "private", "default"]

_INDENT = "    "


@dataclass
class Parameter:
    """Represent one method or constructor parameter."""

    name: str
    type: str
    annotations: list[str] = field(default_factory=list)

    def add_annotation(self, annotation: str) -> None:
        self.annotations.append(annotation)


@dataclass
class Field:
    """Represent one field declaration.

    Attributes:
        name: Field name.
        type: Declared Java type.
        visibility: Java visibility keyword.
        is_static: Whether the field is ``static``.
        is_final: Whether the field is ``final``.
        initialization_string: Initializer expression, if any.
        annotations: Annotation texts, in declaration order.
    """

    name: str
    type: str
    visibility: Visibility = "private"
    is_static: bool = False
    is_final: bool = False
    initialization_string: str | None = None
    annotations: list[str] = field(default_factory=list)

    def add_annotation(self, annotation: str) -> None:
        self.annotations.append(annotation)

    def declaration(self) -> str:
        """Return the Java declaration statement of this field."""
        parts = _modifiers(self.visibility)
        if self.is_static:
            parts.append("static")
        if self.is_final:
            parts.append("final")
        parts.extend([self.type, self.name])
        text = " ".join(parts)
        if self.initialization_string is not None:
            text += f" = {self.initialization_string}"
        return text + ";"


@dataclass
class Method:
    """Represent one method or constructor.

    Attributes:
        name: Method name; the simple class name for constructors.
        return_type: Java return type; ``None`` for constructors and ``void``.
        visibility: Java visibility keyword.
        parameters: Ordered parameters.
        body_lines: Unindented Java statements of the body.
        annotations: Annotation texts, in declaration order.
        is_constructor: Whether this member is a constructor.
    """

    name: str
    return_type: str | None = None
    visibility: Visibility = "public"
    parameters: list[Parameter] = field(default_factory=list)
    body_lines: list[str] = field(default_factory=list)
    annotations: list[str] = field(default_factory=list)
    is_constructor: bool = False

    def add_annotation(self, annotation: str) -> None:
        self.annotations.append(annotation)

    def add_body_line(self, line: str) -> None:
        self.body_lines.append(line)

    def add_parameter(self, parameter: Parameter) -> None:
        self.parameters.append(parameter)

    def signature(self) -> str:
        """Return the Java declaration line without the opening brace."""
        parts = _modifiers(self.visibility)
        if not self.is_constructor:
            parts.append(self.return_type or "void")
        params = ", ".join(
            " ".join([*parameter.annotations, parameter.type, parameter.name])
            for parameter in self.parameters
        )
        parts.append(f"{self.name}({params})")
        return " ".join(parts)


@dataclass
class GeneratedClass:
    """Represent the class a host pipeline is generating.

    Synthesis engines append members, annotations and imports; they never
    remove or reorder what is already present.

    Attributes:
        type_name: Fully qualified Java type name.
        fields: Field declarations in declaration order.
        methods: Methods and constructors in declaration order.
        imported_types: Fully qualified names imported by the class.
        super_class: Fully qualified name of the superclass, if any.
        is_immutable: Whether the class exposes no setters.
        is_constructor_based: Whether instances are populated by a constructor.
    """

    type_name: str
    fields: list[Field] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    imported_types: set[str] = field(default_factory=set)
    super_class: str | None = None
    is_immutable: bool = False
    is_constructor_based: bool = False

    @property
    def simple_name(self) -> str:
        return self.type_name.rsplit(".", 1)[-1]

    @property
    def package_name(self) -> str:
        if "." not in self.type_name:
            return ""
        return self.type_name.rsplit(".", 1)[0]

    def add_field(self, new_field: Field) -> None:
        self.fields.append(new_field)

    def add_method(self, method: Method) -> None:
        self.methods.append(method)

    def add_imported_type(self, type_name: str) -> None:
        """Register an import; ``java.lang`` and same-package types are implicit."""
        package = type_name.rsplit(".", 1)[0] if "." in type_name else ""
        if package in {"", "java.lang", self.package_name}:
            return
        self.imported_types.add(type_name)

    def constructors(self) -> list[Method]:
        return [method for method in self.methods if method.is_constructor]

    def find_field(self, name: str) -> Field | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    def format(self) -> str:
        """Render the class as Java source text.

        Returns:
            Java compilation unit for previews and diagnostics.
        """
        lines: list[str] = []
        if self.package_name:
            lines.extend([f"package {self.package_name};", ""])
        if self.imported_types:
            lines.extend(f"import {name};" for name in sorted(self.imported_types))
            lines.append("")

        header = f"public class {self.simple_name}"
        if self.super_class:
            header += f" extends {self.super_class.rsplit('.', 1)[-1]}"
        lines.append(header + " {")

        members: list[list[str]] = []
        for declared in self.fields:
            members.append(
                [_INDENT + text for text in [*declared.annotations, declared.declaration()]]
            )
        for method in self.methods:
            block = [_INDENT + text for text in method.annotations]
            block.append(_INDENT + method.signature() + " {")
            block.extend(_indent_body(method.body_lines, depth=2))
            block.append(_INDENT + "}")
            members.append(block)
        for index, block in enumerate(members):
            if index:
                lines.append("")
            lines.extend(block)

        lines.append("}")
        return "\n".join(lines) + "\n"


def _modifiers(visibility: Visibility) -> list[str]:
    return [] if visibility == "default" else [visibility]


def _indent_body(body_lines: list[str], depth: int) -> list[str]:
    """Indent Java statements following their brace nesting."""
    rendered: list[str] = []
    level = depth
    for line in body_lines:
        if line.startswith("}"):
            level = max(depth, level - 1)
        rendered.append(_INDENT * level + line)
        if line.endswith("{"):
            level += 1
    return rendered
