# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CLI verification harness driving the synthesis plugins over sample tables."""

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Literal, TextIO, cast

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style

from mbgsynth.column import SEMANTIC_TYPES, ColumnDescriptor, SemanticType
from mbgsynth.model import Field, GeneratedClass, Method, Parameter
from mbgsynth.plugins import PLUGIN_FACTORIES, PluginChain, build_plugin
from mbgsynth.primes import PrimeSequence, PrimeSpaceExhaustedError

logger = logging.getLogger(__name__)

ClassKind = Literal["base", "blobs", "primary-key"]

CLASS_KINDS: set[str] = {"base", "blobs", "primary-key"}
DEFAULT_PLUGINS: list[str] = ["equals-hash-code", "to-string", "json", "validation"]


class HarnessInputError(RuntimeError):
    """Represent a malformed table description."""


@dataclass(frozen=True)
class ClassSpec:
    """Describe one class the harness generates.

    Attributes:
        type_name: Fully qualified class name.
        kind: Which class-level hook the class triggers.
        super_class: Fully qualified superclass name, if any.
        is_immutable: Whether the class has no setters.
        is_constructor_based: Whether the class is populated by a constructor.
        columns: Columns of the class in declaration order.
    """

    type_name: str
    kind: ClassKind
    super_class: str | None
    is_immutable: bool
    is_constructor_based: bool
    columns: list[ColumnDescriptor]


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="mbgsynth")
    parser.add_argument("--input", required=True, help="JSON table description.")
    parser.add_argument(
        "--plugin",
        action="append",
        choices=sorted(PLUGIN_FACTORIES),
        help="Plugin to run, in order. Repeatable; defaults to all plugins.",
    )
    parser.add_argument(
        "--property",
        action="append",
        default=[],
        help="Plugin property as key=value. Repeatable.",
    )
    parser.add_argument(
        "--format",
        choices=("java", "json"),
        default="java",
        help="Output format.",
    )
    parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the harness.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2

    try:
        properties = parse_properties(args.property)
    except ValueError as exc:
        logger.warning(f"Invalid property argument (error={exc})")
        stderr.write(f"Invalid property: {exc}\n")
        return 2

    input_path = Path(args.input)
    try:
        specs = load_class_specs(input_path)
    except (OSError, HarnessInputError) as exc:
        logger.warning(f"Cannot load table description (path={input_path} error={exc})")
        stderr.write(f"Cannot load table description: {exc}\n")
        return 2

    prime_source = PrimeSequence()
    try:
        chain = PluginChain(
            [
                build_plugin(name, prime_source, properties)
                for name in (args.plugin or DEFAULT_PLUGINS)
            ]
        )
    except ValueError as exc:
        logger.warning(f"Invalid plugin configuration (error={exc})")
        stderr.write(f"Invalid plugin configuration: {exc}\n")
        return 2

    try:
        classes = [generate_class(spec, chain) for spec in specs]
    except PrimeSpaceExhaustedError as exc:
        stderr.write(f"{exc}\n")
        return 1
    logger.info(
        f"Synthesis completed (path={input_path} classes={len(classes)} "
        f"last_prime={prime_source.last_prime})"
    )

    if args.format == "json":
        payload = json.dumps(
            {"classes": [_class_payload(target) for target in classes]},
            indent=2,
            sort_keys=True,
        )
        if args.output:
            try:
                output_path = Path(args.output)
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(payload, encoding="utf-8")
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            console = Console(file=stdout, force_terminal=False, color_system="truecolor")
            console.print(payload, markup=False, highlight=False, soft_wrap=True)
    else:
        _write_java(classes=classes, stdout=stdout)
    return 0


def parse_properties(pairs: list[str]) -> dict[str, str]:
    """Parse ``key=value`` arguments into a property mapping.

    Args:
        pairs: Raw ``--property`` values.

    Returns:
        Property mapping; later keys override earlier ones.

    Raises:
        ValueError: If an argument has no ``=`` or an empty key.
    """
    properties: dict[str, str] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"expected key=value, got {pair!r}")
        properties[key.strip()] = value.strip()
    return properties


def load_class_specs(input_path: Path) -> list[ClassSpec]:
    """Load class descriptions from a JSON file.

    Args:
        input_path: File holding ``{"classes": [...]}``.

    Returns:
        Parsed class descriptions.

    Raises:
        OSError: If the file cannot be read.
        HarnessInputError: If the content is not a valid description.
    """
    try:
        document = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise HarnessInputError(f"invalid JSON: {exc}") from exc
    if not isinstance(document, dict) or not isinstance(document.get("classes"), list):
        raise HarnessInputError("expected an object with a 'classes' list")
    return [_parse_class(entry) for entry in document["classes"]]


def _parse_class(entry: Any) -> ClassSpec:
    if not isinstance(entry, dict) or not isinstance(entry.get("type"), str):
        raise HarnessInputError("each class needs a 'type' string")
    kind = entry.get("kind", "base")
    if kind not in CLASS_KINDS:
        raise HarnessInputError(f"unsupported class kind: {kind}")
    owner = entry["type"]
    columns = entry.get("columns", [])
    if not isinstance(columns, list):
        raise HarnessInputError(f"'columns' of {owner} must be a list")
    super_class = entry.get("super_class")
    if super_class is not None and not isinstance(super_class, str):
        raise HarnessInputError(f"super_class of {owner} must be a string")
    return ClassSpec(
        type_name=owner,
        kind=cast(ClassKind, kind),
        super_class=super_class,
        is_immutable=_flag(entry, "immutable", False, owner),
        is_constructor_based=_flag(entry, "constructor_based", False, owner),
        columns=[_parse_column(column) for column in columns],
    )


def _parse_column(entry: Any) -> ColumnDescriptor:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise HarnessInputError("each column needs a 'name' string")
    owner = f"column {entry['name']}"
    semantic_type = entry.get("semantic_type")
    if semantic_type not in SEMANTIC_TYPES:
        raise HarnessInputError(
            f"unsupported semantic type of column {entry['name']}: {semantic_type}"
        )
    element_type = entry.get("array_element_type", "byte")
    if element_type not in SEMANTIC_TYPES:
        raise HarnessInputError(
            f"unsupported array element type of column {entry['name']}: {element_type}"
        )
    length = entry.get("length")
    if length is not None and (not isinstance(length, int) or isinstance(length, bool)):
        raise HarnessInputError(f"length of column {entry['name']} must be an integer")
    return ColumnDescriptor(
        name=entry["name"],
        semantic_type=cast(SemanticType, semantic_type),
        nullable=_flag(entry, "nullable", True, owner),
        is_identity=_flag(entry, "is_identity", False, owner),
        length=length,
        raw_column_name=_text(entry, "raw_column_name", entry["name"], owner),
        java_type=_text(entry, "java_type", "", owner),
        array_element_type=cast(SemanticType, element_type),
    )


def _flag(entry: dict[str, Any], key: str, default: bool, owner: str) -> bool:
    value = entry.get(key, default)
    if not isinstance(value, bool):
        raise HarnessInputError(f"{key} of {owner} must be a JSON boolean")
    return value


def _text(entry: dict[str, Any], key: str, default: str, owner: str) -> str:
    value = entry.get(key, default)
    if not isinstance(value, str):
        raise HarnessInputError(f"{key} of {owner} must be a string")
    return value

def generate_class(spec: ClassSpec, chain: PluginChain) -> GeneratedClass:
    """Build a class the way a generator host does and run the plugins on it.

    Args:
        spec: Class description.
        chain: Configured plugins.

    Returns:
        The generated class model.
    """
    target = GeneratedClass(
        type_name=spec.type_name,
        super_class=spec.super_class,
        is_immutable=spec.is_immutable,
        is_constructor_based=spec.is_constructor_based,
    )
    if spec.is_immutable or spec.is_constructor_based:
        constructor = Method(name=target.simple_name, is_constructor=True)
        for column in spec.columns:
            constructor.add_parameter(Parameter(name=column.name, type=column.declared_type))
            constructor.add_body_line(f"this.{column.name} = {column.name};")
        target.add_method(constructor)

    for column in spec.columns:
        declared = Field(name=column.name, type=column.declared_type)
        if chain.model_field_generated(declared, target, column):
            target.add_field(declared)

    for column in spec.columns:
        getter = Method(
            name=column.getter_name,
            return_type=column.declared_type,
            body_lines=[f"return {column.name};"],
        )
        if chain.model_getter_method_generated(getter, target, column):
            target.add_method(getter)
        if spec.is_immutable:
            continue
        setter = Method(
            name=column.setter_name,
            parameters=[Parameter(name=column.name, type=column.declared_type)],
            body_lines=[f"this.{column.name} = {column.name};"],
        )
        if chain.model_setter_method_generated(setter, target, column):
            target.add_method(setter)

    if spec.kind == "blobs":
        chain.model_record_with_blobs_class_generated(target, spec.columns)
    elif spec.kind == "primary-key":
        chain.model_primary_key_class_generated(target, spec.columns)
    else:
        chain.model_base_record_class_generated(target, spec.columns)
    return target


def _class_payload(target: GeneratedClass) -> dict[str, Any]:
    payload = asdict(target)
    payload["imported_types"] = sorted(target.imported_types)
    return payload


def _write_java(classes: list[GeneratedClass], stdout: TextIO) -> None:
    """Write generated classes as Java source.

    Args:
        classes: Generated class models.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    for target in classes:
        console.rule(target.type_name, style=Style(color="cyan"), characters="-")
        console.print(target.format(), markup=False, highlight=False, soft_wrap=True)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
