# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize diagnostic ``toString`` members."""

import logging
import math
import struct
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from mbgsynth.model import Field, GeneratedClass, Method
from mbgsynth.options import StringOptions

logger = logging.getLogger(__name__)

SUPER_CLASS_SEPARATOR = ", from super class "
SINGLE_PRECISION_TYPES = {"float", "Float"}
FLOAT_MAX = 3.4028234663852886e38


class ToStringSynthesizer:
    """Append a ``toString`` member listing the declared fields of a class.

    The representation reads ``Name [Hash = h, a=1, b=x], from super class ...``
    where the hash and the superclass parts depend on the options.
    """

    def __init__(self, options: StringOptions) -> None:
        self._options = options

    def synthesize(self, target: GeneratedClass) -> Method:
        """Build the ``toString`` method and add it to ``target``.

        Args:
            target: Class being generated.

        Returns:
            The appended method.
        """
        method = Method(name="toString", return_type="String")
        method.add_annotation("@Override")
        method.add_body_line("StringBuilder sb = new StringBuilder();")
        method.add_body_line("sb.append(getClass().getSimpleName());")
        method.add_body_line('sb.append(" [");')
        separator = ""
        if self._options.append_hash:
            method.add_body_line('sb.append("Hash = ").append(hashCode());')
            separator = ", "
        fields = selected_fields(target, self._options)
        for declared in fields:
            method.add_body_line(
                f'sb.append("{separator}{declared.name}=").append({declared.name});'
            )
            separator = ", "
        method.add_body_line('sb.append("]");')
        if self._includes_super(target):
            method.add_body_line(f'sb.append("{SUPER_CLASS_SEPARATOR}");')
            method.add_body_line("sb.append(super.toString());")
        method.add_body_line("return sb.toString();")

        target.add_method(method)
        logger.debug(
            f"Synthesized toString (class={target.simple_name} fields={len(fields)})"
        )
        return method

    def render(
        self,
        target: GeneratedClass,
        values: Mapping[str, Any],
        hash_value: int | None = None,
        super_string: str | None = None,
    ) -> str:
        """Compute what the synthesized ``toString`` returns.

        Args:
            target: Class the method was synthesized for.
            values: Field values keyed by field name. String constants may be
                omitted; their literal initializer is used.
            hash_value: Result of ``hashCode()``; required with ``append_hash``.
            super_string: Result of ``super.toString()``; required when the
                superclass representation is appended.

        Returns:
            The representation text.

        Raises:
            ValueError: If a required hash or superclass value is missing.
        """
        entries: list[str] = []
        if self._options.append_hash:
            if hash_value is None:
                raise ValueError("hash_value is required when appendHashInString is set")
            entries.append(f"Hash = {hash_value}")
        for declared in selected_fields(target, self._options):
            rendered = java_text(_field_value(declared, values), declared.type)
            entries.append(f"{declared.name}={rendered}")
        text = f"{target.simple_name} [{', '.join(entries)}]"
        if self._includes_super(target):
            if super_string is None:
                raise ValueError("super_string is required when useStringFromRoot is set")
            text += SUPER_CLASS_SEPARATOR + super_string
        return text

    def _includes_super(self, target: GeneratedClass) -> bool:
        return self._options.use_string_from_root and target.super_class is not None


def selected_fields(target: GeneratedClass, options: StringOptions) -> list[Field]:
    """Return the declared fields a representation lists, in declaration order."""
    return [
        declared
        for declared in target.fields
        if not (options.ignore_static_fields and declared.is_static)
    ]


def java_text(value: Any, java_type: str = "") -> str:
    """Format a value the way ``StringBuilder.append`` prints it.

    Args:
        value: Python value standing for the Java value.
        java_type: Declared Java type; ``float``/``Float`` values print with
            single precision.

    Returns:
        The appended text.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return floating_text(value, single=java_type in SINGLE_PRECISION_TYPES)
    return str(value)


def floating_text(value: float, single: bool = False) -> str:
    """Return ``Double.toString`` (or ``Float.toString``) of ``value``.

    Magnitudes in ``[1e-3, 1e7)`` print as plain decimals with at least one
    fraction digit, others as ``d.dddE<n>``.
    """
    if single:
        value = _to_single(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"
    digits, exponent = _shortest_digits(abs(value), single)
    sign = "-" if value < 0 else ""
    if -3 <= exponent < 7:
        if exponent >= 0:
            whole = digits[: exponent + 1].ljust(exponent + 1, "0")
            fraction = digits[exponent + 1 :] or "0"
        else:
            whole = "0"
            fraction = "0" * (-exponent - 1) + digits
        return f"{sign}{whole}.{fraction}"
    return f"{sign}{digits[0]}.{digits[1:] or '0'}E{exponent}"


def _to_single(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    if abs(value) > FLOAT_MAX:
        return math.copysign(math.inf, value)
    return struct.unpack(">f", struct.pack(">f", value))[0]


def _shortest_digits(value: float, single: bool) -> tuple[str, int]:
    """Return the shortest round-tripping digits and the exponent of the first one."""
    text = repr(value)
    if single:
        packed = struct.pack(">f", value)
        for precision in range(1, 10):
            candidate = f"{value:.{precision - 1}e}"
            if float(candidate) > FLOAT_MAX:
                continue
            if struct.pack(">f", float(candidate)) == packed:
                text = candidate
                break
    _, digit_tuple, exponent = Decimal(text).as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    leading = len(digits) - len(digits.lstrip("0"))
    first_exponent = len(digits) + int(exponent) - 1 - leading
    return digits.strip("0") or "0", first_exponent


def _field_value(declared: Field, values: Mapping[str, Any]) -> Any:
    if declared.name in values:
        return values[declared.name]
    literal = declared.initialization_string
    if literal is not None and len(literal) >= 2 and literal[0] == literal[-1] == '"':
        return literal[1:-1]
    raise KeyError(declared.name)
