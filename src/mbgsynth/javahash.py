# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Python evaluation of the Java hashing primitives used by generated code.

These helpers compute what the JVM computes, including 32-bit wrap-around, so
the value of a synthesized ``hashCode`` can be checked without running Java.
"""

import math
import struct
from collections.abc import Sequence
from typing import Any

_FLOAT_NAN_BITS = 0x7FC00000
_DOUBLE_NAN_BITS = 0x7FF8000000000000
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF

TRUE_HASH = 1231
FALSE_HASH = 1237


def to_int32(value: int) -> int:
    """Wrap an integer to Java ``int`` range."""
    return ((value + 2**31) % 2**32) - 2**31


def to_int64(value: int) -> int:
    """Wrap an integer to Java ``long`` range."""
    return ((value + 2**63) % 2**64) - 2**63


def boolean_hash(value: bool) -> int:
    return TRUE_HASH if value else FALSE_HASH


def long_hash(value: int) -> int:
    """Return ``(int) (value ^ (value >>> 32))``."""
    unsigned = to_int64(value) & _UINT64_MASK
    return to_int32(unsigned ^ (unsigned >> 32))


def float_to_int_bits(value: float) -> int:
    """Return ``Float.floatToIntBits(value)``."""
    if math.isnan(value):
        return to_int32(_FLOAT_NAN_BITS)
    return struct.unpack(">i", struct.pack(">f", value))[0]


def double_to_long_bits(value: float) -> int:
    """Return ``Double.doubleToLongBits(value)``."""
    if math.isnan(value):
        return _DOUBLE_NAN_BITS
    return struct.unpack(">q", struct.pack(">d", value))[0]


def double_hash(value: float) -> int:
    return long_hash(double_to_long_bits(value))


def char_code(value: int | str) -> int:
    """Return the UTF-16 code unit of a Java ``char``."""
    if isinstance(value, str):
        if len(value) != 1 or ord(value) > 0xFFFF:
            raise ValueError(f"Not a single UTF-16 code unit: {value!r}")
        return ord(value)
    return value & 0xFFFF


def string_hash(value: str) -> int:
    """Return ``String.hashCode()`` over the UTF-16 code units of ``value``."""
    encoded = value.encode("utf-16-be", "surrogatepass")
    result = 0
    for index in range(0, len(encoded), 2):
        unit = (encoded[index] << 8) | encoded[index + 1]
        result = to_int32(31 * result + unit)
    return result


def primitive_hash(value: Any, kind: str) -> int:
    """Return the ``int`` a primitive of ``kind`` contributes to a hash.

    Args:
        value: Python value standing for the Java primitive.
        kind: Semantic type of the primitive.

    Returns:
        The Java contribution of the value.

    Raises:
        ValueError: If ``kind`` is not a primitive kind.
    """
    if kind == "bool":
        return boolean_hash(bool(value))
    if kind == "byte":
        return ((int(value) + 2**7) % 2**8) - 2**7
    if kind == "short":
        return ((int(value) + 2**15) % 2**16) - 2**15
    if kind == "char":
        return char_code(value)
    if kind == "int":
        return to_int32(int(value))
    if kind == "long":
        return long_hash(int(value))
    if kind == "float":
        return float_to_int_bits(float(value))
    if kind == "double":
        return double_hash(float(value))
    raise ValueError(f"Not a primitive kind: {kind}")


def array_hash(values: Sequence[object] | bytes | None, element_kind: str) -> int:
    """Return ``java.util.Arrays.hashCode`` of an array.

    Args:
        values: Array elements; ``None`` for a null array reference.
        element_kind: Semantic type of the elements.

    Returns:
        Structural hash of the array contents.
    """
    if values is None:
        return 0
    result = 1
    for element in values:
        if element_kind in {"stringlike", "object", "array"}:
            contribution = object_hash(element)
        else:
            contribution = primitive_hash(element, element_kind)
        result = to_int32(31 * result + contribution)
    return result


def object_hash(value: object) -> int:
    """Return ``hashCode()`` of a reference value, ``0`` for ``null``.

    Java arrays hash by identity, so ``bytes`` and sequences have no value
    this function could reproduce; use :func:`array_hash` for array columns.

    Raises:
        TypeError: If the value has no known Java counterpart.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return boolean_hash(value)
    if isinstance(value, int):
        if -(2**31) <= value < 2**31:
            return value
        return long_hash(value)
    if isinstance(value, float):
        return double_hash(value)
    if isinstance(value, str):
        return string_hash(value)
    java_hash_code = getattr(value, "java_hash_code", None)
    if callable(java_hash_code):
        return to_int32(java_hash_code())
    raise TypeError(f"No Java hashCode known for {type(value).__name__}")
