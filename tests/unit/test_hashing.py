# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for hashCode synthesis and its Java evaluation."""

import pytest

from mbgsynth.column import ColumnDescriptor
from mbgsynth.hashing import HashCodeSynthesizer, evaluate_hash_code
from mbgsynth.javahash import (
    array_hash,
    double_hash,
    float_to_int_bits,
    long_hash,
    object_hash,
    string_hash,
    to_int32,
)
from mbgsynth.model import GeneratedClass
from mbgsynth.options import HashOptions
from mbgsynth.primes import FixedPrime, PrimeSequence


def _column(name: str, semantic_type: str, **kwargs: object) -> ColumnDescriptor:
    return ColumnDescriptor(name=name, semantic_type=semantic_type, **kwargs)  # type: ignore[arg-type]


def test_hash_001_synthesizes_one_line_per_kind_with_fresh_prime(
    prime_sequence: PrimeSequence,
) -> None:
    target = GeneratedClass(type_name="com.example.model.Sample")
    columns = [
        _column("active", "bool"),
        _column("flags", "byte"),
        _column("grade", "char"),
        _column("count", "int"),
        _column("total", "long"),
        _column("level", "short"),
        _column("ratio", "float"),
        _column("payload", "array"),
        _column("label", "stringlike"),
        _column("createdAt", "object"),
    ]

    method = HashCodeSynthesizer(prime_sequence, HashOptions()).synthesize(
        target, columns
    )

    assert target.methods == [method]
    assert method.name == "hashCode"
    assert method.return_type == "int"
    assert method.annotations == ["@Override"]
    assert method.body_lines == [
        "final int prime = 2;",
        "int result = 1;",
        "result = prime * result + (isActive() ? 1231 : 1237);",
        "result = prime * result + getFlags();",
        "result = prime * result + getGrade();",
        "result = prime * result + getCount();",
        "result = prime * result + (int) (getTotal() ^ (getTotal() >>> 32));",
        "result = prime * result + getLevel();",
        "result = prime * result + Float.floatToIntBits(getRatio());",
        "result = prime * result + (Arrays.hashCode(getPayload()));",
        "result = prime * result + ((getLabel() == null) ? 0 : getLabel().hashCode());",
        "result = prime * result + ((getCreatedAt() == null) ? 0 : getCreatedAt().hashCode());",
        "return result;",
    ]
    assert target.imported_types == {"java.util.Arrays"}


def test_hash_002_each_class_consumes_the_next_prime_of_the_run(
    prime_sequence: PrimeSequence,
) -> None:
    synthesizer = HashCodeSynthesizer(prime_sequence, HashOptions())
    primes: list[str] = []

    for name in ("A", "B", "C", "D"):
        target = GeneratedClass(type_name=f"com.example.{name}")
        method = synthesizer.synthesize(target, [_column("id", "int")])
        primes.append(method.body_lines[0])

    assert primes == [
        "final int prime = 2;",
        "final int prime = 3;",
        "final int prime = 5;",
        "final int prime = 7;",
    ]


def test_hash_003_double_columns_share_one_temp_declaration() -> None:
    target = GeneratedClass(type_name="com.example.Point")
    columns = [_column("x", "double"), _column("y", "double")]

    method = HashCodeSynthesizer(FixedPrime(), HashOptions()).synthesize(
        target, columns
    )

    assert method.body_lines.count("long temp;") == 1
    assert method.body_lines[2:] == [
        "long temp;",
        "temp = Double.doubleToLongBits(getX());",
        "result = prime * result + (int) (temp ^ (temp >>> 32));",
        "temp = Double.doubleToLongBits(getY());",
        "result = prime * result + (int) (temp ^ (temp >>> 32));",
        "return result;",
    ]


def test_hash_004_root_inclusion_folds_superclass_hash_first() -> None:
    target = GeneratedClass(
        type_name="com.example.Child", super_class="com.example.Parent"
    )
    options = HashOptions(use_hash_from_root=True)

    method = HashCodeSynthesizer(FixedPrime(), options).synthesize(
        target, [_column("id", "int")]
    )

    assert method.body_lines[:4] == [
        "final int prime = 31;",
        "int result = 1;",
        "result = prime * result + super.hashCode();",
        "result = prime * result + getId();",
    ]


def test_hash_005_root_inclusion_needs_a_superclass() -> None:
    target = GeneratedClass(type_name="com.example.Root")
    options = HashOptions(use_hash_from_root=True)

    method = HashCodeSynthesizer(FixedPrime(), options).synthesize(target, [])

    assert method.body_lines == [
        "final int prime = 31;",
        "int result = 1;",
        "return result;",
    ]


def test_hash_006_unknown_semantic_type_is_skipped() -> None:
    target = GeneratedClass(type_name="com.example.Shape")
    columns = [_column("area", "geometry"), _column("id", "int")]

    method = HashCodeSynthesizer(FixedPrime(), HashOptions()).synthesize(
        target, columns
    )

    assert not any("getArea" in line for line in method.body_lines)
    assert "result = prime * result + getId();" in method.body_lines
    assert evaluate_hash_code(31, columns, {"area": object(), "id": 4}) == 31 + 4


def test_hash_007_int_and_string_columns_follow_the_combination_formula() -> None:
    columns = [_column("count", "int"), _column("label", "stringlike")]
    prime = 7

    with_label = evaluate_hash_code(prime, columns, {"count": 5, "label": "abc"})
    without_label = evaluate_hash_code(prime, columns, {"count": 5, "label": None})

    assert string_hash("abc") == 96354
    assert with_label == (1 * prime + 5) * prime + 96354
    assert without_label == (1 * prime + 5) * prime


def test_hash_008_boolean_contributions_are_fixed_constants() -> None:
    columns = [_column("active", "bool")]

    assert evaluate_hash_code(13, columns, {"active": True}) == 13 + 1231
    assert evaluate_hash_code(13, columns, {"active": False}) == 13 + 1237


def test_hash_009_long_contribution_folds_high_and_low_halves() -> None:
    columns = [_column("total", "long")]

    assert long_hash(0x0000000100000002) == 3
    assert long_hash(-1) == 0
    assert long_hash(0x7FFFFFFF00000000) == 0x7FFFFFFF
    assert evaluate_hash_code(3, columns, {"total": 0x0000000100000002}) == 3 + 3


def test_hash_010_float_and_double_use_ieee_bit_patterns() -> None:
    assert float_to_int_bits(1.0) == 0x3F800000
    assert float_to_int_bits(-2.0) == to_int32(0xC0000000)
    assert float_to_int_bits(float("nan")) == 0x7FC00000
    assert double_hash(1.0) == 1072693248
    assert double_hash(0.0) == 0
    columns = [_column("x", "double"), _column("ratio", "float")]

    result = evaluate_hash_code(31, columns, {"x": 1.0, "ratio": 1.0})

    assert result == to_int32(to_int32(31 + 1072693248) * 31 + 0x3F800000)


def test_hash_011_array_contribution_is_structural() -> None:
    columns = [_column("payload", "array")]

    first = evaluate_hash_code(31, columns, {"payload": bytes([1, 2])})
    second = evaluate_hash_code(31, columns, {"payload": [1, 2]})

    assert array_hash(bytes([1, 2]), "byte") == 994
    assert array_hash(bytes([255]), "byte") == 31 - 1
    assert array_hash(None, "byte") == 0
    assert first == second == 31 + 994


def test_hash_012_arithmetic_wraps_like_java_int() -> None:
    columns = [_column("count", "int"), _column("other", "int")]
    prime = 2_147_483_629

    result = evaluate_hash_code(prime, columns, {"count": 2**31 - 1, "other": 7})

    expected = to_int32(to_int32(prime + 2**31 - 1) * prime + 7)
    assert result == expected
    assert -(2**31) <= result < 2**31


def test_hash_013_super_hash_is_the_first_accumulation() -> None:
    columns = [_column("id", "int")]

    result = evaluate_hash_code(5, columns, {"id": 2}, super_hash=100)

    assert result == (5 + 100) * 5 + 2


def test_hash_014_reference_values_hash_like_their_java_counterparts() -> None:
    assert object_hash(None) == 0
    assert object_hash("") == 0
    assert object_hash(True) == 1231
    assert object_hash(42) == 42
    assert object_hash(2**40 + 1) == long_hash(2**40 + 1)
    assert object_hash(1.0) == 1072693248


def test_hash_015_narrow_primitives_widen_to_int_before_combining() -> None:
    columns = [_column("flags", "byte")]
    level = [_column("level", "short")]
    grade = [_column("grade", "char")]

    assert evaluate_hash_code(31, columns, {"flags": -1}) == 31 - 1
    assert evaluate_hash_code(31, columns, {"flags": 200}) == 31 - 56
    assert evaluate_hash_code(31, level, {"level": -300}) == 31 - 300
    assert evaluate_hash_code(31, grade, {"grade": "A"}) == 31 + 65
    assert evaluate_hash_code(31, grade, {"grade": 65}) == 31 + 65


def test_hash_016_short_and_char_arrays_hash_their_widened_elements() -> None:
    assert array_hash([-300, 1], "short") == (31 - 300) * 31 + 1
    assert array_hash(["A", "B"], "char") == (31 + 65) * 31 + 66
    assert array_hash([65, 66], "char") == array_hash(["A", "B"], "char")
    assert array_hash([200], "byte") == 31 - 56


def test_hash_017_nested_arrays_cannot_be_evaluated() -> None:
    columns = [_column("chunks", "array", array_element_type="array")]

    with pytest.raises(TypeError):
        object_hash(bytes([1, 2]))
    with pytest.raises(TypeError):
        evaluate_hash_code(31, columns, {"chunks": [bytes([1]), bytes([2])]})
