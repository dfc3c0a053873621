# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for serialization and validation annotation decisions."""

import pytest

from mbgsynth.annotations import (
    Annotation,
    AnnotationDecision,
    SerializationAnnotator,
    ValidationAnnotator,
    decide_getter_serialization,
    decide_setter_serialization,
    decide_validation,
    field_constant_name,
    is_email_column,
)
from mbgsynth.column import ColumnDescriptor
from mbgsynth.model import Field, GeneratedClass, Method, Parameter
from mbgsynth.options import ValidationOptions


def _rendered(decision: AnnotationDecision) -> list[str]:
    return [annotation.render() for annotation in decision.annotations]


def test_annot_001_mandatory_non_character_column_requires_not_null() -> None:
    column = ColumnDescriptor(name="age", semantic_type="object", nullable=False)

    decision = decide_validation(column, ValidationOptions())

    assert _rendered(decision) == ["@NotNull"]
    assert decision.imports == frozenset({"javax.validation.constraints.NotNull"})


def test_annot_002_nullable_and_identity_columns_never_require_not_null() -> None:
    nullable = ColumnDescriptor(name="age", semantic_type="object", nullable=True)
    identity = ColumnDescriptor(
        name="id", semantic_type="object", nullable=False, is_identity=True
    )

    assert decide_validation(nullable, ValidationOptions()).annotations == ()
    assert decide_validation(identity, ValidationOptions()).annotations == ()


def test_annot_003_character_column_gets_size_regardless_of_nullability() -> None:
    mandatory = ColumnDescriptor(
        name="title", semantic_type="stringlike", nullable=False, length=50
    )
    optional = ColumnDescriptor(
        name="title", semantic_type="stringlike", nullable=True, length=50
    )

    assert _rendered(decide_validation(mandatory, ValidationOptions())) == [
        "@NotBlank",
        "@Size(max = 50)",
    ]
    assert _rendered(decide_validation(optional, ValidationOptions())) == [
        "@Size(max = 50)"
    ]


def test_annot_004_character_column_without_length_gets_no_size() -> None:
    column = ColumnDescriptor(name="notes", semantic_type="stringlike", nullable=False)

    assert _rendered(decide_validation(column, ValidationOptions())) == ["@NotBlank"]


@pytest.mark.parametrize(
    ("column_name", "expected"),
    [
        ("EMAIL", True),
        ("user_e_mail", True),
        ("E-MAIL_ADDRESS", True),
        ("e__-mail", True),
        ("mail", False),
        ("remark", False),
    ],
)
def test_annot_005_email_columns_are_matched_as_pattern(
    column_name: str, expected: bool
) -> None:
    assert is_email_column(column_name) is expected


def test_annot_006_legacy_email_detection_looks_for_pattern_text() -> None:
    assert not is_email_column("EMAIL", legacy_substring_match=True)
    assert is_email_column("x_E(-|_)*MAIL", legacy_substring_match=True)

    column = ColumnDescriptor(
        name="email", semantic_type="stringlike", length=120, raw_column_name="EMAIL"
    )
    fixed = decide_validation(column, ValidationOptions())
    legacy = decide_validation(
        column, ValidationOptions(legacy_email_substring_match=True)
    )

    assert _rendered(fixed) == ["@Size(max = 120)", "@Email"]
    assert _rendered(legacy) == ["@Size(max = 120)"]


def test_annot_007_decisions_are_deterministic() -> None:
    column = ColumnDescriptor(
        name="email",
        semantic_type="stringlike",
        nullable=False,
        length=80,
        raw_column_name="CONTACT_EMAIL",
    )
    options = ValidationOptions()

    first = decide_validation(column, options)
    second = decide_validation(column, options)

    assert first == second
    assert _rendered(first) == _rendered(second)
    assert _rendered(first) == ["@NotBlank", "@Size(max = 80)", "@Email"]


def test_annot_008_validation_package_is_configurable() -> None:
    column = ColumnDescriptor(name="age", semantic_type="int", nullable=False)
    options = ValidationOptions(validation_package="jakarta.validation.constraints")

    decision = decide_validation(column, options)

    assert decision.imports == frozenset({"jakarta.validation.constraints.NotNull"})


def test_annot_009_validation_targets_field_or_getter_never_both() -> None:
    column = ColumnDescriptor(name="age", semantic_type="int", nullable=False)
    for annotate_accessors in (False, True):
        target = GeneratedClass(type_name="com.example.Person")
        declared = Field(name="age", type="int")
        getter = Method(name="getAge", return_type="int")
        annotator = ValidationAnnotator(
            ValidationOptions(annotate_accessors=annotate_accessors)
        )

        annotator.annotate_field(declared, target, column)
        annotator.annotate_getter(getter, target, column)

        annotated = getter if annotate_accessors else declared
        untouched = declared if annotate_accessors else getter
        assert annotated.annotations == ["@NotNull"]
        assert untouched.annotations == []
        assert target.imported_types == {"javax.validation.constraints.NotNull"}


def test_annot_010_imports_are_registered_once_per_class() -> None:
    target = GeneratedClass(type_name="com.example.Person")
    annotator = ValidationAnnotator(ValidationOptions())
    for name in ("first", "second", "third"):
        column = ColumnDescriptor(
            name=name, semantic_type="stringlike", nullable=False, length=10
        )
        annotator.annotate_field(Field(name=name, type="String"), target, column)

    assert target.imported_types == {
        "javax.validation.constraints.NotBlank",
        "javax.validation.constraints.Size",
    }


def test_annot_011_field_constants_and_accessor_annotations() -> None:
    target = GeneratedClass(type_name="com.example.Person")
    column = ColumnDescriptor(name="firstName", semantic_type="stringlike")
    annotator = SerializationAnnotator()
    getter = Method(name="getFirstName", return_type="String")
    setter = Method(name="setFirstName")

    constant = annotator.add_field_constant(Field(name="firstName", type="String"), target)
    annotator.annotate_getter(getter, target, column)
    annotator.annotate_setter(setter, target, column)

    assert constant.declaration() == (
        'public static final String FIELD_FIRSTNAME = "firstName";'
    )
    assert target.fields == [constant]
    assert getter.annotations == ["@JsonGetter(FIELD_FIRSTNAME)"]
    assert setter.annotations == ["@JsonSetter(FIELD_FIRSTNAME)"]
    assert target.imported_types == {
        "com.fasterxml.jackson.annotation.JsonGetter",
        "com.fasterxml.jackson.annotation.JsonSetter",
    }


def test_annot_012_immutable_class_setters_get_no_serialization_annotation() -> None:
    column = ColumnDescriptor(name="id", semantic_type="int")

    assert decide_setter_serialization(column, is_immutable=True) == AnnotationDecision()
    assert _rendered(decide_getter_serialization(column)) == ["@JsonGetter(FIELD_ID)"]


def test_annot_013_constructor_is_marked_for_constructor_based_classes() -> None:
    target = GeneratedClass(type_name="com.example.Person", is_constructor_based=True)
    constructor = Method(
        name="Person",
        is_constructor=True,
        parameters=[
            Parameter(name="id", type="Integer"),
            Parameter(name="name", type="String"),
        ],
    )
    target.add_method(constructor)

    annotated = SerializationAnnotator().annotate_constructor(target)

    assert annotated is constructor
    assert constructor.annotations == ["@JsonCreator"]
    assert [parameter.annotations for parameter in constructor.parameters] == [
        ["@JsonProperty(FIELD_ID)"],
        ["@JsonProperty(FIELD_NAME)"],
    ]
    assert constructor.signature() == (
        "public Person(@JsonProperty(FIELD_ID) Integer id, "
        "@JsonProperty(FIELD_NAME) String name)"
    )
    assert target.imported_types == {
        "com.fasterxml.jackson.annotation.JsonCreator",
        "com.fasterxml.jackson.annotation.JsonProperty",
    }


def test_annot_014_missing_constructor_or_mutable_class_is_skipped() -> None:
    immutable = GeneratedClass(type_name="com.example.Person", is_immutable=True)
    mutable = GeneratedClass(type_name="com.example.Person")
    mutable.add_method(Method(name="Person", is_constructor=True))

    assert SerializationAnnotator().annotate_constructor(immutable) is None
    assert SerializationAnnotator().annotate_constructor(mutable) is None
    assert immutable.imported_types == set()
    assert mutable.methods[0].annotations == []


def test_annot_015_annotation_rendering() -> None:
    assert Annotation("NotNull").render() == "@NotNull"
    assert Annotation("JsonGetter", (("value", "FIELD_ID"),)).render() == (
        "@JsonGetter(FIELD_ID)"
    )
    assert Annotation("Size", (("min", "1"), ("max", "9"))).render() == (
        "@Size(min = 1, max = 9)"
    )
    assert field_constant_name("createdAt") == "FIELD_CREATEDAT"
