# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Plugin options parsed from the host's flat property mapping."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_VALIDATION_PACKAGE = "javax.validation.constraints"

# Key names read by earlier generator configurations.
LEGACY_PROPERTY_KEYS: dict[str, str] = {
    "useHashFromRoot": "useEqualsHashCodeFromRoot",
    "useStringFromRoot": "useToStringFromRoot",
    "ignoreStaticFieldsInString": "ignoreStaticFields",
    "appendHashInString": "appendHashcode",
    "annotateAccessorsInsteadOfFields": "annotateGetters",
}


def is_true(value: str | None) -> bool:
    """Interpret a property value the way the generator configuration does.

    Args:
        value: Raw property value; ``None`` when the key is unset.

    Returns:
        True only for a case-insensitive ``"true"``, without surrounding blanks.
    """
    return value is not None and value.lower() == "true"


def property_value(properties: Mapping[str, str], key: str) -> str | None:
    """Return the value of ``key``, falling back to its legacy key name.

    Args:
        properties: Host property mapping.
        key: Current key name.

    Returns:
        The configured value, or ``None`` when neither name is set.
    """
    if key in properties:
        return properties[key]
    legacy_key = LEGACY_PROPERTY_KEYS.get(key)
    if legacy_key is not None and legacy_key in properties:
        logger.debug(f"Using legacy property key (key={legacy_key} replacement={key})")
        return properties[legacy_key]
    return None


def _flag(properties: Mapping[str, str], key: str) -> bool:
    return is_true(property_value(properties, key))
@dataclass(frozen=True)
class HashOptions:
    """Options of the equality and hash synthesis engines.

    Attributes:
        use_hash_from_root: Fold the superclass ``hashCode``/``equals`` in.
    """

    use_hash_from_root: bool = False

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "HashOptions":
        return cls(use_hash_from_root=_flag(properties, "useHashFromRoot"))


@dataclass(frozen=True)
class StringOptions:
    """Options of the string representation synthesis engine.

    Attributes:
        use_string_from_root: Append the superclass representation.
        ignore_static_fields: Leave ``static`` fields out of the representation.
        append_hash: Start the representation with the hash value.
    """

    use_string_from_root: bool = False
    ignore_static_fields: bool = False
    append_hash: bool = False

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "StringOptions":
        return cls(
            use_string_from_root=_flag(properties, "useStringFromRoot"),
            ignore_static_fields=_flag(properties, "ignoreStaticFieldsInString"),
            append_hash=_flag(properties, "appendHashInString"),
        )


@dataclass(frozen=True)
class ValidationOptions:
    """Options of the validation annotation rules.

    Attributes:
        annotate_accessors: Annotate getters instead of field declarations.
        legacy_email_substring_match: Detect email columns by looking for the
            literal text ``e(-|_)*mail`` in the column name instead of matching
            it as a pattern.
        validation_package: Package holding the constraint annotations.
    """

    annotate_accessors: bool = False
    legacy_email_substring_match: bool = False
    validation_package: str = DEFAULT_VALIDATION_PACKAGE

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "ValidationOptions":
        package = (properties.get("validationPackage") or "").strip()
        if package and not all(part.isidentifier() for part in package.split(".")):
            raise ValueError(f"validationPackage is not a Java package: {package!r}")
        return cls(
            annotate_accessors=_flag(properties, "annotateAccessorsInsteadOfFields"),
            legacy_email_substring_match=_flag(properties, "legacyEmailSubstringMatch"),
            validation_package=package or DEFAULT_VALIDATION_PACKAGE,
        )
