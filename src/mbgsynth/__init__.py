# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for generated-class member synthesis."""

from mbgsynth.annotations import (
    Annotation,
    AnnotationDecision,
    SerializationAnnotator,
    ValidationAnnotator,
    decide_validation,
)
from mbgsynth.column import ColumnDescriptor, SemanticType
from mbgsynth.equality import EqualsSynthesizer
from mbgsynth.hashing import HashCodeSynthesizer, evaluate_hash_code
from mbgsynth.model import Field, GeneratedClass, Method, Parameter
from mbgsynth.options import HashOptions, StringOptions, ValidationOptions
from mbgsynth.plugins import (
    EqualsHashCodePlugin,
    JsonAnnotationsPlugin,
    PluginAdapter,
    PluginChain,
    ToStringPlugin,
    ValidationAnnotationPlugin,
    build_plugin,
)
from mbgsynth.primes import (
    FixedPrime,
    PrimeSequence,
    PrimeSource,
    PrimeSpaceExhaustedError,
)
from mbgsynth.tostring import ToStringSynthesizer

__all__ = [
    "Annotation",
    "AnnotationDecision",
    "ColumnDescriptor",
    "EqualsHashCodePlugin",
    "EqualsSynthesizer",
    "Field",
    "FixedPrime",
    "GeneratedClass",
    "HashCodeSynthesizer",
    "HashOptions",
    "JsonAnnotationsPlugin",
    "Method",
    "Parameter",
    "PluginAdapter",
    "PluginChain",
    "PrimeSequence",
    "PrimeSource",
    "PrimeSpaceExhaustedError",
    "SemanticType",
    "SerializationAnnotator",
    "StringOptions",
    "ToStringPlugin",
    "ToStringSynthesizer",
    "ValidationAnnotationPlugin",
    "ValidationAnnotator",
    "ValidationOptions",
    "build_plugin",
    "decide_validation",
    "evaluate_hash_code",
]
