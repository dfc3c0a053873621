# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Lifecycle hooks the host pipeline calls while generating model classes.

Every hook returns whether later plugins should keep processing the artifact;
the plugins of this package always return ``True``.
"""

import logging
from collections.abc import Callable, Mapping, Sequence

from mbgsynth.annotations import SerializationAnnotator, ValidationAnnotator
from mbgsynth.column import ColumnDescriptor
from mbgsynth.equality import EqualsSynthesizer
from mbgsynth.hashing import HashCodeSynthesizer
from mbgsynth.model import Field, GeneratedClass, Method
from mbgsynth.options import HashOptions, StringOptions, ValidationOptions
from mbgsynth.primes import PrimeSource
from mbgsynth.tostring import ToStringSynthesizer

logger = logging.getLogger(__name__)


class PluginAdapter:
    """Plugin doing nothing and letting every artifact through."""

    def __init__(self) -> None:
        self.properties: dict[str, str] = {}

    def set_properties(self, properties: Mapping[str, str]) -> None:
        """Read the plugin configuration once, before any hook runs."""
        self.properties = dict(properties)

    def validate(self, warnings: list[str]) -> bool:
        return True

    def model_base_record_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        return True

    def model_record_with_blobs_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        return True

    def model_primary_key_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        return True

    def model_field_generated(
        self, declared: Field, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        return True

    def model_getter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        return True

    def model_setter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        return True


class EqualsHashCodePlugin(PluginAdapter):
    """Add ``equals`` and ``hashCode``, each class using its own prime."""

    def __init__(self, prime_source: PrimeSource) -> None:
        super().__init__()
        self._prime_source = prime_source
        self._options = HashOptions()

    def set_properties(self, properties: Mapping[str, str]) -> None:
        super().set_properties(properties)
        self._options = HashOptions.from_properties(properties)

    def model_base_record_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        self._generate(target, columns)
        return True

    def model_record_with_blobs_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        self._generate(target, columns)
        return True

    def model_primary_key_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        self._generate(target, columns)
        return True

    def _generate(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> None:
        EqualsSynthesizer(self._options).synthesize(target, columns)
        HashCodeSynthesizer(self._prime_source, self._options).synthesize(
            target, columns
        )


class ToStringPlugin(PluginAdapter):
    """Add ``toString``, optionally without static fields."""

    def __init__(self) -> None:
        super().__init__()
        self._options = StringOptions()

    def set_properties(self, properties: Mapping[str, str]) -> None:
        super().set_properties(properties)
        self._options = StringOptions.from_properties(properties)

    def model_base_record_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        ToStringSynthesizer(self._options).synthesize(target)
        return True

    def model_record_with_blobs_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        ToStringSynthesizer(self._options).synthesize(target)
        return True

    def model_primary_key_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        ToStringSynthesizer(self._options).synthesize(target)
        return True


class JsonAnnotationsPlugin(PluginAdapter):
    """Add Jackson annotations keyed by per-field name constants."""

    def __init__(self) -> None:
        super().__init__()
        self._annotator = SerializationAnnotator()

    def model_field_generated(
        self, declared: Field, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        self._annotator.add_field_constant(declared, target)
        return True

    def model_getter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        self._annotator.annotate_getter(method, target, column)
        return True

    def model_setter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        self._annotator.annotate_setter(method, target, column)
        return True

    def model_base_record_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        self._annotator.annotate_constructor(target)
        return True


class ValidationAnnotationPlugin(PluginAdapter):
    """Add Bean Validation constraints to fields or getters."""

    def __init__(self) -> None:
        super().__init__()
        self._annotator = ValidationAnnotator(ValidationOptions())

    def set_properties(self, properties: Mapping[str, str]) -> None:
        super().set_properties(properties)
        self._annotator = ValidationAnnotator(
            ValidationOptions.from_properties(properties)
        )

    def model_field_generated(
        self, declared: Field, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        self._annotator.annotate_field(declared, target, column)
        return True

    def model_getter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        self._annotator.annotate_getter(method, target, column)
        return True


PLUGIN_FACTORIES: dict[str, Callable[[PrimeSource], PluginAdapter]] = {
    "equals-hash-code": EqualsHashCodePlugin,
    "to-string": lambda prime_source: ToStringPlugin(),
    "json": lambda prime_source: JsonAnnotationsPlugin(),
    "validation": lambda prime_source: ValidationAnnotationPlugin(),
}


def build_plugin(
    name: str, prime_source: PrimeSource, properties: Mapping[str, str]
) -> PluginAdapter:
    """Create and configure a plugin by registry name.

    Args:
        name: Key of ``PLUGIN_FACTORIES``.
        prime_source: Prime source shared by the whole run.
        properties: Plugin configuration.

    Returns:
        Configured plugin.

    Raises:
        ValueError: If ``name`` is not a known plugin.
    """
    factory = PLUGIN_FACTORIES.get(name)
    if factory is None:
        raise ValueError(f"Unknown plugin: {name}")
    plugin = factory(prime_source)
    plugin.set_properties(properties)
    return plugin


class PluginChain(PluginAdapter):
    """Run plugins in order, stopping at the first one returning ``False``."""

    def __init__(self, plugins: Sequence[PluginAdapter]) -> None:
        super().__init__()
        self._plugins = list(plugins)

    def validate(self, warnings: list[str]) -> bool:
        return all(plugin.validate(warnings) for plugin in self._plugins)

    def model_base_record_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        return all(
            plugin.model_base_record_class_generated(target, columns)
            for plugin in self._plugins
        )

    def model_record_with_blobs_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        return all(
            plugin.model_record_with_blobs_class_generated(target, columns)
            for plugin in self._plugins
        )

    def model_primary_key_class_generated(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> bool:
        return all(
            plugin.model_primary_key_class_generated(target, columns)
            for plugin in self._plugins
        )

    def model_field_generated(
        self, declared: Field, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        return all(
            plugin.model_field_generated(declared, target, column)
            for plugin in self._plugins
        )

    def model_getter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        return all(
            plugin.model_getter_method_generated(method, target, column)
            for plugin in self._plugins
        )

    def model_setter_method_generated(
        self, method: Method, target: GeneratedClass, column: ColumnDescriptor
    ) -> bool:
        return all(
            plugin.model_setter_method_generated(method, target, column)
            for plugin in self._plugins
        )
