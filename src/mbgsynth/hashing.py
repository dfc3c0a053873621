# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize ``hashCode`` members with a distinct prime per class."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from mbgsynth.column import ColumnDescriptor
from mbgsynth.javahash import array_hash, object_hash, primitive_hash, to_int32
from mbgsynth.model import GeneratedClass, Method
from mbgsynth.options import HashOptions
from mbgsynth.primes import PrimeSource

logger = logging.getLogger(__name__)

ARRAYS_TYPE = "java.util.Arrays"


@dataclass
class _HashBody:
    """Track the ``hashCode`` body under construction."""

    method: Method
    target: GeneratedClass
    has_temp: bool = False

    def accumulate(self, expression: str) -> None:
        self.method.add_body_line(f"result = prime * result + {expression};")


@dataclass(frozen=True)
class _Combiner:
    """Pair the Java rendering of one column kind with its Python value.

    Attributes:
        render: Append the statements folding the column into ``result``.
        contribute: Return the ``int`` the column value adds to ``result``.
    """

    render: Callable[[_HashBody, str], None]
    contribute: Callable[[ColumnDescriptor, Any], int]


def _render_boolean(body: _HashBody, getter: str) -> None:
    body.accumulate(f"({getter}() ? 1231 : 1237)")


def _render_integral(body: _HashBody, getter: str) -> None:
    body.accumulate(f"{getter}()")


def _render_long(body: _HashBody, getter: str) -> None:
    body.accumulate(f"(int) ({getter}() ^ ({getter}() >>> 32))")


def _render_float(body: _HashBody, getter: str) -> None:
    body.accumulate(f"Float.floatToIntBits({getter}())")


def _render_double(body: _HashBody, getter: str) -> None:
    if not body.has_temp:
        body.method.add_body_line("long temp;")
        body.has_temp = True
    body.method.add_body_line(f"temp = Double.doubleToLongBits({getter}());")
    body.accumulate("(int) (temp ^ (temp >>> 32))")


def _render_array(body: _HashBody, getter: str) -> None:
    body.target.add_imported_type(ARRAYS_TYPE)
    body.accumulate(f"(Arrays.hashCode({getter}()))")


def _render_reference(body: _HashBody, getter: str) -> None:
    body.accumulate(f"(({getter}() == null) ? 0 : {getter}().hashCode())")


def _primitive(column: ColumnDescriptor, value: Any) -> int:
    return primitive_hash(value, column.semantic_type)


def _array(column: ColumnDescriptor, value: Any) -> int:
    return array_hash(value, column.array_element_type)


def _reference(column: ColumnDescriptor, value: Any) -> int:
    return object_hash(value)


_COMBINERS: dict[str, _Combiner] = {
    "bool": _Combiner(render=_render_boolean, contribute=_primitive),
    "byte": _Combiner(render=_render_integral, contribute=_primitive),
    "char": _Combiner(render=_render_integral, contribute=_primitive),
    "short": _Combiner(render=_render_integral, contribute=_primitive),
    "int": _Combiner(render=_render_integral, contribute=_primitive),
    "long": _Combiner(render=_render_long, contribute=_primitive),
    "float": _Combiner(render=_render_float, contribute=_primitive),
    "double": _Combiner(render=_render_double, contribute=_primitive),
    "array": _Combiner(render=_render_array, contribute=_array),
    "stringlike": _Combiner(render=_render_reference, contribute=_reference),
    "object": _Combiner(render=_render_reference, contribute=_reference),
}


class HashCodeSynthesizer:
    """Append a ``hashCode`` member combining every column of a class."""

    def __init__(self, prime_source: PrimeSource, options: HashOptions) -> None:
        """Initialize the synthesizer.

        Args:
            prime_source: Source of the per-class prime multiplier.
            options: Hash synthesis options.
        """
        self._prime_source = prime_source
        self._options = options

    def synthesize(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> Method:
        """Build the ``hashCode`` method and add it to ``target``.

        Args:
            target: Class being generated.
            columns: Columns of the class, superclass columns first.

        Returns:
            The appended method.

        Raises:
            PrimeSpaceExhaustedError: If the prime source has no multiplier left.
        """
        prime = self._prime_source.next()
        method = Method(name="hashCode", return_type="int")
        method.add_annotation("@Override")
        method.add_body_line(f"final int prime = {prime};")
        method.add_body_line("int result = 1;")
        if self._options.use_hash_from_root and target.super_class is not None:
            method.add_body_line("result = prime * result + super.hashCode();")

        body = _HashBody(method=method, target=target)
        for column in columns:
            combiner = _COMBINERS.get(column.semantic_type)
            if combiner is None:
                logger.debug(
                    f"Skipping column with unknown semantic type "
                    f"(class={target.simple_name} column={column.name} "
                    f"semantic_type={column.semantic_type})"
                )
                continue
            combiner.render(body, column.getter_name)

        method.add_body_line("return result;")
        target.add_method(method)
        logger.debug(
            f"Synthesized hashCode (class={target.simple_name} prime={prime} "
            f"columns={len(columns)})"
        )
        return method


def evaluate_hash_code(
    prime: int,
    columns: Sequence[ColumnDescriptor],
    values: Mapping[str, Any],
    super_hash: int | None = None,
) -> int:
    """Compute what a synthesized ``hashCode`` returns for given field values.

    Args:
        prime: Multiplier written into the method.
        columns: Columns the method was synthesized from.
        values: Field values keyed by property name.
        super_hash: Superclass ``hashCode`` when the root is folded in.

    Returns:
        The Java ``int`` result.
    """
    result = 1
    if super_hash is not None:
        result = to_int32(prime * result + super_hash)
    for column in columns:
        combiner = _COMBINERS.get(column.semantic_type)
        if combiner is None:
            continue
        contribution = combiner.contribute(column, values[column.name])
        result = to_int32(prime * result + contribution)
    return result
