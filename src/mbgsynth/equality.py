# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize field-by-field ``equals`` members."""

import logging
from collections.abc import Sequence

from mbgsynth.column import ColumnDescriptor
from mbgsynth.hashing import ARRAYS_TYPE
from mbgsynth.model import GeneratedClass, Method, Parameter
from mbgsynth.options import HashOptions

logger = logging.getLogger(__name__)


class EqualsSynthesizer:
    """Append an ``equals`` member comparing every column of a class."""

    def __init__(self, options: HashOptions) -> None:
        self._options = options

    def synthesize(
        self, target: GeneratedClass, columns: Sequence[ColumnDescriptor]
    ) -> Method:
        """Build the ``equals`` method and add it to ``target``.

        Args:
            target: Class being generated.
            columns: Columns of the class, superclass columns first.

        Returns:
            The appended method.
        """
        method = Method(name="equals", return_type="boolean")
        method.add_annotation("@Override")
        method.add_parameter(Parameter(name="that", type="Object"))
        method.body_lines.extend(
            [
                "if (this == that) {",
                "return true;",
                "}",
                "if (that == null) {",
                "return false;",
                "}",
                "if (getClass() != that.getClass()) {",
                "return false;",
                "}",
                f"{target.simple_name} other = ({target.simple_name}) that;",
            ]
        )
        if self._options.use_hash_from_root and target.super_class is not None:
            method.body_lines.extend(
                ["if (!super.equals(other)) {", "return false;", "}"]
            )

        comparisons = [_comparison(target, column) for column in columns]
        if not comparisons:
            method.add_body_line("return true;")
        for index, comparison in enumerate(comparisons):
            prefix = "return " if index == 0 else "    && "
            suffix = ";" if index == len(comparisons) - 1 else ""
            method.add_body_line(prefix + comparison + suffix)

        target.add_method(method)
        logger.debug(
            f"Synthesized equals (class={target.simple_name} columns={len(columns)})"
        )
        return method


def _comparison(target: GeneratedClass, column: ColumnDescriptor) -> str:
    getter = column.getter_name
    if column.is_primitive:
        return f"(this.{getter}() == other.{getter}())"
    if column.semantic_type == "array":
        target.add_imported_type(ARRAYS_TYPE)
        return f"(Arrays.equals(this.{getter}(), other.{getter}()))"
    return (
        f"(this.{getter}() == null ? other.{getter}() == null "
        f": this.{getter}().equals(other.{getter}()))"
    )
