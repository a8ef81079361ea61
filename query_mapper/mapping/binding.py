"""Column-to-attribute binding for typed mapping.

Bindings are computed once per result set and target class: each column
binds to the writable attribute whose name matches case-insensitively, or,
when the column name is all digits, to the class's ``__setitem__`` with the
parsed integer as index.
"""

from __future__ import annotations

import dataclasses
import inspect
import re
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin

_NUMERIC = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ColumnBinding:
    """Association between one result column and one target attribute."""

    ordinal: int
    column: str
    field: str | None
    index: int | None = None

    def assign(self, target: Any, value: Any) -> None:
        if self.index is None:
            setattr(target, self.field, value)  # type: ignore[arg-type]
        else:
            target[self.index] = value


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return issubclass(cls, BaseModel)
    except ImportError:
        return False


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _candidate_names(cls: type, sample: Any) -> list[str]:
    """Attribute names of *cls* in declaration order, base classes first."""
    names: list[str] = []

    # Frozen models never accept assignment
    if _is_pydantic_model(cls):
        if cls.model_config.get("frozen", False):  # type: ignore[attr-defined]
            return []
        return [n for n in cls.model_fields if not n.startswith("_")]  # type: ignore[attr-defined]
    if dataclasses.is_dataclass(cls):
        if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
            return []
        names.extend(f.name for f in dataclasses.fields(cls))

    class_vars: set[str] = set()
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        namespace = vars(klass)
        for name, annotation in inspect.get_annotations(klass).items():
            if _is_class_var(annotation):
                class_vars.add(name)
            else:
                names.append(name)
        slots = namespace.get("__slots__", ())
        names.extend([slots] if isinstance(slots, str) else slots)
        # Plain class attributes act as defaults for instance attributes
        if klass.__module__ != "builtins":
            names.extend(name for name in namespace if name not in class_vars)

    if sample is not None and hasattr(sample, "__dict__"):
        names.extend(vars(sample))

    return [n for n in names if not n.startswith("_") and n not in class_vars]


def _is_writable(cls: type, name: str) -> bool:
    attr = inspect.getattr_static(cls, name, None)
    if isinstance(attr, property):
        return attr.fset is not None
    return not (
        inspect.isroutine(attr)
        or isinstance(attr, (classmethod, staticmethod, type))
    )


def writable_fields(cls: type, sample: Any = None) -> dict[str, str]:
    """Return a lowercased-name -> attribute-name map of the public writable attributes.

    Covers pydantic fields, dataclass fields, annotations, ``__slots__``,
    plain class attributes, properties with a setter and the instance
    attributes of *sample*. Methods, nested classes and ``ClassVar``
    annotations are left out. When two names differ only by case, the one
    declared first wins.
    """
    fields: dict[str, str] = {}
    for name in _candidate_names(cls, sample):
        key = name.lower()
        if key not in fields and _is_writable(cls, name):
            fields[key] = name
    return fields


def has_indexer(cls: type) -> bool:
    """Return True if instances of *cls* accept ``obj[int] = value``."""
    return callable(getattr(cls, "__setitem__", None))


def bind_columns(
    cls: type,
    column_names: list[str],
    fields: dict[str, str],
) -> list[ColumnBinding]:
    """Resolve the target of every column; unmatched columns are left out.

    Args:
        cls: Target class.
        column_names: Result column names in column order.
        fields: Map from :func:`writable_fields`.

    Returns:
        Bindings in column order.
    """
    bindings: list[ColumnBinding] = []
    indexer: bool | None = None
    for ordinal, column in enumerate(column_names):
        field = fields.get(column.lower())
        if field is not None:
            bindings.append(ColumnBinding(ordinal, column, field))
        elif _NUMERIC.fullmatch(column):
            if indexer is None:
                indexer = has_indexer(cls)
            if indexer:
                bindings.append(ColumnBinding(ordinal, column, None, int(column)))
    return bindings
