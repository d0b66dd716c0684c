"""
RESPONSIBILITIES
- Describe every supported cell destination as a closed set of kinds.
- Convert trimmed cell text into the value a destination kind expects.
PROCESS OVERVIEW
1. Kind.of() turns a field annotation into a Kind, rejecting unknown shapes.
2. scan_text() converts one cell's text according to its Kind.
3. scan_row() walks a row positionally, treating missing cells as empty text.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, Union

from .errors import ScanError, UnsupportedTypeError
from .values import TextValue, from_text, parse_float, parse_int


class Shape(Enum):
    TEXT = "text"
    INTEGER = "int"
    DECIMAL = "float"
    VALUE = "value"


_PRIMITIVE_SHAPES: dict[type, Shape] = {
    str: Shape.TEXT,
    int: Shape.INTEGER,
    float: Shape.DECIMAL,
}


@dataclass(frozen=True)
class Kind:
    """One supported destination shape, optionally nullable."""

    shape: Shape
    nullable: bool = False
    value_type: Optional[type] = None

    @classmethod
    def of(cls, annotation: Any) -> "Kind":
        """Derive the kind of a field from its (resolved) type annotation.

        Raises:
            UnsupportedTypeError: When the annotation is not ``str``, ``int``,
                ``float``, a ``TextValue`` class, or one of those unioned with None.
        """

        nullable = False
        target = annotation
        origin = typing.get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
            if len(members) != 1:
                raise UnsupportedTypeError(f"can't scan into {annotation!r}")
            nullable = True
            target = members[0]

        if not isinstance(target, type) or target is bool:
            raise UnsupportedTypeError(f"can't scan into {annotation!r}")
        if target in _PRIMITIVE_SHAPES:
            return cls(_PRIMITIVE_SHAPES[target], nullable)
        if issubclass(target, TextValue):
            return cls(Shape.VALUE, nullable, target)
        raise UnsupportedTypeError(f"can't scan into {annotation!r}")

    @property
    def type_name(self) -> str:
        if self.shape is Shape.VALUE and self.value_type is not None:
            name = self.value_type.__name__
        else:
            name = self.shape.value
        return f"{name} | None" if self.nullable else name


def scan_text(text: str, kind: Optional[Kind]) -> Any:
    """Convert one cell's trimmed *text* into the value *kind* expects."""

    if kind is None:
        return None
    if kind.nullable and text == "":
        return None
    try:
        if kind.shape is Shape.TEXT:
            return text
        if kind.shape is Shape.INTEGER:
            return parse_int(text)
        if kind.shape is Shape.DECIMAL:
            return parse_float(text)
        if kind.shape is Shape.VALUE and kind.value_type is not None:
            return from_text(kind.value_type, text)
    except ScanError as exc:
        raise ScanError(f"scan({kind.type_name}): {exc}") from exc
    raise UnsupportedTypeError(f"can't scan into {kind.type_name}")


def scan_row(texts: Sequence[str], kinds: Sequence[Optional[Kind]]) -> List[Any]:
    """Scan a row positionally; kinds past the end of the row see empty text.

    The first failing position stops the scan and its error propagates.
    """

    values: List[Any] = []
    for position, kind in enumerate(kinds):
        text = texts[position].strip() if position < len(texts) else ""
        try:
            values.append(scan_text(text, kind))
        except ScanError as exc:
            raise ScanError(f"column {position}: {exc}") from exc
    return values


__all__ = ["Shape", "Kind", "scan_text", "scan_row"]
