"""
RESPONSIBILITIES
- Describe which record fields bind to which spreadsheet columns, and with what kind.
- Build fresh records from scanned field values.
PROCESS OVERVIEW
1. Callers declare columns explicitly, via a field -> column mapping, or with column() on dataclass fields.
2. Kinds come from the record's resolved type hints unless given explicitly.
3. The schema is immutable and reused by every adapter bound to the record type.
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import RecordTypeError, SchemaError
from .scan import Kind

COLUMN_METADATA_KEY = "column"


def column(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field bound to the spreadsheet column *name*.

    Extra keyword arguments are passed through to :func:`dataclasses.field`.
    """

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[COLUMN_METADATA_KEY] = name
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True)
class Column:
    field: str
    name: str
    kind: Kind


@dataclass(frozen=True)
class RecordSchema:
    """Binding between a record type's fields and spreadsheet column names."""

    record_type: type
    columns: Tuple[Column, ...]

    def __post_init__(self) -> None:
        if not self.columns:
            raise SchemaError(
                f"{self.record_type.__name__}: couldn't find any bound columns"
            )
        seen: set[str] = set()
        for col in self.columns:
            if col.name in seen:
                raise SchemaError(
                    f"{self.record_type.__name__}: column {col.name!r} is declared twice"
                )
            seen.add(col.name)
        if dataclasses.is_dataclass(self.record_type):
            bound = {col.field for col in self.columns}
            required = [
                f.name
                for f in dataclasses.fields(self.record_type)
                if f.init
                and f.name not in bound
                and f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING
            ]
            if required:
                raise SchemaError(
                    f"{self.record_type.__name__}: unbound fields need a default: "
                    f"{', '.join(required)}"
                )

    @property
    def names(self) -> list[str]:
        return [col.name for col in self.columns]

    @property
    def fields(self) -> Dict[str, str]:
        """Column name -> field name."""

        return {col.name: col.field for col in self.columns}

    def build(self, values: Mapping[str, Any]) -> Any:
        """Construct a new record from ``field -> value``."""

        return self.record_type(**values)

    @classmethod
    def from_mapping(
        cls,
        record_type: type,
        mapping: Mapping[str, str],
        kinds: Optional[Mapping[str, Kind]] = None,
    ) -> "RecordSchema":
        """Bind ``field -> column name`` pairs, in mapping order."""

        hints = _type_hints(record_type)
        columns = []
        for field_name, column_name in mapping.items():
            if kinds and field_name in kinds:
                kind = kinds[field_name]
            elif field_name in hints:
                kind = Kind.of(hints[field_name])
            else:
                raise SchemaError(
                    f"{record_type.__name__}: field {field_name!r} has no type annotation"
                )
            columns.append(Column(field_name, str(column_name), kind))
        return cls(record_type, tuple(columns))

    @classmethod
    def from_dataclass(cls, record_type: type) -> "RecordSchema":
        """Bind every dataclass field declared with :func:`column`."""

        if not dataclasses.is_dataclass(record_type):
            raise SchemaError(f"{record_type!r} is not a dataclass")
        mapping = {
            f.name: f.metadata[COLUMN_METADATA_KEY]
            for f in dataclasses.fields(record_type)
            if COLUMN_METADATA_KEY in f.metadata
        }
        return cls.from_mapping(record_type, mapping)


def _type_hints(record_type: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as exc:
        raise SchemaError(
            f"{record_type.__name__}: couldn't resolve type annotations: {exc}"
        ) from exc


def resolve_schema(target: RecordSchema | type) -> RecordSchema:
    """Accept a ready schema or a dataclass declared with :func:`column`."""

    if isinstance(target, RecordSchema):
        return target
    if isinstance(target, type):
        return RecordSchema.from_dataclass(target)
    raise RecordTypeError(
        f"expected a RecordSchema or a record type; was instead {type(target).__name__}"
    )
