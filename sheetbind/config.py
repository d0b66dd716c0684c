"""Binding configuration loaded from YAML.

A binding file names the sheet, maps record fields to column names and
optionally assigns each field a kind, so a sheet can be bound without writing
a record class::

    sheet: Loans
    columns:
      amount: Loan Amount
      term: Term
    types:
      amount: money
      term: years?
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError, UnsupportedTypeError
from .header import HEADER_SEARCH_LIMIT
from .scan import Kind
from .schema import RecordSchema
from .values import Money, Months, Range, Years, YesNo

KIND_NAMES: Dict[str, type] = {
    "text": str,
    "int": int,
    "float": float,
    "money": Money,
    "years": Years,
    "months": Months,
    "yesno": YesNo,
    "range": Range,
}

DEFAULT_KIND = "text?"


def parse_kind(name: str) -> Kind:
    """Translate a kind name such as ``money`` or ``years?`` into a Kind."""

    token = name.strip().lower()
    nullable = token.endswith("?")
    target = KIND_NAMES.get(token.rstrip("?"))
    if target is None:
        raise ConfigError(
            f"unknown column type {name!r}; expected one of {', '.join(sorted(KIND_NAMES))}"
        )
    return Kind.of(Optional[target] if nullable else target)


def _annotation(kind: Kind) -> Any:
    if kind.value_type is not None:
        base: Any = kind.value_type
    else:
        base = {"text": str, "int": int, "float": float}[kind.shape.value]
    return Optional[base] if kind.nullable else base


class BindingConfig(BaseModel):
    """Validated binding file model."""

    model_config = ConfigDict(extra="forbid")

    sheet: str
    header_search_limit: int = Field(default=HEADER_SEARCH_LIMIT, ge=0)
    columns: Dict[str, str]
    types: Dict[str, str] = Field(default_factory=dict)

    @field_validator("columns")
    @classmethod
    def _columns_are_fields(cls, value: Dict[str, str]) -> Dict[str, str]:
        if not value:
            raise ValueError("at least one column is required")
        for field_name in value:
            if not field_name.isidentifier():
                raise ValueError(f"{field_name!r} is not a valid field name")
        return value

    @model_validator(mode="after")
    def _types_match_columns(self) -> "BindingConfig":
        unknown = sorted(set(self.types) - set(self.columns))
        if unknown:
            raise ValueError(f"types given for unbound fields: {', '.join(unknown)}")
        return self

    def kinds(self) -> Dict[str, Kind]:
        return {
            field_name: parse_kind(self.types.get(field_name, DEFAULT_KIND))
            for field_name in self.columns
        }

    def to_schema(self, record_type: Optional[type] = None) -> RecordSchema:
        """Build a schema; without *record_type* a record dataclass is generated."""

        kinds = self.kinds()
        if record_type is None:
            record_type = dataclasses.make_dataclass(
                "Record",
                [
                    (field_name, _annotation(kind), dataclasses.field(default=None))
                    for field_name, kind in kinds.items()
                ],
            )
        return RecordSchema.from_mapping(record_type, self.columns, kinds=kinds)


def load_binding_config(path: Path) -> BindingConfig:
    """Load and validate a binding YAML file.

    Raises:
        ConfigError: When the file is missing, malformed, or fails validation.
    """

    if not path.exists():
        raise ConfigError(f"binding file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError("binding file must be a mapping")
    try:
        config = BindingConfig.model_validate(payload)
        config.kinds()
    except ValidationError as exc:
        raise ConfigError(f"invalid binding file {path}: {exc}") from exc
    except UnsupportedTypeError as exc:
        raise ConfigError(str(exc)) from exc
    return config
