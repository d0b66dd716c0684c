"""Custom exceptions used across sheetbind."""

from __future__ import annotations

from typing import Sequence


class SheetBindError(RuntimeError):
    """Base error for the package."""


class ConfigError(SheetBindError):
    """Binding configuration could not be loaded or validated."""


class SchemaError(SheetBindError):
    """Raised when a record schema declaration is invalid."""


class SheetNotFoundError(SheetBindError, KeyError):
    """Raised when no worksheet title matches the requested name."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"couldn't find sheet {name!r}; options were {self.available!r}")

    def __str__(self) -> str:
        return self.args[0]


class HeaderIncompleteError(SheetBindError):
    """Raised when declared columns are missing from the header search window."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"couldn't find some required columns: {', '.join(self.missing)}")


class RecordTypeError(SheetBindError, TypeError):
    """A value of the wrong shape was passed to an adapter or bulk operation."""


class ScanError(SheetBindError, ValueError):
    """Cell text could not be coerced into the destination type."""


class UnsupportedTypeError(SheetBindError, TypeError):
    """A field type has no read or write strategy."""
