"""
RESPONSIBILITIES
- Provide the small domain value types that spreadsheets carry as loose text.
- Define the coercion contract (scan_string / display text / code text) shared by them.
PROCESS OVERVIEW
1. scan_string() parses cell text in place, fully overwriting the previous value.
2. str() renders canonical display text; code() renders machine-stable text.
3. Types offering enum() get that rendering on the write path instead of str().
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

from .errors import ScanError

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_NON_DIGITS_RE = re.compile(r"[^0-9]+")

T = TypeVar("T", bound="TextValue")


@runtime_checkable
class TextValue(Protocol):
    """Coercion contract: parse from text, display via ``str()``, and ``code()``."""

    def scan_string(self, text: str) -> None:
        ...

    def code(self) -> str:
        ...


@runtime_checkable
class Enumerated(Protocol):
    """Values with an enumeration-code rendering preferred over display text."""

    def enum(self) -> str:
        ...


def parse_int(text: str) -> int:
    """Parse a base-10 integer with an optional sign."""

    if not _INT_RE.fullmatch(text):
        raise ScanError(f"invalid integer: {text!r}")
    return int(text, 10)


def parse_float(text: str) -> float:
    """Parse plain decimal or exponent notation; no underscores, nan or inf."""

    if not _DECIMAL_RE.fullmatch(text):
        raise ScanError(f"invalid decimal: {text!r}")
    return float(text)


def format_float(value: float) -> str:
    """Render a float with the shortest text that reads back to the same value."""

    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


def from_text(cls: type[T], text: str) -> T:
    """Allocate a zero value of *cls* and scan *text* into it."""

    value = cls()
    value.scan_string(text)
    return value


@dataclass(slots=True)
class Money:
    """Currency amount; display text always carries two decimal places."""

    amount: float = 0.0

    @classmethod
    def parse(cls, text: str) -> "Money":
        return from_text(cls, text)

    def scan_string(self, text: str) -> None:
        cleaned = text.replace("$", "").replace(",", "").replace(" ", "").strip()
        if cleaned == "":
            self.amount = 0.0
            return
        try:
            self.amount = parse_float(cleaned)
        except ScanError as exc:
            raise ScanError(f"Money.scan_string: {exc}") from exc

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def __float__(self) -> float:
        return float(self.amount)

    def code(self) -> str:
        return format_float(self.amount)

    def round(self) -> str:
        return f"{self.amount:.2f}"


def _strip_unit(text: str, long_suffix: str, short_suffix: str) -> str:
    lowered = text.lower().removesuffix(long_suffix).removesuffix(short_suffix)
    return lowered.strip("\t -")


@dataclass(slots=True)
class Years:
    """Whole number of years, e.g. ``"5 years"``, ``"5y"`` or ``"5"``."""

    count: int = 0

    @classmethod
    def parse(cls, text: str) -> "Years":
        return from_text(cls, text)

    def scan_string(self, text: str) -> None:
        try:
            self.count = parse_int(_strip_unit(text, "years", "y"))
        except ScanError as exc:
            raise ScanError(f"Years.scan_string: {exc}") from exc

    def __str__(self) -> str:
        return f"{self.count} years"

    def __int__(self) -> int:
        return self.count

    def code(self) -> str:
        return str(self.count)

    def enum(self) -> str:
        return f"{self.count}-years"

    def months(self) -> "Months":
        return Months(self.count * 12)


@dataclass(slots=True)
class Months:
    """Whole number of months; empty text reads as zero."""

    count: int = 0

    @classmethod
    def parse(cls, text: str) -> "Months":
        return from_text(cls, text)

    def scan_string(self, text: str) -> None:
        stripped = _strip_unit(text, "months", "m")
        if stripped == "":
            self.count = 0
            return
        try:
            self.count = parse_int(stripped)
        except ScanError as exc:
            raise ScanError(f"Months.scan_string: {exc}") from exc

    def __str__(self) -> str:
        return f"{self.count} months"

    def __int__(self) -> int:
        return self.count

    def code(self) -> str:
        return str(self.count)

    def enum(self) -> str:
        return f"{self.count}-months"


_TRUE_WORDS = frozenset({"yes", "y", "true"})
_FALSE_WORDS = frozenset({"no", "n", "false", ""})


@dataclass(slots=True)
class YesNo:
    """Boolean written as a yes/no word."""

    value: bool = False

    @classmethod
    def parse(cls, text: str) -> "YesNo":
        return from_text(cls, text)

    def scan_string(self, text: str) -> None:
        word = text.strip().lower()
        if word in _TRUE_WORDS:
            self.value = True
        elif word in _FALSE_WORDS:
            self.value = False
        else:
            raise ScanError(f"can't scan {text!r} into YesNo")

    def __str__(self) -> str:
        return "yes" if self.value else "no"

    def __bool__(self) -> bool:
        return self.value

    def code(self) -> str:
        return "true" if self.value else "false"


@dataclass(slots=True)
class Range:
    """Inclusive integer range written as ``"10-20"``."""

    a: int = 0
    b: int = 0

    @classmethod
    def parse(cls, text: str) -> "Range":
        return from_text(cls, text)

    def scan_string(self, text: str) -> None:
        parts = _NON_DIGITS_RE.sub(" ", text).split(" ")
        if len(parts) != 2:
            raise ScanError(
                f"Range.scan_string: expected two components; instead got {len(parts)} "
                f"({parts!r} from {text!r})"
            )
        try:
            self.a = parse_int(parts[0])
            self.b = parse_int(parts[1])
        except ScanError as exc:
            raise ScanError(f"Range.scan_string: {exc}") from exc

    def __str__(self) -> str:
        return f"{self.a}-{self.b}"

    def code(self) -> str:
        return str(self)


__all__ = [
    "TextValue",
    "Enumerated",
    "Money",
    "Years",
    "Months",
    "YesNo",
    "Range",
    "parse_int",
    "parse_float",
    "format_float",
    "from_text",
]
