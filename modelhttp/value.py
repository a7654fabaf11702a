"""Typed runtime values of the scripting language."""

from __future__ import annotations

import enum
import math
import re
from typing import Union

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_SPACE = r"[ \t\n\v\f\r]*"
_INT_PREFIX = re.compile(_SPACE + r"([+-]?[0-9]+)")
_REAL_PREFIX = re.compile(
    _SPACE
    + r"([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    + r"|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

Data = Union[None, bool, int, float, str]


class LangError(RuntimeError):
    """Raised when a script fails to lex, parse or run."""


class Type(enum.Enum):
    """The types a value of the language can have."""

    INT = "int"
    STRING = "string"
    BOOLEAN = "boolean"
    REAL = "real"
    VOID = "void"


def _parse_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise LangError(f"Invalid integer: {text!r}")
    number = int(match.group(1))
    if not INT_MIN <= number <= INT_MAX:
        raise LangError(f"Integer out of range: {text!r}")
    return number


def _parse_real(text: str) -> float:
    match = _REAL_PREFIX.match(text)
    if match is None:
        raise LangError(f"Invalid real number: {text!r}")
    literal = match.group(1)
    number = float(literal)
    if math.isinf(number) and "inf" not in literal.lower():
        raise LangError(f"Real number out of range: {text!r}")
    return number


def _type_of(data: Data) -> Type:
    if data is None:
        return Type.VOID
    if isinstance(data, bool):
        return Type.BOOLEAN
    if isinstance(data, int):
        return Type.INT
    if isinstance(data, float):
        return Type.REAL
    if isinstance(data, str):
        return Type.STRING
    raise TypeError(f"Unsupported value data: {data!r}")


class Value:
    """An immutable value tagged with its language type."""

    __slots__ = ("_type", "_data")

    def __init__(self, data: Data = None) -> None:
        self._type = _type_of(data)
        self._data = data

    @property
    def type(self) -> Type:
        return self._type

    @property
    def data(self) -> Data:
        return self._data

    def _expect(self, kind: Type, message: str):
        if self._type is not kind:
            raise LangError(message)
        return self._data

    def as_int(self) -> int:
        return self._expect(Type.INT, "Value is not an integer")

    def as_real(self) -> float:
        return self._expect(Type.REAL, "Value is not a real number")

    def as_string(self) -> str:
        return self._expect(Type.STRING, "Value is not a string")

    def as_boolean(self) -> bool:
        return self._expect(Type.BOOLEAN, "Value is not a boolean")

    def __str__(self) -> str:
        if self._type is Type.INT:
            return str(self._data)
        if self._type is Type.REAL:
            return f"{self._data:f}"
        if self._type is Type.STRING:
            return self._data
        if self._type is Type.BOOLEAN:
            return "true" if self._data else "false"
        return "void"

    def __repr__(self) -> str:
        return f"Value({self._data!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._type is other._type and self._data == other._data

    def __hash__(self) -> int:
        return hash((self._type, self._data))

    @classmethod
    def from_string(cls, type_: Type, text: str) -> "Value":
        """Convert text to a value of the given type."""
        try:
            if type_ is Type.INT:
                return cls(_parse_int(text))
            if type_ is Type.REAL:
                return cls(_parse_real(text))
            if type_ is Type.STRING:
                return cls(text)
            if type_ is Type.BOOLEAN:
                if text == "true":
                    return cls(True)
                if text == "false":
                    return cls(False)
                raise LangError("Invalid boolean value")
            raise LangError("Unsupported type for conversion")
        except LangError as exc:
            raise LangError("Failed to convert string to value") from exc