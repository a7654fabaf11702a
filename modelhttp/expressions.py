"""Expression nodes of the scripting language's syntax tree."""

from __future__ import annotations

import abc
import operator
import os
from dataclasses import dataclass
from typing import Callable, Dict

from modelhttp.lexer import TokenType
from modelhttp.scope import Scope
from modelhttp.value import INT_MIN, LangError, Type, Value

_INT_SPAN = 2**64
_NUMERIC = (Type.INT, Type.REAL)


def _wrap(number: int) -> int:
    """Reduce an integer to the signed 64-bit range, wrapping on overflow."""
    return (number - INT_MIN) % _INT_SPAN + INT_MIN


def _truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _truncating_mod(left: int, right: int) -> int:
    remainder = abs(left) % abs(right)
    return -remainder if left < 0 else remainder


_ARITHMETIC: Dict[TokenType, Callable] = {
    TokenType.PLUS: operator.add,
    TokenType.MINUS: operator.sub,
    TokenType.MULTIPLY: operator.mul,
    TokenType.DIVIDE: operator.truediv,
}

_COMPARISON: Dict[TokenType, Callable] = {
    TokenType.LESS: operator.lt,
    TokenType.GREATER: operator.gt,
    TokenType.LESSEQUAL: operator.le,
    TokenType.GREATEREQUAL: operator.ge,
    TokenType.EQUAL: operator.eq,
    TokenType.NOTEQUAL: operator.ne,
}

_LOGICAL: Dict[TokenType, Callable] = {
    TokenType.AND: lambda a, b: a and b,
    TokenType.OR: lambda a, b: a or b,
}

_BINARY_SYMBOLS: Dict[TokenType, str] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.MULTIPLY: "*",
    TokenType.DIVIDE: "/",
    TokenType.MODULO: "%",
    TokenType.LESS: "<",
    TokenType.GREATER: ">",
    TokenType.LESSEQUAL: "<=",
    TokenType.GREATEREQUAL: ">=",
    TokenType.EQUAL: "==",
    TokenType.NOTEQUAL: "!=",
    TokenType.AND: "and",
    TokenType.OR: "or",
}

_UNARY_SYMBOLS: Dict[TokenType, str] = {
    TokenType.MINUS: "-",
    TokenType.NOT: "not",
}


class Expression(abc.ABC):
    """A node that evaluates to a value."""

    @abc.abstractmethod
    def evaluate(self, scope: Scope) -> Value:
        """Compute the value of this expression in the given scope."""

    @abc.abstractmethod
    def __str__(self) -> str:
        """Render the expression as source-like text."""


@dataclass(frozen=True)
class Identifier(Expression):
    """A reference to a declared variable."""

    name: str

    def evaluate(self, scope: Scope) -> Value:
        return scope.get(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class EnvironmentVariable(Expression):
    """A reference to a process environment variable; unset ones read as ""."""

    name: str

    def evaluate(self, scope: Scope) -> Value:
        return Value(os.environ.get(self.name, ""))

    def __str__(self) -> str:
        return "$" + self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def evaluate(self, scope: Scope) -> Value:
        return Value(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RealLiteral(Expression):
    value: float

    def evaluate(self, scope: Scope) -> Value:
        return Value(float(self.value))

    def __str__(self) -> str:
        return f"{self.value:f}"


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def evaluate(self, scope: Scope) -> Value:
        return Value(self.value)

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def evaluate(self, scope: Scope) -> Value:
        return Value(bool(self.value))

    def __str__(self) -> str:
        return "true" if self.value else "false"


def _numeric(op: Callable, left: Value, right: Value, int_op: Callable) -> Value:
    if left.type is Type.INT and right.type is Type.INT:
        return Value(_wrap(int_op(left.data, right.data)))
    return Value(op(float(left.data), float(right.data)))


@dataclass(frozen=True)
class BinaryOp(Expression):
    """An infix operation; both operands are always evaluated."""

    op: TokenType
    left: Expression
    right: Expression

    def evaluate(self, scope: Scope) -> Value:
        left = self.left.evaluate(scope)
        right = self.right.evaluate(scope)
        op = self.op
        numeric = left.type in _NUMERIC and right.type in _NUMERIC
        same = left.type is right.type

        if op is TokenType.DIVIDE:
            # The divisor must pass both an integer and a real zero check.
            if right.as_int() == 0 or right.as_real() == 0.0:
                raise LangError("Division by zero")
        if op in _ARITHMETIC:
            if numeric:
                int_op = _truncating_div if op is TokenType.DIVIDE else _ARITHMETIC[op]
                return _numeric(_ARITHMETIC[op], left, right, int_op)
            if op is TokenType.PLUS and same and left.type is Type.STRING:
                return Value(left.data + right.data)
        elif op is TokenType.MODULO:
            if left.type is Type.INT and right.type is Type.INT:
                if right.data == 0:
                    raise LangError("Modulo by zero")
                return Value(_wrap(_truncating_mod(left.data, right.data)))
        elif op in _COMPARISON:
            compare = _COMPARISON[op]
            if numeric:
                if same and left.type is Type.INT:
                    return Value(compare(left.data, right.data))
                return Value(compare(float(left.data), float(right.data)))
            if same and left.type is Type.STRING:
                return Value(compare(left.data, right.data))
            if (
                same
                and left.type is Type.BOOLEAN
                and op in (TokenType.EQUAL, TokenType.NOTEQUAL)
            ):
                return Value(compare(left.data, right.data))
        elif op in _LOGICAL:
            if same and left.type is Type.BOOLEAN:
                return Value(bool(_LOGICAL[op](left.data, right.data)))

        raise LangError("Unsupported binary operation between types")

    def __str__(self) -> str:
        symbol = _BINARY_SYMBOLS.get(self.op, "??")
        return f"({self.left} {symbol} {self.right})"


@dataclass(frozen=True)
class UnaryOp(Expression):
    """A prefix negation or logical not."""

    op: TokenType
    expr: Expression

    def evaluate(self, scope: Scope) -> Value:
        value = self.expr.evaluate(scope)
        if self.op is TokenType.MINUS:
            if value.type is Type.INT:
                return Value(_wrap(-value.data))
            if value.type is Type.REAL:
                return Value(-value.data)
        elif self.op is TokenType.NOT and value.type is Type.BOOLEAN:
            return Value(not value.data)
        raise LangError("Unsupported unary operation for type")

    def __str__(self) -> str:
        return f"{_UNARY_SYMBOLS.get(self.op, '??')} {self.expr}"


@dataclass(frozen=True)
class Assignment(Expression):
    """Stores a value into an existing variable and yields that value."""

    name: str
    expr: Expression

    def evaluate(self, scope: Scope) -> Value:
        value = self.expr.evaluate(scope)
        scope.set(self.name, value)
        return value

    def __str__(self) -> str:
        return f"{self.name} = {self.expr}"