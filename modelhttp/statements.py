"""Statement, declaration and program nodes of the scripting language's syntax tree."""

from __future__ import annotations

import abc
import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from modelhttp.expressions import Expression
from modelhttp.scope import Scope
from modelhttp.value import LangError, Type, Value

_DEFAULTS = {
    Type.INT: Value(0),
    Type.REAL: Value(0.0),
    Type.STRING: Value(""),
    Type.BOOLEAN: Value(False),
}

_TYPE_NAMES = {
    Type.INT: "int",
    Type.STRING: "string",
    Type.BOOLEAN: "boolean",
    Type.REAL: "real",
}


class Statement(abc.ABC):
    """A node that is executed for its effect."""

    @abc.abstractmethod
    def execute(self, scope: Scope) -> None:
        """Run the statement in the given scope."""

    @abc.abstractmethod
    def __str__(self) -> str:
        """Render the statement as source-like text."""


class Declaration(abc.ABC):
    """A node that introduces a name into a scope."""

    @abc.abstractmethod
    def declare(self, scope: Scope) -> None:
        """Add the declared name to the given scope."""

    @abc.abstractmethod
    def __str__(self) -> str:
        """Render the declaration as source-like text."""


@dataclass
class VariableDecl(Declaration):
    """A typed variable with an optional initializer."""

    name: str
    type: Type
    initializer: Optional[Expression] = None

    def declare(self, scope: Scope) -> None:
        if self.initializer is not None:
            value = self.initializer.evaluate(scope)
            if self.type in (Type.INT, Type.STRING) and value.type is not self.type:
                raise LangError(
                    f"Type mismatch in initialization of variable '{self.name}'"
                )
            scope.declare(self.name, self.type, value)
            return
        try:
            default = _DEFAULTS[self.type]
        except KeyError:
            raise LangError(f"Unknown type for variable '{self.name}'") from None
        scope.declare(self.name, self.type, default)

    def __str__(self) -> str:
        type_name = _TYPE_NAMES.get(self.type, "unknown")
        init = f" = {self.initializer}" if self.initializer is not None else ""
        return f"{type_name} {self.name}{init}"


@dataclass
class CompoundStatement(Statement):
    """A braced block of statements run in order."""

    statements: List[Statement] = field(default_factory=list)

    def execute(self, scope: Scope) -> None:
        for statement in self.statements:
            statement.execute(scope)

    def __str__(self) -> str:
        body = "".join(f"  {statement}\n" for statement in self.statements)
        return "{\n" + body + "}"


@dataclass
class IfStatement(Statement):
    condition: Expression
    then_branch: Statement
    else_branch: Optional[Statement] = None

    def execute(self, scope: Scope) -> None:
        if self.condition.evaluate(scope).as_boolean():
            self.then_branch.execute(scope)
        elif self.else_branch is not None:
            self.else_branch.execute(scope)

    def __str__(self) -> str:
        tail = f" else {self.else_branch}" if self.else_branch is not None else ""
        return f"if ({self.condition}) {self.then_branch}{tail}"


@dataclass
class WhileStatement(Statement):
    condition: Expression
    body: Statement

    def execute(self, scope: Scope) -> None:
        while self.condition.evaluate(scope).as_boolean():
            self.body.execute(scope)

    def __str__(self) -> str:
        return f"while ({self.condition}) {self.body}"


@dataclass
class DoWhileStatement(Statement):
    """A loop whose body runs before the condition is first checked."""

    condition: Expression
    body: Statement

    def execute(self, scope: Scope) -> None:
        while True:
            self.body.execute(scope)
            if not self.condition.evaluate(scope).as_boolean():
                break

    def __str__(self) -> str:
        return f"do {self.body} while ({self.condition});"


@dataclass
class ForStatement(Statement):
    """A loop with optional init, condition and update expressions."""

    init: Optional[Expression]
    cond: Optional[Expression]
    update: Optional[Expression]
    body: Statement

    def execute(self, scope: Scope) -> None:
        if self.init is not None:
            self.init.evaluate(scope)
        while self.cond is None or self.cond.evaluate(scope).as_boolean():
            self.body.execute(scope)
            if self.update is not None:
                self.update.evaluate(scope)

    def __str__(self) -> str:
        init = str(self.init) if self.init is not None else ""
        cond = str(self.cond) if self.cond is not None else ""
        update = str(self.update) if self.update is not None else ""
        return f"for ({init}; {cond}; {update}) {self.body}"


@dataclass
class WriteStatement(Statement):
    """Sends each expression's text to the scope's output, without separators."""

    expressions: List[Expression] = field(default_factory=list)

    def execute(self, scope: Scope) -> None:
        for expression in self.expressions:
            scope.write(str(expression.evaluate(scope)))

    def __str__(self) -> str:
        return "write(" + ", ".join(str(e) for e in self.expressions) + ");"


@dataclass
class ReadStatement(Statement):
    """Reads one line of input into a variable, converted to its current type."""

    var_name: str
    stream: Optional[TextIO] = field(default=None, compare=False, repr=False)

    def _read_line(self) -> str:
        stream = self.stream if self.stream is not None else sys.stdin
        return stream.readline().removesuffix("\n")

    def execute(self, scope: Scope) -> None:
        text = self._read_line()
        kind = scope.get(self.var_name).type

        if kind is Type.INT:
            try:
                value = Value.from_string(Type.INT, text)
            except LangError:
                raise LangError(
                    f"Invalid integer input for variable '{self.var_name}'"
                ) from None
        elif kind is Type.REAL:
            try:
                value = Value.from_string(Type.REAL, text)
            except LangError:
                raise LangError(
                    f"Invalid real number input for variable '{self.var_name}'"
                ) from None
        elif kind is Type.STRING:
            value = Value(text)
        elif kind is Type.BOOLEAN:
            if text in ("true", "1"):
                value = Value(True)
            elif text in ("false", "0"):
                value = Value(False)
            else:
                raise LangError(f"Invalid boolean input for variable '{self.var_name}'")
        else:
            raise LangError("Unsupported type for read operation")

        scope.set(self.var_name, value)

    def __str__(self) -> str:
        return f"read({self.var_name});"


@dataclass
class ExpressionStatement(Statement):
    """Evaluates an expression and discards its value."""

    expr: Expression

    def execute(self, scope: Scope) -> None:
        self.expr.evaluate(scope)

    def __str__(self) -> str:
        return f"{self.expr};"


@dataclass
class Program:
    """Declarations followed by statements, run in one global scope."""

    declarations: List[Declaration] = field(default_factory=list)
    statements: List[Statement] = field(default_factory=list)

    def execute(self, scope: Scope) -> None:
        for declaration in self.declarations:
            declaration.declare(scope)
        for statement in self.statements:
            statement.execute(scope)

    def __str__(self) -> str:
        parts = ["program {\n"]
        parts.extend(f"  {declaration};\n" for declaration in self.declarations)
        parts.extend(f"  {statement}\n" for statement in self.statements)
        parts.append("}")
        return "".join(parts)